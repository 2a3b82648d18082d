from voteaholic.extensions import db
from voteaholic.models.base import new_id


class Voter(db.Model):
    """Per-election voter status, a convenience cache of ledger membership."""

    __tablename__ = "voters"
    __table_args__ = (
        db.UniqueConstraint("election_id", "user_id", name="uq_voters_election_user"),
    )

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    election_id = db.Column(
        db.String(36),
        db.ForeignKey("elections.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id = db.Column(
        db.String(36),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    has_voted = db.Column(db.Boolean, nullable=False, default=False)
    voted_at = db.Column(db.DateTime, nullable=True)

    def to_dict(self):
        return {
            "id": self.id,
            "electionId": self.election_id,
            "userId": self.user_id,
            "hasVoted": self.has_voted,
            "votedAt": self.voted_at.isoformat() if self.voted_at else None,
        }
