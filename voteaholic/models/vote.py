from voteaholic.extensions import db
from voteaholic.models.base import new_id, utcnow


class Vote(db.Model):
    __tablename__ = "votes"
    __table_args__ = (
        db.UniqueConstraint("election_id", "voter_id", name="uq_votes_election_voter"),
    )

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    election_id = db.Column(
        db.String(36),
        db.ForeignKey("elections.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    candidate_id = db.Column(
        db.String(36),
        db.ForeignKey("candidates.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    voter_id = db.Column(
        db.String(36),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    voted_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "electionId": self.election_id,
            "candidateId": self.candidate_id,
            "voterId": self.voter_id,
            "votedAt": self.voted_at.isoformat() if self.voted_at else None,
        }
