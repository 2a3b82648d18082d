from voteaholic.extensions import db
from voteaholic.models.base import new_id, utcnow


class Candidate(db.Model):
    __tablename__ = "candidates"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    election_id = db.Column(
        db.String(36),
        db.ForeignKey("elections.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = db.Column(db.String(200), nullable=False)
    party = db.Column(db.String(200), nullable=False, default="")
    bio = db.Column(db.Text, nullable=False, default="")
    image = db.Column(db.String(500), nullable=False, default="")
    # Denormalised count of ledger rows for this candidate.
    vote_count = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    votes = db.relationship(
        "Vote",
        backref="candidate",
        lazy=True,
        cascade="all",
        passive_deletes=True,
    )

    def to_dict(self):
        return {
            "id": self.id,
            "electionId": self.election_id,
            "name": self.name,
            "party": self.party,
            "bio": self.bio,
            "image": self.image,
            "voteCount": self.vote_count,
        }
