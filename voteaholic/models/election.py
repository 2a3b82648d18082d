from voteaholic.extensions import db
from voteaholic.models.base import new_id, utcnow

STATUS_DRAFT = "draft"
STATUS_ACTIVE = "active"
STATUS_CLOSED = "closed"
STATUSES = (STATUS_DRAFT, STATUS_ACTIVE, STATUS_CLOSED)

# Admin-driven lifecycle. Nothing leaves "closed".
STATUS_TRANSITIONS = {
    STATUS_DRAFT: {STATUS_ACTIVE},
    STATUS_ACTIVE: {STATUS_CLOSED},
    STATUS_CLOSED: set(),
}


class Election(db.Model):
    __tablename__ = "elections"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    creator_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False)
    start_date = db.Column(db.DateTime, nullable=True)
    end_date = db.Column(db.DateTime, nullable=True)
    status = db.Column(db.String(20), nullable=False, default=STATUS_DRAFT)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    creator = db.relationship("User", backref="elections", lazy=True)
    candidates = db.relationship(
        "Candidate",
        backref="election",
        lazy=True,
        cascade="all",
        passive_deletes=True,
    )
    votes = db.relationship(
        "Vote",
        backref="election",
        lazy=True,
        cascade="all",
        passive_deletes=True,
    )
    voters = db.relationship(
        "Voter",
        backref="election",
        lazy=True,
        cascade="all",
        passive_deletes=True,
    )

    @property
    def is_active(self):
        return self.status == STATUS_ACTIVE

    def to_dict(self, include_candidates=False):
        data = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "creatorId": self.creator_id,
            "startDate": self.start_date.isoformat() if self.start_date else None,
            "endDate": self.end_date.isoformat() if self.end_date else None,
            "status": self.status,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
        if include_candidates:
            ordered = sorted(
                self.candidates,
                key=lambda candidate: (-candidate.vote_count, candidate.name.lower()),
            )
            data["candidates"] = [candidate.to_dict() for candidate in ordered]
        return data
