from datetime import datetime

from flask import current_app

from voteaholic.errors import (
    CandidateNotFound,
    ElectionNotFound,
    InvalidStatusTransition,
    ValidationError,
)
from voteaholic.extensions import db
from voteaholic.models import Candidate, Election
from voteaholic.models.election import (
    STATUS_ACTIVE,
    STATUS_DRAFT,
    STATUS_TRANSITIONS,
    STATUSES,
)
from voteaholic.services.security import require_admin
from voteaholic.services.unit_of_work import unit_of_work
from voteaholic.services.voting import ledger, voter_status


def _parse_date(value, field):
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError(f"{field} must be an ISO 8601 date") from None


def _text(value, field):
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    return value.strip()


def _check_status(status):
    if not isinstance(status, str) or status.strip().lower() not in STATUSES:
        raise ValidationError(f"Unknown election status: {status}")
    return status.strip().lower()


def _move(election, status):
    if status == election.status:
        return
    if status not in STATUS_TRANSITIONS.get(election.status, set()):
        raise InvalidStatusTransition(election.status, status)
    election.status = status


def _get_election(election_id, lock=False):
    query = Election.query.filter_by(id=election_id)
    if lock:
        query = query.with_for_update()
    election = query.first()
    if election is None:
        raise ElectionNotFound()
    return election


def list_elections():
    return Election.query.order_by(Election.created_at.desc()).all()


def list_elections_by_creator(creator_id):
    return (
        Election.query.filter_by(creator_id=creator_id)
        .order_by(Election.created_at.desc())
        .all()
    )


def get_election(election_id):
    return _get_election(election_id)


def create_election(actor, title, description=None, start_date=None, end_date=None, status=None):
    require_admin(actor)

    title = _text(title or "", "title")
    if not title:
        raise ValidationError("Title is required")

    status = status or STATUS_DRAFT
    if status not in (STATUS_DRAFT, STATUS_ACTIVE):
        raise ValidationError("A new election must start as draft or active")

    with unit_of_work("creating an election"):
        election = Election(
            title=title,
            description=_text(description or "", "description"),
            creator_id=actor.id,
            start_date=_parse_date(start_date, "startDate"),
            end_date=_parse_date(end_date, "endDate"),
            status=status,
        )
        db.session.add(election)

    current_app.logger.info("Election %s created by %s as %s", election.id, actor.id, status)
    return election


def update_election(actor, election_id, **fields):
    """Apply field edits and an optional status change as one transaction."""
    require_admin(actor)

    status = fields.pop("status", None)
    if status is not None:
        status = _check_status(status)

    with unit_of_work("updating an election"):
        election = _get_election(election_id, lock=status is not None)

        if fields.get("title") is not None:
            title = _text(fields["title"], "title")
            if not title:
                raise ValidationError("Title is required")
            election.title = title
        if fields.get("description") is not None:
            election.description = _text(fields["description"], "description")
        if "start_date" in fields:
            election.start_date = _parse_date(fields["start_date"], "startDate")
        if "end_date" in fields:
            election.end_date = _parse_date(fields["end_date"], "endDate")

        previous = election.status
        if status is not None:
            _move(election, status)

    if election.status != previous:
        current_app.logger.info(
            "Election %s moved from %s to %s", election_id, previous, election.status
        )
    return election


def transition_election(actor, election_id, status):
    """Move an election along draft -> active -> closed.

    Re-requesting the current status is a no-op. Every other move, including
    draft -> closed and anything out of closed, is rejected.
    """
    require_admin(actor)
    status = _check_status(status)

    with unit_of_work("changing election status"):
        election = _get_election(election_id, lock=True)
        current = election.status
        _move(election, status)

    if current != status:
        current_app.logger.info("Election %s moved from %s to %s", election_id, current, status)
    return election


def delete_election(actor, election_id):
    require_admin(actor)

    with unit_of_work("deleting an election"):
        election = _get_election(election_id)
        # Candidates, votes and voter statuses go with it via ON DELETE CASCADE.
        db.session.delete(election)

    current_app.logger.info("Election %s deleted by %s", election_id, actor.id)


def list_candidates(election_id=None):
    query = Candidate.query
    if election_id is not None:
        query = query.filter_by(election_id=election_id)
    return query.order_by(Candidate.vote_count.desc(), Candidate.name).all()


def add_candidate(actor, election_id, name, party=None, bio=None, image=None):
    require_admin(actor)

    election_id = _text(election_id or "", "electionId")
    name = _text(name or "", "name")
    if not election_id or not name:
        raise ValidationError("electionId and name are required")

    with unit_of_work("adding a candidate"):
        _get_election(election_id)
        candidate = Candidate(
            election_id=election_id,
            name=name,
            party=_text(party or "", "party"),
            bio=_text(bio or "", "bio"),
            image=_text(image or "", "image"),
            vote_count=0,
        )
        db.session.add(candidate)

    return candidate


def update_candidate(actor, candidate_id, **fields):
    require_admin(actor)

    with unit_of_work("updating a candidate"):
        candidate = db.session.get(Candidate, candidate_id)
        if candidate is None:
            raise CandidateNotFound()

        if fields.get("name") is not None:
            name = _text(fields["name"], "name")
            if not name:
                raise ValidationError("name is required")
            candidate.name = name
        for field in ("party", "bio", "image"):
            if fields.get(field) is not None:
                setattr(candidate, field, _text(fields[field], field))

    return candidate


def delete_candidate(actor, candidate_id):
    """Remove a candidate together with the votes cast for it."""
    require_admin(actor)

    with unit_of_work("deleting a candidate"):
        candidate = db.session.get(Candidate, candidate_id)
        if candidate is None:
            raise CandidateNotFound()

        election_id = candidate.election_id
        voter_ids = ledger.purge_candidate_votes(candidate_id)
        voter_status.reset(election_id, user_ids=voter_ids)
        db.session.delete(candidate)

    if voter_ids:
        current_app.logger.warning(
            "Candidate %s deleted with %d votes from election %s",
            candidate_id,
            len(voter_ids),
            election_id,
        )
