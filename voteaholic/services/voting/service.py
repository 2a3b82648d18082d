from flask import current_app
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from voteaholic.errors import (
    CandidateNotFound,
    DuplicateVote,
    ElectionNotFound,
    InternalError,
    UserNotFound,
    ValidationError,
    VoteNotFound,
)
from voteaholic.extensions import db
from voteaholic.models import Candidate, Election, User, Voter
from voteaholic.services.unit_of_work import unit_of_work
from voteaholic.services.voting import gate, ledger, tally, voter_status

VOTE_UNIQUE_CONSTRAINT = "uq_votes_election_voter"


def _is_duplicate_vote(exc):
    detail = str(exc.orig).lower()
    return (
        VOTE_UNIQUE_CONSTRAINT in detail
        or "votes.election_id, votes.voter_id" in detail
    )


def _require_ids(**ids):
    missing = [name for name, value in ids.items() if not str(value or "").strip()]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def cast_vote(election_id, candidate_id, voter_id):
    """Record one vote and bump the candidate's count in a single transaction.

    The unique (election_id, voter_id) constraint is the real guard against
    double voting. The lookup before the insert only turns the common case
    into a clean DuplicateVote without touching the constraint.
    """
    _require_ids(electionId=election_id, candidateId=candidate_id, voterId=voter_id)

    with unit_of_work("casting a vote"):
        gate.can_accept_vote(election_id, lock=True)

        if ledger.find_vote(election_id, voter_id) is not None:
            raise DuplicateVote()

        if db.session.get(User, voter_id) is None:
            raise UserNotFound("Voter not found")

        candidate = Candidate.query.filter_by(id=candidate_id, election_id=election_id).first()
        if candidate is None:
            raise CandidateNotFound("Candidate not found in this election")

        try:
            vote = ledger.append_vote(election_id, candidate_id, voter_id)
        except IntegrityError as exc:
            if _is_duplicate_vote(exc):
                current_app.logger.info(
                    "Concurrent duplicate vote rejected for voter %s in election %s",
                    voter_id,
                    election_id,
                )
                raise DuplicateVote() from exc
            current_app.logger.exception("Vote insert failed for election %s", election_id)
            raise InternalError() from exc

        gate.confirm_still_active(election_id)
        tally.increment(election_id, candidate_id)
        voter_status.mark_voted(election_id, voter_id, vote.voted_at)

    current_app.logger.info(
        "Vote %s recorded in election %s for candidate %s", vote.id, election_id, candidate_id
    )
    return vote


def clear_votes(election_id=None):
    """Wipe the ledger, scoped to one election or everywhere. Irreversible."""
    with unit_of_work("clearing votes"):
        removed = ledger.purge_votes(election_id)
        tally.reset_counts(election_id)
        voter_status.reset(election_id)

    if election_id is None:
        current_app.logger.warning("All votes cleared (%d removed)", removed)
    else:
        current_app.logger.warning(
            "Votes cleared for election %s (%d removed)", election_id, removed
        )
    return removed


def delete_vote(vote_id):
    with unit_of_work("deleting a vote"):
        vote = ledger.get_vote(vote_id)
        if vote is None:
            raise VoteNotFound()

        election_id = vote.election_id
        candidate_id = vote.candidate_id
        voter_id = vote.voter_id

        ledger.remove_vote(vote)
        tally.decrement(candidate_id)
        voter_status.reset(election_id, user_ids=[voter_id])

    current_app.logger.info("Vote %s deleted from election %s", vote_id, election_id)
    return vote_id


def has_voted(election_id, voter_id):
    return voter_status.has_voted(election_id, voter_id)


def get_results(election_id):
    return tally.get_results(election_id)


def audit_tally(election_id=None):
    drift = tally.audit_tally(election_id)
    for row in drift:
        current_app.logger.warning(
            "Tally drift on candidate %s: stored %d, ledger %d",
            row["id"],
            row["stored"],
            row["actual"],
        )
    return drift


def recount_tally(election_id=None):
    """Rewrite stored counts from the ledger and return what was wrong."""
    with unit_of_work("recounting votes"):
        drift = audit_tally(election_id)
        if drift:
            tally.recount_counts(election_id)
    return drift


def register_voter(election_id, user_id):
    _require_ids(electionId=election_id, userId=user_id)

    with unit_of_work("registering a voter"):
        if db.session.get(Election, election_id) is None:
            raise ElectionNotFound()
        if db.session.get(User, user_id) is None:
            raise UserNotFound()

        status = voter_status.get_status(election_id, user_id)
        if status is None:
            status = Voter(
                election_id=election_id,
                user_id=user_id,
                has_voted=ledger.find_vote(election_id, user_id) is not None,
            )
            db.session.add(status)
    return status


def voting_stats():
    by_status = dict(
        db.session.query(Election.status, func.count(Election.id))
        .group_by(Election.status)
        .all()
    )
    return {
        "users": User.query.count(),
        "elections": sum(by_status.values()),
        "electionsByStatus": by_status,
        "candidates": Candidate.query.count(),
        "votes": ledger.count_votes(),
    }
