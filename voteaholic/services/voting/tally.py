from sqlalchemy import func, select

from voteaholic.errors import CandidateNotFound
from voteaholic.extensions import db
from voteaholic.models import Candidate, Election, Vote
from voteaholic.services.voting import ledger


def increment(election_id, candidate_id):
    # Single UPDATE so concurrent increments on one candidate never lose a vote.
    updated = Candidate.query.filter_by(id=candidate_id, election_id=election_id).update(
        {Candidate.vote_count: Candidate.vote_count + 1},
        synchronize_session=False,
    )
    if not updated:
        raise CandidateNotFound()


def decrement(candidate_id):
    Candidate.query.filter(
        Candidate.id == candidate_id, Candidate.vote_count > 0
    ).update(
        {Candidate.vote_count: Candidate.vote_count - 1},
        synchronize_session=False,
    )


def reset_counts(election_id=None):
    query = Candidate.query
    if election_id is not None:
        query = query.filter(Candidate.election_id == election_id)
    return query.update({Candidate.vote_count: 0}, synchronize_session=False)


def get_results(election_id):
    """Current standings. An unknown election has no candidates and no votes."""
    election = db.session.get(Election, election_id)

    candidates = (
        Candidate.query.filter_by(election_id=election_id)
        .order_by(Candidate.vote_count.desc(), Candidate.name, Candidate.id)
        .all()
    )

    total_votes = sum(candidate.vote_count for candidate in candidates)
    top_vote_count = max((candidate.vote_count for candidate in candidates), default=0)

    rows = []
    for candidate in candidates:
        count = candidate.vote_count
        percent = (count / total_votes * 100) if total_votes > 0 else 0
        rows.append(
            {
                "id": candidate.id,
                "name": candidate.name,
                "party": candidate.party,
                "voteCount": count,
                "percent": percent,
            }
        )

    winners = []
    if top_vote_count > 0:
        winners = [row["id"] for row in rows if row["voteCount"] == top_vote_count]

    return {
        "electionId": election_id,
        "status": election.status if election is not None else None,
        "candidates": rows,
        "totalVotes": total_votes,
        "winners": winners,
        "isTie": len(winners) > 1,
    }


def audit_tally(election_id=None):
    """Candidates whose stored count disagrees with the ledger."""
    actual_counts = ledger.counts_by_candidate(election_id)

    query = Candidate.query
    if election_id is not None:
        query = query.filter(Candidate.election_id == election_id)

    drift = []
    for candidate in query.order_by(Candidate.election_id, Candidate.name):
        actual = actual_counts.get(candidate.id, 0)
        if candidate.vote_count != actual:
            drift.append(
                {
                    "id": candidate.id,
                    "electionId": candidate.election_id,
                    "name": candidate.name,
                    "stored": candidate.vote_count,
                    "actual": actual,
                }
            )
    return drift


def recount_counts(election_id=None):
    ledger_count = (
        select(func.count(Vote.id))
        .where(Vote.candidate_id == Candidate.id)
        .scalar_subquery()
    )
    query = Candidate.query
    if election_id is not None:
        query = query.filter(Candidate.election_id == election_id)
    return query.update({Candidate.vote_count: ledger_count}, synchronize_session=False)
