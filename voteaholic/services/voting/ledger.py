"""Append-only vote ledger. Nothing here commits; callers own the transaction."""

from sqlalchemy import func

from voteaholic.extensions import db
from voteaholic.models import Candidate, Election, Vote
from voteaholic.models.base import utcnow


def find_vote(election_id, voter_id):
    return Vote.query.filter_by(election_id=election_id, voter_id=voter_id).first()


def get_vote(vote_id):
    return db.session.get(Vote, vote_id)


def append_vote(election_id, candidate_id, voter_id):
    vote = Vote(
        election_id=election_id,
        candidate_id=candidate_id,
        voter_id=voter_id,
        voted_at=utcnow(),
    )
    db.session.add(vote)
    # Flush so the (election_id, voter_id) constraint fires inside the caller's
    # transaction rather than at commit.
    db.session.flush()
    return vote


def remove_vote(vote):
    db.session.delete(vote)
    db.session.flush()


def purge_votes(election_id=None):
    query = Vote.query
    if election_id is not None:
        query = query.filter(Vote.election_id == election_id)
    return query.delete(synchronize_session=False)


def purge_candidate_votes(candidate_id):
    voter_ids = [
        voter_id
        for (voter_id,) in db.session.query(Vote.voter_id).filter(
            Vote.candidate_id == candidate_id
        )
    ]
    Vote.query.filter(Vote.candidate_id == candidate_id).delete(
        synchronize_session=False
    )
    return voter_ids


def count_votes(election_id=None, candidate_id=None):
    query = db.session.query(func.count(Vote.id))
    if election_id is not None:
        query = query.filter(Vote.election_id == election_id)
    if candidate_id is not None:
        query = query.filter(Vote.candidate_id == candidate_id)
    return query.scalar() or 0


def counts_by_candidate(election_id=None):
    query = db.session.query(Vote.candidate_id, func.count(Vote.id)).group_by(
        Vote.candidate_id
    )
    if election_id is not None:
        query = query.filter(Vote.election_id == election_id)
    return dict(query.all())


def list_votes(election_id=None):
    query = (
        db.session.query(Vote, Candidate.name, Candidate.vote_count, Election.title)
        .outerjoin(Candidate, Vote.candidate_id == Candidate.id)
        .outerjoin(Election, Vote.election_id == Election.id)
    )
    if election_id is not None:
        query = query.filter(Vote.election_id == election_id)

    rows = []
    for vote, name, vote_count, election_title in query.order_by(Vote.voted_at.desc()):
        row = vote.to_dict()
        row["name"] = name
        row["voteCount"] = vote_count
        row["election"] = election_title
        rows.append(row)
    return rows
