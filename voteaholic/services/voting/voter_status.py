from voteaholic.extensions import db
from voteaholic.models import Voter
from voteaholic.services.voting import ledger


def has_voted(election_id, user_id):
    # The ledger answers this; the voters table only caches it.
    return ledger.find_vote(election_id, user_id) is not None


def get_status(election_id, user_id):
    return Voter.query.filter_by(election_id=election_id, user_id=user_id).first()


def mark_voted(election_id, user_id, voted_at):
    updated = Voter.query.filter_by(election_id=election_id, user_id=user_id).update(
        {Voter.has_voted: True, Voter.voted_at: voted_at},
        synchronize_session=False,
    )
    if not updated:
        db.session.add(
            Voter(
                election_id=election_id,
                user_id=user_id,
                has_voted=True,
                voted_at=voted_at,
            )
        )
        db.session.flush()


def reset(election_id=None, user_ids=None):
    query = Voter.query
    if election_id is not None:
        query = query.filter(Voter.election_id == election_id)
    if user_ids is not None:
        if not user_ids:
            return 0
        query = query.filter(Voter.user_id.in_(user_ids))
    return query.update(
        {Voter.has_voted: False, Voter.voted_at: None},
        synchronize_session=False,
    )
