from voteaholic.errors import ElectionNotActive, ElectionNotFound
from voteaholic.extensions import db
from voteaholic.models import Election
from voteaholic.models.election import STATUS_ACTIVE


def can_accept_vote(election_id, lock=False):
    """Return the election if it is open for voting, otherwise raise.

    With ``lock`` the row is read FOR SHARE so a concurrent status change has
    to wait for the caller's transaction to finish.
    """
    query = Election.query.filter_by(id=election_id)
    if lock:
        query = query.with_for_update(read=True)

    election = query.first()
    if election is None:
        raise ElectionNotFound()
    if not election.is_active:
        raise ElectionNotActive(election.status)
    return election


def confirm_still_active(election_id):
    """Re-read the status from the database once the caller holds a write lock.

    SQLite ignores FOR SHARE and only takes a lock at the first write, so a
    close committed after ``can_accept_vote`` is only visible here.
    """
    status = db.session.query(Election.status).filter_by(id=election_id).scalar()
    if status is None:
        raise ElectionNotFound()
    if status != STATUS_ACTIVE:
        raise ElectionNotActive(status)
