from contextlib import contextmanager

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from voteaholic.errors import InternalError, VotingError
from voteaholic.extensions import db


@contextmanager
def unit_of_work(action):
    """Commit everything done inside the block, or nothing.

    Domain errors roll back and propagate unchanged. Storage errors roll back,
    get logged with their detail, and surface as a generic InternalError.
    """
    try:
        yield db.session
        db.session.commit()
    except VotingError:
        db.session.rollback()
        raise
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.exception("Storage failure while %s", action)
        raise InternalError() from exc
