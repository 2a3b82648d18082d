from flask import current_app
from flask_login import current_user
from werkzeug.security import check_password_hash, generate_password_hash

from voteaholic.errors import Forbidden, Unauthorized


def hash_password(password):
    return generate_password_hash(password, method="pbkdf2:sha256")


def verify_password(password_hash, password):
    return check_password_hash(password_hash, password)


def current_actor():
    """The logged-in user for this request, or None."""
    if current_user and current_user.is_authenticated:
        return current_user._get_current_object()
    return None


def require_admin(actor):
    if actor is None:
        raise Unauthorized()
    if not actor.is_admin:
        current_app.logger.warning("Non-admin user %s attempted an admin action", actor.id)
        raise Forbidden()
    return actor
