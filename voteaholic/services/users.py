from flask import current_app
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from voteaholic.errors import Unauthorized, UserExists, UserNotFound, ValidationError
from voteaholic.extensions import db
from voteaholic.models import User
from voteaholic.models.user import ROLE_ADMIN, ROLE_VOTER
from voteaholic.services.security import hash_password, require_admin, verify_password
from voteaholic.services.unit_of_work import unit_of_work


def register_user(username, email, password, role=None, actor=None):
    """Create an account. Only an admin may hand out the admin role."""
    if role == ROLE_ADMIN:
        require_admin(actor)
    return _create_user(username, email, password, ROLE_ADMIN if role == ROLE_ADMIN else ROLE_VOTER)


def create_admin(username, email, password):
    return _create_user(username, email, password, ROLE_ADMIN)


def _create_user(username, email, password, user_role):
    username = (username or "").strip()
    email = (email or "").strip().lower()
    if not username or not email or not password:
        raise ValidationError("username, email, and password are required")

    with unit_of_work("registering a user"):
        existing = User.query.filter(
            or_(User.username == username, User.email == email)
        ).first()
        if existing is not None:
            raise UserExists()

        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password),
            role=user_role,
        )
        db.session.add(user)
        try:
            db.session.flush()
        except IntegrityError as exc:
            # Lost a race with another registration for the same name or email.
            raise UserExists() from exc

    current_app.logger.info("User %s registered as %s", user.id, user_role)
    return user


def authenticate(email, password):
    email = (email or "").strip().lower()
    if not email or not password:
        raise ValidationError("email and password are required")

    user = User.query.filter_by(email=email).first()
    if not user or not verify_password(user.password_hash, password):
        raise Unauthorized("Invalid email or password")
    return user


def get_user(user_id):
    user = db.session.get(User, user_id)
    if user is None:
        raise UserNotFound()
    return user


def list_users():
    return User.query.order_by(User.created_at).all()
