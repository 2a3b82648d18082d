from pathlib import Path
import sys
import os

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# Safety default for any module-level app creation during test imports.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from voteaholic import create_app
from voteaholic.extensions import db
from voteaholic.models import Candidate, Election, User


@pytest.fixture()
def app(tmp_path: Path):
    db_file = tmp_path / "test.sqlite3"
    app = create_app(
        {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{db_file}",
            "SQLALCHEMY_ENGINE_OPTIONS": {
                "connect_args": {"timeout": 30, "check_same_thread": False},
            },
            "ADMIN_RESET_REQUIRES_AUTH": False,
        }
    )

    with app.app_context():
        driver = db.engine.url.drivername
        if driver != "sqlite":
            raise RuntimeError(
                f"Test database must be SQLite, got '{driver}'. Refusing to run destructive test setup."
            )
        db.drop_all()
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def db_session(app):
    with app.app_context():
        yield db.session


@pytest.fixture()
def admin_user(db_session):
    user = User(
        username="admin1",
        email="admin1@example.com",
        password_hash="hashed-password",
        role="admin",
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture()
def voter_user(db_session):
    user = User(
        username="voter1",
        email="voter1@example.com",
        password_hash="hashed-password",
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture()
def make_voters(db_session):
    def _make(count, prefix="voter"):
        users = [
            User(
                username=f"{prefix}{index}",
                email=f"{prefix}{index}@example.com",
                password_hash="hashed-password",
            )
            for index in range(count)
        ]
        db_session.add_all(users)
        db_session.commit()
        return [user.id for user in users]

    return _make


@pytest.fixture()
def make_election(db_session, admin_user):
    def _make(status="active", candidates=("Alice", "Bob"), title="Student Council"):
        election = Election(title=title, creator_id=admin_user.id, status=status)
        db_session.add(election)
        db_session.flush()

        options = [
            Candidate(election_id=election.id, name=name, party=f"{name} Party")
            for name in candidates
        ]
        db_session.add_all(options)
        db_session.commit()
        return election, options

    return _make


@pytest.fixture()
def auth_client(client, admin_user):
    with client.session_transaction() as session:
        session["_user_id"] = str(admin_user.id)
        session["_fresh"] = True
    return client


@pytest.fixture()
def voter_client(client, voter_user):
    with client.session_transaction() as session:
        session["_user_id"] = str(voter_user.id)
        session["_fresh"] = True
    return client
