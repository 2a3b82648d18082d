import os

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def _engine_options(database_uri):
    if database_uri.startswith("sqlite"):
        return {"connect_args": {"timeout": 30, "check_same_thread": False}}

    return {
        "connect_args": {
            "ssl": {"ca": os.getenv("MYSQL_SSL_CA", "")}
            if os.getenv("MYSQL_SSL_CA")
            else {}
        }
    }


class Config:
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DATABASE_URL",
        f"sqlite:///{os.path.join(BASE_DIR, 'voting.db')}",
    )
    SQLALCHEMY_ENGINE_OPTIONS = _engine_options(SQLALCHEMY_DATABASE_URI)
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-only-change-me")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # The admin clear endpoints are open unless this is switched on.
    ADMIN_RESET_REQUIRES_AUTH = (
        os.getenv("ADMIN_RESET_REQUIRES_AUTH", "false").lower() == "true"
    )
