from flask_login import LoginManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event

db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()


def configure_sqlite(engine):
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on
    # for every connection.
    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
