from flask import Flask

from voteaholic.cli import register_cli
from voteaholic.config import Config
from voteaholic.errors import register_error_handlers
from voteaholic.extensions import configure_sqlite, db, login_manager, migrate
from voteaholic.models import User
from voteaholic.routes import register_routes


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    with app.app_context():
        if db.engine.url.get_backend_name() == "sqlite":
            configure_sqlite(db.engine)

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, user_id)

    register_error_handlers(app)
    register_routes(app)
    register_cli(app)
    return app


__all__ = ["create_app", "db", "migrate"]
