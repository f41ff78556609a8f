import logging
import os
from typing import Optional

from flask import Flask
from flask_migrate import Migrate, upgrade

from config import Config
from database import db

# Create flask command lines to update the db based on the model
# Useage:
# Create a migration script in ./migrations/versions
# > flask db migrate -m "Update comments"
# Run the update
# > flask db upgrade
migrate = Migrate(directory=os.path.join(os.path.dirname(os.path.abspath(__file__)), "migrations"))


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(overrides: Optional[dict] = None) -> Flask:
    """Build the application.

    Settings come from ``config.Config``; ``overrides`` replaces individual
    keys (tests use it to point at a temporary database). When
    ``AUTO_MIGRATE`` is set the migration files are applied before the app
    is returned.
    """
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)
    app.json.sort_keys = False

    configure_logging(app.config["LOG_LEVEL"])

    db.init_app(app)
    migrate.init_app(app, db)

    # Models import should be after initializing db
    from models.project import Project  # noqa: F401
    from models.task import Task  # noqa: F401
    from models.user import User  # noqa: F401

    from routes import IdConverter, register_error_handlers
    from routes.health import health_bp
    from routes.projects import projects_bp
    from routes.tasks import tasks_bp
    from routes.users import users_bp

    # Converters must exist before the blueprints add their rules.
    app.url_map.converters["id"] = IdConverter
    app.register_blueprint(users_bp)
    app.register_blueprint(projects_bp)
    app.register_blueprint(tasks_bp)
    app.register_blueprint(health_bp)
    register_error_handlers(app)

    if app.config.get("AUTO_MIGRATE"):
        with app.app_context():
            logging.info("Applying database migrations")
            upgrade()

    return app


# Application Execution
# ------------------------------
if __name__ == "__main__":
    application = create_app()
    logging.info("Starting server on port %s", application.config["PORT"])
    application.run(host="0.0.0.0", port=application.config["PORT"])
