"""
Flask application factory module.

This module creates and configures the Flask application using
the factory pattern, allowing for different configurations
(development, testing, production).
"""

import logging
import os

from flask import Flask
from flask_sqlalchemy import SQLAlchemy

from config import get_config, load_database_uri, load_env

# Initialize SQLAlchemy without binding to app
db = SQLAlchemy()

# Configure logging
logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_app(config_name: str | None = None) -> Flask:
    """
    Create and configure the Flask application.

    The database URI is resolved here, so missing database settings
    stop the process before it serves any request.

    Args:
        config_name: Configuration environment name.
                     If None, uses FLASK_ENV environment variable.

    Returns:
        Configured Flask application instance.

    Raises:
        RuntimeError: If the database configuration is incomplete.
    """
    load_env(config_name)

    app = Flask(__name__)

    # Load configuration
    config_class = get_config(config_name)
    app.config.from_object(config_class)
    app.config["SQLALCHEMY_DATABASE_URI"] = load_database_uri(
        testing=bool(app.config.get("TESTING"))
    )

    logger.info(f"Creating app with config: {config_class.__name__}")

    # Initialize extensions
    db.init_app(app)

    # The repository is the single persistence handle handed to the routes
    from app.repository import TaskRepository
    from app.routes.api import create_api_blueprint

    repository = TaskRepository(db)
    app.extensions["task_repository"] = repository
    app.register_blueprint(create_api_blueprint(repository))

    # Create database tables
    with app.app_context():
        db.create_all()
        logger.info("Database tables created")

    return app
