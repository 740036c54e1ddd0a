from typing import Optional

from flask import Flask, jsonify, request
from flask_sqlalchemy import SQLAlchemy
from dotenv import load_dotenv
from flask_migrate import Migrate
from flask_compress import Compress

# Load environment variables early so config is available for blueprint creation
load_dotenv()

from quizapp.config import config

db = SQLAlchemy()
migrate = Migrate()
compress = Compress()


def create_app(test_config: Optional[dict] = None) -> Flask:
    """
    Application factory for the Flask app.
    Loads environment variables, configures the database,
    and registers blueprints.

    Args:
        test_config: Optional mapping applied on top of the environment
            configuration (used by the test suite).
    """
    # Re-initialize config to ensure latest .env values are loaded
    from quizapp.config import Config
    global config
    config = Config()

    # Validate configuration
    config.validate()

    app = Flask(__name__)

    # Load configuration from config module
    app.config["SECRET_KEY"] = config.SECRET_KEY
    app.config["SQLALCHEMY_DATABASE_URI"] = config.SQLALCHEMY_DATABASE_URI
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = config.SQLALCHEMY_TRACK_MODIFICATIONS
    app.config["SQLALCHEMY_ECHO"] = config.SQLALCHEMY_ECHO
    app.config["API_PREFIX"] = config.API_PREFIX
    app.config["LOG_LEVEL"] = config.LOG_LEVEL
    app.config["SESSION_COOKIE_SECURE"] = config.SESSION_COOKIE_SECURE
    if config.is_mysql:
        # Connection pooling only applies to the MySQL driver
        app.config["SQLALCHEMY_ENGINE_OPTIONS"] = {
            "pool_size": 10,
            "pool_recycle": 3600,
            "pool_pre_ping": True,
            "max_overflow": 20,
            "connect_args": {
                "connect_timeout": 5,
                "charset": "utf8mb4",
            }
        }

    # Response compression settings
    app.config["COMPRESS_MIMETYPES"] = ['application/json']
    app.config["COMPRESS_LEVEL"] = 6
    app.config["COMPRESS_MIN_SIZE"] = 500

    if test_config:
        app.config.update(test_config)

    app.logger.setLevel(app.config["LOG_LEVEL"])

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    compress.init_app(app)

    from quizapp.security import init_security
    init_security(app)

    api_prefix = app.config["API_PREFIX"]

    # Register blueprints
    from quizapp.quiz import quiz_bp
    app.register_blueprint(quiz_bp, url_prefix=api_prefix)

    # Custom error handlers for API routes to return JSON instead of HTML
    @app.errorhandler(404)
    def handle_404(e):
        """Handle 404 errors - return JSON for API routes."""
        path = request.path
        method = request.method
        app.logger.warning(f"404 error: {method} {path}")
        if path.startswith(api_prefix + '/'):
            return jsonify({
                'success': False,
                'error': f'Route not found: {method} {path}',
                'path': path,
                'method': method
            }), 404
        return f"Page not found: {path}", 404

    @app.errorhandler(405)
    def handle_405(e):
        """Handle 405 Method Not Allowed - return JSON for API routes."""
        path = request.path
        method = request.method
        app.logger.warning(f"405 error: {method} {path}")
        if path.startswith(api_prefix + '/'):
            return jsonify({
                'success': False,
                'error': f'Method not allowed: {method} {path}',
                'path': path,
                'method': method
            }), 405
        return e

    # Create tables if they do not exist
    with app.app_context():
        from quizapp.quiz import models  # noqa: F401
        db.create_all()

    app.logger.info(f"Quiz API ready at {api_prefix}")
    return app
