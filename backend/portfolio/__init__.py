"""Application factory and blueprint registration."""
from __future__ import annotations

from flask import Flask
from flask_cors import CORS
from loguru import logger

from .config import BaseConfig
from .db.session import db
from .api.admin.routes import bp as admin_bp
from .api.articles.routes import bp as articles_bp
from .api.comments.routes import bp as comments_bp
from .api.health.routes import bp as health_bp
from .api.projects.routes import bp as projects_bp
from .api.view.routes import bp as view_bp
from .docs.routes import bp as docs_bp
from .errors import register_error_handlers
from .integrations.supabase_client import supabase_ext


def create_app(config: BaseConfig | None = None) -> Flask:
    """Create and configure the Flask application."""
    config = config or BaseConfig()
    app = Flask(__name__)
    app.config.from_object(config)
    CORS(app, resources={
        r"/api/*": {"origins": config.FRONTEND_ORIGIN},
        r"/admin-api/*": {"origins": config.FRONTEND_ORIGIN},
    })
    config.warn_missing()

    # Init extensions
    db.init_app(app)
    supabase_ext.init_app(app)
    if app.config["DATABASE_URL"].startswith("sqlite"):
        db.create_all()

    # Register blueprints
    app.register_blueprint(health_bp, url_prefix="/api/health")
    app.register_blueprint(articles_bp, url_prefix="/api/articles")
    app.register_blueprint(view_bp, url_prefix="/api/view")
    app.register_blueprint(comments_bp, url_prefix="/api/comments")
    app.register_blueprint(projects_bp, url_prefix="/api/projects")
    app.register_blueprint(admin_bp, url_prefix="/admin-api")
    app.register_blueprint(docs_bp)

    # Global error handlers
    register_error_handlers(app)
    logger.info(f"portfolio app ready ({app.config['ARTICLE_REPO_BACKEND']} backend)")
    return app
