# app.py
# Flask application built with the application factory pattern

import logging
import time

import click
from flask import Flask, g, jsonify, request
from sqlalchemy import text

from config import Config
from errors import register_error_handlers
from extensions import db, migrate
from logging_config import setup_logging

# Models must be imported here so that Flask-Migrate can see them
from models import (  # noqa: F401
    User, Event, Registration, Team, TeamMember, Project, Judge,
    JudgingCriterion, ProjectScore, RecruitmentProfile
)

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.json.sort_keys = app.config.get('JSON_SORT_KEYS', False)

    setup_logging(app.config['LOG_LEVEL'], app.config.get('LOG_DIR'))

    db.init_app(app)
    migrate.init_app(app, db)

    from routes.users import users_bp
    from routes.events import events_bp
    from routes.teams import teams_bp
    from routes.projects import projects_bp
    from routes.judging import judging_bp
    from routes.recruitment import recruitment_bp

    app.register_blueprint(users_bp)
    app.register_blueprint(events_bp)
    app.register_blueprint(teams_bp)
    app.register_blueprint(projects_bp)
    app.register_blueprint(judging_bp)
    app.register_blueprint(recruitment_bp)

    register_error_handlers(app)

    @app.before_request
    def start_timer():
        g.start_time = time.perf_counter()

    @app.after_request
    def log_request(response):
        duration = time.perf_counter() - g.get('start_time', time.perf_counter())
        logger.info(
            f"Method: {request.method} Path: {request.path} "
            f"Status: {response.status_code} Duration: {duration:.3f}s"
        )
        return response

    @app.route('/health')
    def health_check():
        status_info = {'status': 'healthy', 'database': 'connected'}
        try:
            db.session.execute(text('SELECT 1'))
        except Exception as e:
            db.session.rollback()
            status_info['database'] = 'disconnected'
            status_info['status'] = 'unhealthy'
            logger.error(f"Database health check failed: {e}")
            return jsonify(status_info), 503
        return jsonify(status_info)

    @app.cli.command('seed-data')
    def seed_data_command():
        """Replace all data with a demo hackathon."""
        from seed_data import seed
        db.create_all()
        seed()
        click.echo('Demo data loaded.')

    return app
