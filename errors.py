# errors.py
# Domain error taxonomy and the JSON error handlers of the API

import logging

from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from extensions import db

logger = logging.getLogger(__name__)


class HackathonError(Exception):
    status_code = 400
    code = 'error'
    retryable = False

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self):
        body = {
            'error': self.code,
            'message': self.message,
            'retryable': self.retryable,
        }
        if self.details:
            body['errors'] = self.details
        return body


class NotFound(HackathonError):
    status_code = 404
    code = 'not_found'


class InvalidAssociation(HackathonError):
    """A referenced record belongs to a different event."""
    status_code = 400
    code = 'invalid_association'


class ValidationError(HackathonError):
    status_code = 400
    code = 'validation_error'


class Conflict(HackathonError):
    status_code = 409
    code = 'conflict'


class StorageFailure(HackathonError):
    status_code = 500
    code = 'storage_failure'
    retryable = True


def register_error_handlers(app):
    @app.errorhandler(HackathonError)
    def handle_domain_error(exc):
        if exc.retryable:
            logger.error(f"{exc.code}: {exc.message}")
        else:
            logger.warning(f"{exc.code}: {exc.message}")
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_storage_error(exc):
        db.session.rollback()
        logger.error(f"Storage error: {exc}", exc_info=True)
        failure = StorageFailure('Storage is unavailable, please retry later')
        return jsonify(failure.to_dict()), failure.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc):
        return jsonify({
            'error': exc.name.lower().replace(' ', '_'),
            'message': exc.description,
            'retryable': False,
        }), exc.code
