"""Application factory for the paper review API."""

from typing import Any, List
from http import HTTPStatus
import logging

from flask import Flask, Response, current_app, jsonify, request
from werkzeug.exceptions import HTTPException, Forbidden, BadRequest, \
    MethodNotAllowed, InternalServerError, NotFound, Conflict

from .app_logging import setup_logger
from .routes import auth, health, papers
from .services import bootstrap, util
from .services.exceptions import Unavailable

logger = logging.getLogger(__name__)

UNAVAILABLE = 'Error: Service temporarily unavailable!'
UNEXPECTED = 'Error: An unexpected error occurred!'


def create_web_app(**overrides: Any) -> Flask:
    """
    Initialize and configure the paper review application.

    Keyword arguments override values from :mod:`review.config`, and are
    applied before the database is attached.
    """
    app = Flask('review')
    app.config.from_pyfile('config.py')
    app.config.update(overrides)

    setup_logger(app.config['LOGLEVEL'], app.config['LOGFILE'])
    util.init_app(app)

    app.register_blueprint(auth.blueprint)
    app.register_blueprint(papers.blueprint)
    app.register_blueprint(health.blueprint)
    app.after_request(apply_response_headers)

    register_error_handlers(app)

    if app.config['CREATE_DB']:
        with app.app_context():
            util.create_all()
            if app.config['SEED_DB']:
                bootstrap.seed()
    return app


def apply_response_headers(response: Response) -> Response:
    """Apply CORS and framing headers to all responses."""
    origin = request.headers.get('Origin')
    allowed = current_origins()
    if origin and ('*' in allowed or origin in allowed):
        response.headers['Access-Control-Allow-Origin'] = origin
        response.headers['Access-Control-Allow-Methods'] = \
            'GET, POST, PUT, DELETE, OPTIONS'
        response.headers['Access-Control-Allow-Headers'] = '*'
        response.headers['Access-Control-Allow-Credentials'] = 'true'
        response.headers['Vary'] = 'Origin'

    # Prevent UI redress attacks.
    response.headers['Content-Security-Policy'] = "frame-ancestors 'none'"
    response.headers['X-Frame-Options'] = 'DENY'
    return response


def current_origins() -> List[str]:
    """Origins allowed to call the API from a browser."""
    origins = current_app.config['CORS_ORIGINS']
    if isinstance(origins, str):
        origins = origins.split()
    return list(origins)


def register_error_handlers(app: Flask) -> None:
    """Register error handlers for the Flask app."""
    app.errorhandler(Forbidden)(jsonify_exception)
    app.errorhandler(BadRequest)(jsonify_exception)
    app.errorhandler(InternalServerError)(jsonify_exception)
    app.errorhandler(NotFound)(jsonify_exception)
    app.errorhandler(MethodNotAllowed)(jsonify_exception)
    app.errorhandler(Conflict)(jsonify_exception)
    app.errorhandler(Unavailable)(handle_unavailable)


def jsonify_exception(error: HTTPException) -> Response:
    """Render exceptions as JSON."""
    exc_resp = error.get_response()
    description = error.description or ''
    if isinstance(error, InternalServerError):
        # Whatever went wrong, the details stay in the log.
        description = UNEXPECTED
    elif not description.startswith('Error:'):
        description = f'Error: {description}'
    response: Response = jsonify(message=description)
    response.status_code = exc_resp.status_code
    return response


def handle_unavailable(error: Unavailable) -> Response:
    """The database could not be reached, even after retrying."""
    logger.error('Database unavailable: %s', error)
    response: Response = jsonify(message=UNAVAILABLE)
    response.status_code = HTTPStatus.SERVICE_UNAVAILABLE
    return response
