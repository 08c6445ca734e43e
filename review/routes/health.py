"""Provides the health check."""

from http import HTTPStatus

from flask import Blueprint, current_app
from flask.json import jsonify

from ..services import util

blueprint = Blueprint('health', __name__, url_prefix='/api')


@blueprint.route('/status', methods=['GET'])
def ok() -> tuple:
    """Health check endpoint."""
    data = {'version': current_app.config['APP_VERSION']}
    if not util.is_available():
        data['status'] = 'database unavailable'
        return jsonify(data), HTTPStatus.SERVICE_UNAVAILABLE
    data['status'] = 'ok'
    return jsonify(data), HTTPStatus.OK
