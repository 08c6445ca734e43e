"""Provides routes for sign-up and login."""

from flask import Blueprint, request
from flask.json import jsonify

from ..controllers import authentication

blueprint = Blueprint('auth', __name__, url_prefix='/api/auth')


@blueprint.route('/signup', methods=['POST'])
def signup() -> tuple:
    """Register a new user."""
    payload = request.get_json(force=True, silent=True)
    data, status_code, headers = authentication.signup(payload)
    return jsonify(data), status_code, headers


@blueprint.route('/login', methods=['POST'])
def login() -> tuple:
    """Check a username and password."""
    payload = request.get_json(force=True, silent=True)
    data, status_code, headers = authentication.login(payload)
    return jsonify(data), status_code, headers
