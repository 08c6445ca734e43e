"""
Controllers for sign-up and login.

Login checks a username and password and describes the user. It does not
open a session: the token in the response is a fixed placeholder (see
``LOGIN_TOKEN``), and later requests name their acting user explicitly.
"""

from typing import Optional
from http import HTTPStatus
import logging

from flask import current_app
from wtforms import Form, PasswordField, StringField
from wtforms.validators import DataRequired, Email, Length

from retry import retry

from .. import domain
from ..services import accounts
from ..services.exceptions import Unavailable, InvalidRole, \
    DuplicateUsername, DuplicateEmail
from .util import ResponseData, form_error, message, only_strings

logger = logging.getLogger(__name__)

REGISTERED = message('User registered successfully!')
USERNAME_TAKEN = message('Error: Username is already taken!')
EMAIL_IN_USE = message('Error: Email is already in use!')
INVALID_ROLE = message('Error: Role is not found!')
REGISTRATION_FAILED = message('Error: Registration failed due to server error!')
INVALID_CREDENTIALS = message('Error: Invalid username or password!')

SIGNUP_FIELDS = ('username', 'email', 'password', 'role')
LOGIN_FIELDS = ('username', 'password')

NO_ROLE = 'USER'
"""Reported as the role of a user who does not have one."""


class SignupForm(Form):
    """New account details."""

    username = StringField('Username', validators=[
        DataRequired(message='Username is required!'),
        Length(min=3, max=20,
               message='Username must be between 3 and 20 characters!')
    ])
    email = StringField('Email', validators=[
        DataRequired(message='Email is required!'),
        Length(max=50, message='Email must be at most 50 characters!'),
        Email(message='Email is not valid!')
    ])
    password = PasswordField('Password', validators=[
        DataRequired(message='Password is required!'),
        Length(min=6, max=40,
               message='Password must be between 6 and 40 characters!')
    ])
    role = StringField('Role', validators=[
        DataRequired(message='Role is required!')
    ])


class LoginForm(Form):
    """Log in form."""

    username = StringField('Username', validators=[
        DataRequired(message='Username is required!')
    ])
    password = PasswordField('Password', validators=[
        DataRequired(message='Password is required!')
    ])


def signup(payload: Optional[dict]) -> ResponseData:
    """
    Register a new user.

    Parameters
    ----------
    payload : dict
        Should include `username`, `email`, `password` and `role`.

    Returns
    -------
    dict
        A `message` describing the outcome.
    int
        Status code: 200 on success, 400 for bad input, 409 if the username
        or e-mail address is already registered.
    dict
        Headers to add to the response.

    """
    form = SignupForm(data=only_strings(payload, SIGNUP_FIELDS))
    logger.info('Registration attempt for username: %s, email: %s, role: %s',
                form.username.data, form.email.data, form.role.data)
    if not form.validate():
        logger.debug('Sign-up data is not valid: %s', form.errors)
        return form_error(form), HTTPStatus.BAD_REQUEST, {}

    try:
        user = _do_register(form.username.data, form.email.data,
                            form.password.data, form.role.data)
    except InvalidRole:
        return INVALID_ROLE, HTTPStatus.BAD_REQUEST, {}
    except DuplicateUsername:
        return USERNAME_TAKEN, HTTPStatus.CONFLICT, {}
    except DuplicateEmail:
        return EMAIL_IN_USE, HTTPStatus.CONFLICT, {}
    except Exception:
        logger.exception('Unexpected error during registration for %s',
                         form.username.data)
        return REGISTRATION_FAILED, HTTPStatus.INTERNAL_SERVER_ERROR, {}
    logger.info('User registration successful for username: %s',
                user.username)
    return REGISTERED, HTTPStatus.OK, {}


def login(payload: Optional[dict]) -> ResponseData:
    """
    Check a username and password.

    Unknown users and wrong passwords get the same response.

    Parameters
    ----------
    payload : dict
        Should include `username` and `password`.

    Returns
    -------
    dict
        The placeholder token with the user's username, e-mail and role, or
        a `message` describing the failure.
    int
        Status code: 200 on success, otherwise 400.
    dict
        Headers to add to the response.

    """
    form = LoginForm(data=only_strings(payload, LOGIN_FIELDS))
    if not form.validate():
        logger.warning('Login failed: %s', form.errors)
        return form_error(form), HTTPStatus.BAD_REQUEST, {}

    username = form.username.data
    logger.info('Login attempt for username: %s', username)
    try:
        user = _do_authn(username, form.password.data)
    except Exception:
        logger.exception('Unexpected error during login for %s', username)
        # Same as a failed login, from the client's perspective.
        return INVALID_CREDENTIALS, HTTPStatus.BAD_REQUEST, {}
    if user is None:
        logger.warning('Login failed: invalid credentials for %s', username)
        return INVALID_CREDENTIALS, HTTPStatus.BAD_REQUEST, {}

    role = user.role.value if user.role is not None else NO_ROLE
    logger.info('Login successful for username: %s, role: %s',
                user.username, role)
    data = {
        'token': current_app.config['LOGIN_TOKEN'],
        'type': 'Bearer',
        'username': user.username,
        'email': user.email,
        'role': role
    }
    return data, HTTPStatus.OK, {}


# These are broken out to add retry logic.
@retry(Unavailable, tries=3, delay=0.5, backoff=2)
def _do_register(username: str, email: str, password: str,
                 role: str) -> domain.User:
    return accounts.register(username, email, password, role)


@retry(Unavailable, tries=3, delay=0.5, backoff=2)
def _do_authn(username: str, password: str) -> Optional[domain.User]:
    return accounts.authenticate(username, password)
