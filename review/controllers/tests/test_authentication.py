"""Tests for :mod:`review.controllers.authentication`."""

from http import HTTPStatus
from typing import Any
from unittest import TestCase, mock

from flask import Flask

from ... import domain
from ...services import exceptions
from .. import authentication
from ..authentication import signup, login


def valid_signup(**changes: str) -> dict:
    payload = {'username': 'author1', 'email': 'a@x.com',
               'password': 'secret1', 'role': 'AUTHOR'}
    payload.update(changes)
    return payload


class TestSignup(TestCase):
    """Tests for :func:`.signup`."""

    @mock.patch(f'{authentication.__name__}.accounts')
    def test_signup(self, mock_accounts: Any) -> None:
        """A valid request registers the user."""
        mock_accounts.register.return_value = \
            domain.User('author1', 'a@x.com', domain.Role.AUTHOR, 1)
        data, code, headers = signup(valid_signup())
        self.assertEqual(code, HTTPStatus.OK)
        self.assertEqual(data, {'message': 'User registered successfully!'})
        mock_accounts.register.assert_called_once_with(
            'author1', 'a@x.com', 'secret1', 'AUTHOR'
        )

    @mock.patch(f'{authentication.__name__}.accounts')
    def test_invalid_fields(self, mock_accounts: Any) -> None:
        """Missing or malformed fields are rejected before registering."""
        bad_payloads = [
            (None, 'Error: Username is required!'),
            ({}, 'Error: Username is required!'),
            (valid_signup(username='  '), 'Error: Username is required!'),
            (valid_signup(username='ab'),
             'Error: Username must be between 3 and 20 characters!'),
            (valid_signup(username='a' * 21),
             'Error: Username must be between 3 and 20 characters!'),
            (valid_signup(username=42), 'Error: Username is required!'),
            (valid_signup(email='not-an-email'), 'Error: Email is not valid!'),
            (valid_signup(email=f'{"a" * 45}@x.com'),
             'Error: Email must be at most 50 characters!'),
            (valid_signup(password='12345'),
             'Error: Password must be between 6 and 40 characters!'),
            (valid_signup(password='x' * 41),
             'Error: Password must be between 6 and 40 characters!'),
            (valid_signup(role=''), 'Error: Role is required!'),
        ]
        for payload, expected in bad_payloads:
            data, code, headers = signup(payload)
            self.assertEqual(code, HTTPStatus.BAD_REQUEST, payload)
            self.assertEqual(data, {'message': expected}, payload)
        self.assertFalse(mock_accounts.register.called)

    @mock.patch(f'{authentication.__name__}.accounts')
    def test_invalid_role(self, mock_accounts: Any) -> None:
        mock_accounts.register.side_effect = exceptions.InvalidRole('nope')
        data, code, headers = signup(valid_signup(role='ADMIN'))
        self.assertEqual(code, HTTPStatus.BAD_REQUEST)
        self.assertEqual(data, {'message': 'Error: Role is not found!'})

    @mock.patch(f'{authentication.__name__}.accounts')
    def test_duplicates(self, mock_accounts: Any) -> None:
        """Conflicts are reported as such."""
        mock_accounts.register.side_effect = \
            exceptions.DuplicateUsername('taken')
        data, code, headers = signup(valid_signup())
        self.assertEqual(code, HTTPStatus.CONFLICT)
        self.assertEqual(data,
                         {'message': 'Error: Username is already taken!'})

        mock_accounts.register.side_effect = exceptions.DuplicateEmail('used')
        data, code, headers = signup(valid_signup())
        self.assertEqual(code, HTTPStatus.CONFLICT)
        self.assertEqual(data, {'message': 'Error: Email is already in use!'})

    @mock.patch('retry.api.time.sleep')
    @mock.patch(f'{authentication.__name__}.accounts')
    def test_database_unavailable(self, mock_accounts: Any,
                                  mock_sleep: Any) -> None:
        """Registration is retried, then fails without details."""
        mock_accounts.register.side_effect = \
            exceptions.Unavailable('secret details')
        data, code, headers = signup(valid_signup())
        self.assertEqual(code, HTTPStatus.INTERNAL_SERVER_ERROR)
        self.assertNotIn('secret details', data['message'])
        self.assertEqual(mock_accounts.register.call_count, 3)


class TestLogin(TestCase):
    """Tests for :func:`.login`."""

    def setUp(self) -> None:
        self.app = Flask('test')
        self.app.config['LOGIN_TOKEN'] = 'dummy-token'

    @mock.patch(f'{authentication.__name__}.accounts')
    def test_login(self, mock_accounts: Any) -> None:
        """The right credentials get the placeholder token and the user."""
        mock_accounts.authenticate.return_value = \
            domain.User('author1', 'a@x.com', domain.Role.AUTHOR, 1)
        with self.app.app_context():
            data, code, headers = login({'username': 'author1',
                                         'password': 'secret1'})
        self.assertEqual(code, HTTPStatus.OK)
        self.assertEqual(data, {'token': 'dummy-token', 'type': 'Bearer',
                                'username': 'author1', 'email': 'a@x.com',
                                'role': 'AUTHOR'})
        mock_accounts.authenticate.assert_called_once_with('author1',
                                                           'secret1')

    @mock.patch(f'{authentication.__name__}.accounts')
    def test_blank_fields(self, mock_accounts: Any) -> None:
        with self.app.app_context():
            data, code, headers = login({'username': ' ',
                                         'password': 'secret1'})
            self.assertEqual(code, HTTPStatus.BAD_REQUEST)
            self.assertEqual(data, {'message': 'Error: Username is required!'})

            data, code, headers = login({'username': 'author1'})
            self.assertEqual(code, HTTPStatus.BAD_REQUEST)
            self.assertEqual(data, {'message': 'Error: Password is required!'})
        self.assertFalse(mock_accounts.authenticate.called)

    @mock.patch(f'{authentication.__name__}.accounts')
    def test_bad_credentials(self, mock_accounts: Any) -> None:
        """Failed logins all look the same."""
        mock_accounts.authenticate.return_value = None
        with self.app.app_context():
            data, code, headers = login({'username': 'author1',
                                         'password': 'wrong1'})
        self.assertEqual(code, HTTPStatus.BAD_REQUEST)
        self.assertEqual(data,
                         {'message': 'Error: Invalid username or password!'})

        mock_accounts.authenticate.side_effect = RuntimeError('boom')
        with self.app.app_context():
            error_data, code, headers = login({'username': 'author1',
                                               'password': 'wrong1'})
        self.assertEqual(code, HTTPStatus.BAD_REQUEST)
        self.assertEqual(error_data, data)
