"""Tests for :mod:`review.services.accounts`."""

import shutil
import tempfile
from typing import Any
from unittest import TestCase, mock

from sqlalchemy.exc import OperationalError

from .. import accounts, exceptions, models
from .util import temporary_db
from ... import domain


class DatabaseMixin(object):
    """Mixin that provides a file-backed sqlite database for each test."""

    def setUp(self):
        """Set up the database."""
        self.db_path = tempfile.mkdtemp()
        self.db_uri = f'sqlite:///{self.db_path}/test.db'

    def tearDown(self):
        """Remove the database."""
        shutil.rmtree(self.db_path)


class TestRegister(DatabaseMixin, TestCase):
    """:func:`.accounts.register` creates new users."""

    def test_register(self):
        """A new user is stored with a hashed password and a role."""
        with temporary_db(self.db_uri) as session:
            user = accounts.register('author1', 'a@x.com', 'secret1',
                                     'AUTHOR')
            self.assertIsInstance(user, domain.User)
            self.assertIsNotNone(user.user_id)
            self.assertEqual(user.username, 'author1')
            self.assertEqual(user.email, 'a@x.com')
            self.assertEqual(user.role, domain.Role.AUTHOR)

            db_user = session.query(models.DBUser) \
                .filter(models.DBUser.username == 'author1') \
                .one()
            self.assertNotEqual(db_user.password, 'secret1',
                                'The plain text password is not stored')
            self.assertTrue(db_user.password.startswith('$pbkdf2-sha256$'))

    def test_role_name_ignores_case(self):
        """Role names are parsed regardless of case."""
        with temporary_db(self.db_uri):
            user = accounts.register('committee1', 'c@x.com', 'secret1',
                                     'committee')
            self.assertEqual(user.role, domain.Role.COMMITTEE)

    def test_role_is_created_once(self):
        """Two users with the same role share one role row."""
        with temporary_db(self.db_uri) as session:
            accounts.register('author1', 'a@x.com', 'secret1', 'AUTHOR')
            accounts.register('author2', 'b@x.com', 'secret1', 'author')
            self.assertEqual(session.query(models.DBRole).count(), 1)

    def test_invalid_role(self):
        """A role name that is not a role is rejected."""
        with temporary_db(self.db_uri) as session:
            with self.assertRaises(exceptions.InvalidRole):
                accounts.register('foouser', 'a@x.com', 'secret1', 'ADMIN')
            self.assertEqual(session.query(models.DBUser).count(), 0)

    def test_duplicate_username(self):
        """A username can only be registered once, whatever the e-mail."""
        with temporary_db(self.db_uri) as session:
            accounts.register('author1', 'a@x.com', 'secret1', 'AUTHOR')
            with self.assertRaises(exceptions.DuplicateUsername):
                accounts.register('author1', 'other@x.com', 'secret2',
                                  'STUDENT')
            self.assertEqual(session.query(models.DBUser).count(), 1)
            # The session is still usable after the failed insert.
            self.assertTrue(accounts.username_exists('author1'))

    def test_duplicate_email(self):
        """An e-mail address can only be registered once."""
        with temporary_db(self.db_uri) as session:
            accounts.register('author1', 'a@x.com', 'secret1', 'AUTHOR')
            with self.assertRaises(exceptions.DuplicateEmail):
                accounts.register('author2', 'a@x.com', 'secret1', 'AUTHOR')
            self.assertEqual(session.query(models.DBUser).count(), 1)


class TestAuthenticate(DatabaseMixin, TestCase):
    """:func:`.accounts.authenticate` checks usernames and passwords."""

    def setUp(self):
        """Register a user."""
        super(TestAuthenticate, self).setUp()
        with temporary_db(self.db_uri, drop=False):
            accounts.register('author1', 'a@x.com', 'secret1', 'AUTHOR')

    def test_authenticate(self):
        """The right password gets the user."""
        with temporary_db(self.db_uri, create=False):
            user = accounts.authenticate('author1', 'secret1')
            self.assertIsNotNone(user)
            self.assertEqual(user.username, 'author1')
            self.assertEqual(user.email, 'a@x.com')
            self.assertEqual(user.role, domain.Role.AUTHOR)

    def test_wrong_password(self):
        """The wrong password gets nothing."""
        with temporary_db(self.db_uri, create=False):
            self.assertIsNone(accounts.authenticate('author1', 'secret2'))

    @mock.patch('review.services.passwords.burn_hash')
    def test_no_such_user(self, mock_burn: Any):
        """An unknown user gets nothing, at the cost of one hash."""
        with temporary_db(self.db_uri, create=False):
            self.assertIsNone(accounts.authenticate('nobody', 'secret1'))
        self.assertEqual(mock_burn.call_count, 1)


class TestLookups(DatabaseMixin, TestCase):
    """Existence and role lookups."""

    def setUp(self):
        """Register a user."""
        super(TestLookups, self).setUp()
        with temporary_db(self.db_uri, drop=False):
            accounts.register('student1', 's@x.com', 'secret1', 'STUDENT')

    def test_username_exists(self):
        with temporary_db(self.db_uri, create=False):
            self.assertTrue(accounts.username_exists('student1'))
            self.assertFalse(accounts.username_exists('student2'))

    def test_email_exists(self):
        with temporary_db(self.db_uri, create=False):
            self.assertTrue(accounts.email_exists('s@x.com'))
            self.assertFalse(accounts.email_exists('t@x.com'))

    def test_role_of(self):
        """The role of a known user is returned; nothing otherwise."""
        with temporary_db(self.db_uri, create=False):
            self.assertEqual(accounts.role_of('student1'),
                             domain.Role.STUDENT)
            self.assertIsNone(accounts.role_of('nobody'))

    def test_get_user(self):
        with temporary_db(self.db_uri, create=False):
            self.assertEqual(accounts.get_user('student1').email, 's@x.com')
            with self.assertRaises(exceptions.NoSuchUser):
                accounts.get_user('nobody')

    @mock.patch('review.services.models.db.session.query')
    def test_database_unavailable(self, mock_query: Any):
        """When the database squawks, raises :class:`.Unavailable`."""
        def raise_op_error(*args: str, **kwargs: str) -> None:
            raise OperationalError('statement', {}, None)
        mock_query.side_effect = raise_op_error
        with temporary_db(self.db_uri, create=False):
            with self.assertRaises(exceptions.Unavailable):
                accounts.username_exists('student1')
