"""Provide methods for working with user accounts."""

from typing import Optional
import logging

from sqlalchemy.exc import IntegrityError

from .. import domain
from . import util, passwords
from .exceptions import InvalidRole, DuplicateUsername, DuplicateEmail, \
    RegistrationFailed, NoSuchUser, Unavailable
from .models import DBUser, DBRole

logger = logging.getLogger(__name__)


def username_exists(username: str) -> bool:
    """
    Determine whether a user with a particular username already exists.

    Parameters
    ----------
    username : str

    Returns
    -------
    bool

    """
    with util.transaction() as session:
        data = session.query(DBUser.id) \
            .filter(DBUser.username == username) \
            .first()
        return data is not None


def email_exists(email: str) -> bool:
    """
    Determine whether a user with a particular address already exists.

    Parameters
    ----------
    email : str

    Returns
    -------
    bool

    """
    with util.transaction() as session:
        data = session.query(DBUser.id).filter(DBUser.email == email).first()
        return data is not None


def register(username: str, email: str, password: str,
             role_name: str) -> domain.User:
    """
    Create a new user.

    Uniqueness of the username and e-mail address is decided by the unique
    constraints on insert, not by a prior lookup; two concurrent requests for
    the same username cannot both succeed.

    Parameters
    ----------
    username : str
    email : str
    password : str
        Plain text password. Only a hash is stored.
    role_name : str
        One of ``STUDENT``, ``AUTHOR``, ``COMMITTEE``; case is ignored.

    Returns
    -------
    :class:`.domain.User`
        Data about the created user.

    Raises
    ------
    :class:`.InvalidRole`
    :class:`.DuplicateUsername`
    :class:`.DuplicateEmail`
    :class:`.RegistrationFailed`

    """
    try:
        role = domain.Role.parse(role_name)
    except ValueError as e:
        logger.error('Invalid role provided: %s', role_name)
        raise InvalidRole(f'Invalid role: {role_name}') from e

    db_role = ensure_role(role)
    try:
        with util.transaction() as session:
            db_user = DBUser(
                username=username,
                email=email,
                password=passwords.hash_password(password),
                role_id=db_role.id
            )
            session.add(db_user)
            session.commit()
            user = db_user.to_domain()
    except IntegrityError as e:
        # Work out which constraint we ran into.
        if username_exists(username):
            logger.warning('Username %s already exists', username)
            raise DuplicateUsername(f'Username {username} is taken') from e
        if email_exists(email):
            logger.warning('Email %s already exists', email)
            raise DuplicateEmail(f'Email {email} is in use') from e
        raise RegistrationFailed('Could not create user') from e
    except Unavailable:
        raise
    except Exception as e:
        logger.debug(e)
        raise RegistrationFailed('Could not create user') from e
    logger.info('User created with ID: %s, username: %s',
                user.user_id, user.username)
    return user


def ensure_role(role: domain.Role) -> DBRole:
    """Get the row for ``role``, creating it if this is its first use."""
    with util.transaction() as session:
        db_role = session.query(DBRole) \
            .filter(DBRole.name == role.value) \
            .first()
        if db_role is not None:
            return db_role
    logger.info('Creating new role: %s', role.value)
    try:
        with util.transaction() as session:
            db_role = DBRole(name=role.value)
            session.add(db_role)
            session.commit()
    except IntegrityError:   # Someone else just created it.
        with util.transaction() as session:
            db_role = session.query(DBRole) \
                .filter(DBRole.name == role.value) \
                .one()
    return db_role


def authenticate(username: str, password: str) -> Optional[domain.User]:
    """
    Validate username/password.

    Whether the user is unknown or the password is wrong, the result is the
    same (``None``) and costs one hash verification.

    Parameters
    ----------
    username : str
    password : str
        Password (as entered).

    Returns
    -------
    :class:`.domain.User` or None

    """
    logger.debug('Authenticate with password, user: %s', username)
    with util.transaction() as session:
        db_user: Optional[DBUser] = session.query(DBUser) \
            .filter(DBUser.username == username) \
            .first()
        if db_user is None:
            logger.debug('No such user: %s', username)
            passwords.burn_hash(password)
            return None
        if not passwords.check_password(password, db_user.password):
            logger.debug('Incorrect password for user: %s', username)
            return None
        return db_user.to_domain()


def get_user(username: str) -> domain.User:
    """
    Load user data from the database.

    Raises
    ------
    :class:`.NoSuchUser`

    """
    with util.transaction() as session:
        db_user = _get_db_user(session, username)
        return db_user.to_domain()


def role_of(username: str) -> Optional[domain.Role]:
    """Get the role of a user; ``None`` if there is no such user or role."""
    try:
        user = get_user(username)
    except NoSuchUser:
        logger.debug('No role found for username: %s', username)
        return None
    return user.role


def _get_db_user(session, username: str, exc: type = NoSuchUser) -> DBUser:
    db_user: Optional[DBUser] = session.query(DBUser) \
        .filter(DBUser.username == username) \
        .first()
    if db_user is None:
        raise exc(f'User {username} does not exist')
    return db_user
