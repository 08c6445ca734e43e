"""
Role-based authorization of paper operations.

Authorization is a flat check of the acting user's role. There is no role
hierarchy and no per-paper ownership rule: any author may submit, and any
committee member may publish any paper.

The acting user is named by the caller. Login does not issue a credential
that could bind a request to an identity, so this decides what a username
may do, not who is asking.

:func:`scoped` protects Flask routes:

.. code-block:: python

   @blueprint.route('/create', methods=['POST'])
   @scoped(scopes.CREATE_PAPER, 'authorUsername')
   def create_paper() -> Response:
       ...

"""

from typing import Any, Callable, Dict, Optional, Union
from functools import wraps
import logging

from flask import request
from werkzeug.exceptions import BadRequest, Forbidden

from . import scopes
from .domain import Role, Scope
from .services import accounts

logger = logging.getLogger(__name__)

FORBIDDEN_MESSAGES: Dict[Scope, str] = {
    scopes.CREATE_PAPER: 'Error: Only authors can create papers!',
    scopes.PUBLISH_PAPER: 'Error: Only committee members can publish papers!',
}
DEFAULT_FORBIDDEN = 'Error: You are not allowed to do that!'


def authorize(username: Optional[str],
              required_role: Union[Role, str]) -> bool:
    """
    Determine whether a user holds ``required_role``.

    Role names are parsed without regard to case. Returns ``False`` rather
    than raising for unknown users, users without a role and role names that
    are not roles.
    """
    if not username:
        return False
    if not isinstance(required_role, Role):
        try:
            required_role = Role.parse(required_role)
        except ValueError:
            logger.warning('Not a role: %s', required_role)
            return False
    role = accounts.role_of(username)
    if role is None:
        logger.debug('User %s has no role', username)
        return False
    return role == required_role


def is_permitted(username: Optional[str], scope: Scope) -> bool:
    """Determine whether the role held by a user grants ``scope``."""
    if not username:
        return False
    return scope in scopes.scopes_for(accounts.role_of(username))


def scoped(required: Scope, param: str) -> Callable:
    """
    Generate a decorator that enforces ``required`` on a Flask route.

    Parameters
    ----------
    required : :class:`.domain.Scope`
        The capability needed to use the decorated route.
    param : str
        Name of the query parameter that carries the acting username.

    Returns
    -------
    function

    """
    def protector(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            """
            Check the acting user's role before executing the route.

            Raises
            ------
            :class:`.BadRequest`
                Raised when the username parameter is missing.
            :class:`.Forbidden`
                Raised when the user does not exist or their role does not
                grant the required scope.

            """
            username = request.args.get(param, '').strip()
            if not username:
                raise BadRequest(f'Error: {param} is required!')
            if not is_permitted(username, required):
                logger.warning('User %s not permitted to %s',
                               username, required)
                raise Forbidden(FORBIDDEN_MESSAGES.get(required,
                                                       DEFAULT_FORBIDDEN))
            return func(*args, **kwargs)
        return wrapper
    return protector
