"""
Authorization scopes for paper review users.

Each role carries a fixed set of capabilities. Rather than compare role
names at the point of use, routes and controllers refer to these constants,
and :mod:`review.authorization` decides whether a user's role grants them.
There is no role hierarchy: a committee member cannot create papers, and an
author cannot publish them.
"""

from typing import Dict, FrozenSet, Optional

from .domain import Role, Scope


READ_PAPER = Scope(Scope.domains.PAPER, Scope.actions.READ)
"""Authorizes reading papers."""

CREATE_PAPER = Scope(Scope.domains.PAPER, Scope.actions.CREATE)
"""Authorizes submitting a new paper as its author."""

PUBLISH_PAPER = Scope(Scope.domains.PAPER, Scope.actions.PUBLISH)
"""Authorizes moving a paper from draft to published."""

ROLE_SCOPES: Dict[Role, FrozenSet[Scope]] = {
    Role.STUDENT: frozenset([READ_PAPER]),
    Role.AUTHOR: frozenset([READ_PAPER, CREATE_PAPER]),
    Role.COMMITTEE: frozenset([READ_PAPER, PUBLISH_PAPER]),
}

REQUIRED_ROLE: Dict[Scope, Role] = {
    CREATE_PAPER: Role.AUTHOR,
    PUBLISH_PAPER: Role.COMMITTEE,
}
"""The role named in rejection messages for each restricted scope."""


def scopes_for(role: Optional[Role]) -> FrozenSet[Scope]:
    """Get the scopes granted by ``role``; nothing if there is no role."""
    if role is None:
        return frozenset()
    return ROLE_SCOPES.get(role, frozenset())
