"""Defines the core data structures for the paper review service."""

from typing import Any, Optional, NamedTuple, List
from datetime import datetime
from enum import Enum


class Role(Enum):
    """The role held by a user. Each user holds exactly one."""

    STUDENT = 'STUDENT'
    AUTHOR = 'AUTHOR'
    COMMITTEE = 'COMMITTEE'

    @classmethod
    def parse(cls, name: Optional[str]) -> 'Role':
        """
        Get the :class:`.Role` for a role name, ignoring case.

        Raises
        ------
        ValueError
            Raised if ``name`` is not the name of a known role.

        """
        if not name or not isinstance(name, str):
            raise ValueError(f'Not a role: {name!r}')
        try:
            return cls[name.strip().upper()]
        except KeyError as e:
            raise ValueError(f'Not a role: {name!r}') from e


class PaperState(Enum):
    """Lifecycle states of a :class:`.Paper`."""

    DRAFT = 'DRAFT'
    PUBLISHED = 'PUBLISHED'


class Scope(NamedTuple):
    """Represents an authorization policy."""

    domain: str
    """The domain to which the scope applies."""

    action: str
    """An action within ``domain``."""

    def __str__(self) -> str:
        """Return this scope as a :-delimited string."""
        return f'{self.domain}:{self.action}'

    class domains:
        """Known authorization domains."""

        PAPER = 'paper'

    class actions:
        """Known authorization actions."""

        READ = 'read'
        CREATE = 'create'
        PUBLISH = 'publish'


class User(NamedTuple):
    """A registered user. The password hash never leaves the data layer."""

    username: str
    """Unique username, 3 to 20 characters."""

    email: str
    """Unique e-mail address."""

    role: Optional[Role] = None
    """The role assigned at registration."""

    user_id: Optional[int] = None
    """Unique identifier for the user. If ``None``, the user does not exist."""


class Tag(NamedTuple):
    """A reusable label attached to papers."""

    name: str
    """Unique, case-sensitive name."""

    tag_id: Optional[int] = None
    description: Optional[str] = None


class Paper(NamedTuple):
    """A submission, from draft to published."""

    title: str
    abstract_text: str
    content: str

    author: User
    """The user who created the paper. Never changes."""

    paper_id: Optional[int] = None

    published_by_committee: Optional[User] = None
    """The committee member who published the paper, if published."""

    publication_date: Optional[datetime] = None
    """When the paper was published. Set together with the publisher."""

    tags: List[Tag] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def published(self) -> bool:
        """A paper is published when it has both a publisher and a date."""
        return self.publication_date is not None \
            and self.published_by_committee is not None

    @property
    def state(self) -> PaperState:
        """The current lifecycle state."""
        if self.published:
            return PaperState.PUBLISHED
        return PaperState.DRAFT


def to_dict(obj: tuple) -> dict:
    """
    Generate a dict representation of a NamedTuple instance.

    This just uses the built-in ``_asdict`` method on the intance, but also
    calls this on any child NamedTuple instances (recursively) so that the
    entire tree is cast to ``dict``. Datetimes become ISO-8601 strings and
    enums become their values.

    Parameters
    ----------
    obj : tuple
        A NamedTuple instance.

    Returns
    -------
    dict

    """
    if not hasattr(obj, '_asdict'):  # NamedTuple-generated classes have this.
        return {}
    data = obj._asdict()  # type: ignore
    _data = {}

    def _cast(obj: Any) -> Any:
        if hasattr(obj, '_asdict'):
            obj = to_dict(obj)
        elif isinstance(obj, datetime):
            obj = obj.isoformat()
        elif isinstance(obj, Enum):
            obj = obj.value
        elif isinstance(obj, list):
            obj = [_cast(o) for o in obj]
        return obj

    for key, value in data.items():
        _data[key] = _cast(value)
    return _data
