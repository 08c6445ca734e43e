"""
Persistence and business rules for users and papers.

:mod:`.accounts` is the account directory: registration, credential checks
and role lookup. :mod:`.papers` is the paper catalog: submission, publication
and search. Both return the value objects in :mod:`review.domain`; ORM
instances never leave this package.
"""

from . import accounts, papers, bootstrap, exceptions, models, util
from .util import create_all, init_app, current_session, drop_all, \
    is_available
