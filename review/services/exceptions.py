"""Exceptions."""


class ValidationError(RuntimeError):
    """Input is missing or malformed."""


class InvalidRole(ValidationError):
    """The role name does not name a known role."""


class NotFoundError(RuntimeError):
    """A referenced resource does not exist."""


class NoSuchUser(NotFoundError):
    """User does not exist."""


class AuthorNotFound(NoSuchUser):
    """The author of a new paper does not exist."""


class CommitteeMemberNotFound(NoSuchUser):
    """The committee member publishing a paper does not exist."""


class PaperNotFound(NotFoundError):
    """Paper does not exist."""


class ConflictError(RuntimeError):
    """The request conflicts with the current state of the data."""


class DuplicateUsername(ConflictError):
    """A user with that username already exists."""


class DuplicateEmail(ConflictError):
    """A user with that e-mail address already exists."""


class AlreadyPublished(ConflictError):
    """The paper has already been published."""


class AuthorizationError(RuntimeError):
    """The acting user does not hold the required role."""


class AuthenticationFailed(RuntimeError):
    """Failed to authenticate user with provided credentials."""


class RegistrationFailed(RuntimeError):
    """Could not create the user for a reason other than a conflict."""


class Unavailable(RuntimeError):
    """The database is unreachable."""
