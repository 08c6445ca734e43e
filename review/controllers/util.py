"""Helpers shared by the controllers."""

from typing import Any, Dict, Iterable, Optional, Tuple

from wtforms import Form

ResponseData = Tuple[Any, int, dict]


def message(text: str) -> Dict[str, str]:
    """Build the body of a message response."""
    return {'message': text}


def only_strings(payload: Optional[dict],
                 names: Iterable[str]) -> Dict[str, Optional[str]]:
    """
    Pick the named string values out of a JSON payload.

    Anything that is missing or is not a string is ``None``, which the
    ``DataRequired`` validators then reject.
    """
    if not isinstance(payload, dict):
        payload = {}
    data: Dict[str, Optional[str]] = {}
    for name in names:
        value = payload.get(name)
        data[name] = value if isinstance(value, str) else None
    return data


def form_error(form: Form) -> Dict[str, str]:
    """Describe the first validation error on ``form``."""
    for field in form:
        for error in _flatten(field.errors):
            return message(f'Error: {error}')
    return message('Error: Invalid request!')


def _flatten(errors: Any) -> Iterable[str]:
    # FieldList reports a list of lists, one per entry.
    for error in errors:
        if isinstance(error, (list, tuple)):
            yield from _flatten(error)
        else:
            yield error
