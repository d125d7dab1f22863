"""Identifier generation for new aggregates."""

import uuid
from collections.abc import Callable

IdFactory = Callable[[], str]


def new_id() -> str:
    """Return a fresh random UUID4 string."""
    return str(uuid.uuid4())
