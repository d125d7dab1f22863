"""Errors raised by the NetWatch application services and repositories."""

from __future__ import annotations


class ServiceError(Exception):
    """Base class for use-case level refusals."""


class NotFoundError(ServiceError, LookupError):
    """A referenced aggregate does not exist."""


class ConflictError(ServiceError):
    """The request collides with existing state (duplicate user, unlock, ...)."""


class DuplicateRecordError(ConflictError):
    """Persistence rejected a write because of a uniqueness constraint."""


class PermissionDeniedError(ServiceError, PermissionError):
    """The caller is not allowed to act on the aggregate."""


class RequirementNotMetError(ServiceError):
    """The player does not satisfy an eligibility rule."""


class StaleRecordError(ConflictError):
    """The stored record changed since it was read, so the write was refused."""
