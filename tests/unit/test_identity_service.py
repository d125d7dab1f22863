"""Tests for IdentityService."""

import pytest

from netwatch.domain.errors import DomainValidationError
from netwatch.services.errors import ConflictError, NotFoundError, PermissionDeniedError
from netwatch.services.identity_service import IdentityService


@pytest.fixture
def service(users, clock, ids):
    return IdentityService(users, clock=clock, id_factory=ids)


def test_register_stores_user(service, users, clock):
    user = service.register("trinity", "hash", "t@example.com")
    assert user.id == "id-1"
    assert user.created_at == clock.now
    assert users.get(user.id) == user


def test_register_rejects_taken_username(service):
    service.register("trinity", "hash")
    with pytest.raises(ConflictError, match="already taken"):
        service.register("trinity", "other")


def test_register_rejects_taken_email(service):
    service.register("trinity", "hash", "t@example.com")
    with pytest.raises(ConflictError, match="Email"):
        service.register("neo", "hash", "t@example.com")


def test_register_validates_username(service, users):
    with pytest.raises(DomainValidationError):
        service.register("ab", "hash")
    assert users.items == {}


def test_record_login(service, clock):
    user = service.register("trinity", "hash")
    clock.advance(60)
    logged_in = service.record_login(user.id)
    assert logged_in.last_login_at == clock.now


def test_suspended_user_cannot_log_in(service):
    user = service.register("trinity", "hash")
    service.suspend(user.id)
    with pytest.raises(PermissionDeniedError):
        service.record_login(user.id)

    service.activate(user.id)
    assert service.record_login(user.id).is_active


def test_unknown_user(service):
    with pytest.raises(NotFoundError):
        service.suspend("missing")
