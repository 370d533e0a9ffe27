"""Pytest fixtures for TenantAuth tests."""

from __future__ import annotations

from contextlib import asynccontextmanager
from uuid import UUID

import pytest

from tenantauth.application.dto.audit_query import AuditQuery
from tenantauth.application.services import AccessGuard, AuditRecorder, RuleBasedResourcePolicy
from tenantauth.domain.entities import Actor, AuditEntry, PermissionRule, PermissionTemplate
from tenantauth.domain.value_objects import PermissionName, SubscriptionTier, UserRole
from tenantauth.infrastructure.permission.permission_checker import TenantAuthPermissionChecker


def make_actor(
    id: str = "user-1",
    role: UserRole | str = UserRole.COMPANY_USER,
    company_id: str | None = "C1",
    permissions: tuple[str, ...] = (),
    is_active: bool = True,
    tier: SubscriptionTier | str = SubscriptionTier.FREE,
    email_verified: bool = True,
) -> Actor:
    """Build an Actor with test-friendly defaults."""
    return Actor(
        id=id,
        role=UserRole.parse(role),
        is_active=is_active,
        company_id=company_id,
        permissions=frozenset(PermissionName.parse_many(permissions)),
        subscription_tier=SubscriptionTier.parse(tier),
        email_verified=email_verified,
    )


# --- Fake repositories ---


class FakeUserRepository:
    """In-memory user repository."""

    def __init__(self) -> None:
        self._by_id: dict[str, Actor] = {}

    async def get_by_id(self, user_id: str) -> Actor | None:
        return self._by_id.get(user_id)

    async def update_access(self, actor: Actor) -> None:
        self._by_id[actor.id] = actor

    def add(self, *actors: Actor) -> None:
        """Helper to seed users for tests."""
        for actor in actors:
            self._by_id[actor.id] = actor


class FakeRuleRepository:
    """In-memory rule repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, PermissionRule] = {}

    async def get_by_id(self, rule_id: UUID) -> PermissionRule | None:
        return self._by_id.get(rule_id)

    async def list(
        self,
        *,
        resource_type: str | None = None,
        action: str | None = None,
    ) -> list[PermissionRule]:
        items = list(self._by_id.values())
        if resource_type:
            items = [r for r in items if r.resource_type == resource_type]
        if action:
            items = [r for r in items if r.action == action]
        return sorted(items, key=lambda r: r.priority, reverse=True)

    async def create(self, rule: PermissionRule) -> PermissionRule:
        self._by_id[rule.id] = rule
        return rule

    async def update(self, rule: PermissionRule) -> None:
        self._by_id[rule.id] = rule

    async def delete(self, rule_id: UUID) -> None:
        self._by_id.pop(rule_id, None)


class FakeTemplateRepository:
    """In-memory template repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, PermissionTemplate] = {}

    async def get_by_id(self, template_id: UUID) -> PermissionTemplate | None:
        return self._by_id.get(template_id)

    async def list_all(self) -> list[PermissionTemplate]:
        return sorted(self._by_id.values(), key=lambda t: t.name)

    async def create(self, template: PermissionTemplate) -> PermissionTemplate:
        self._by_id[template.id] = template
        return template


class FakeAuditRepository:
    """In-memory append-only audit log. Set ``fail`` to simulate a storage outage."""

    def __init__(self) -> None:
        self.entries: list[AuditEntry] = []
        self.fail = False

    async def append(self, entry: AuditEntry) -> None:
        if self.fail:
            raise ConnectionError("audit store unavailable")
        self.entries.append(entry)

    async def query(self, query: AuditQuery) -> list[AuditEntry]:
        items = [
            e
            for e in self.entries
            if (query.user_id is None or e.user_id == query.user_id)
            and (query.start is None or e.timestamp >= query.start)
            and (query.end is None or e.timestamp <= query.end)
            and (query.result is None or e.result == query.result)
            and (query.permission is None or e.permission == query.permission)
        ]
        items.sort(key=lambda e: e.timestamp, reverse=True)
        return items[: query.limit]


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.users = FakeUserRepository()
        self.rules = FakeRuleRepository()
        self.templates = FakeTemplateRepository()
        self.audit = FakeAuditRepository()

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


def make_uow_factory(uow: FakeUnitOfWork):
    """Factory yielding the same UoW on every call, so state survives across calls."""

    @asynccontextmanager
    async def _factory():
        yield uow

    return _factory


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager with the test's FakeUnitOfWork."""
    return make_uow_factory(fake_uow)


@pytest.fixture
def audit_recorder(uow_factory) -> AuditRecorder:
    return AuditRecorder(uow_factory)


@pytest.fixture
def permission_checker(uow_factory, audit_recorder) -> TenantAuthPermissionChecker:
    return TenantAuthPermissionChecker(
        uow_factory, audit_recorder, RuleBasedResourcePolicy(uow_factory)
    )


@pytest.fixture
def guard(permission_checker, audit_recorder) -> AccessGuard:
    return AccessGuard(permission_checker, audit_recorder)


@pytest.fixture
def mock_permission_checker():
    """AsyncMock for PermissionChecker - allows everything by default."""
    from unittest.mock import AsyncMock

    mock = AsyncMock()
    for name in (
        "has_permission",
        "has_any_permission",
        "has_all_permissions",
        "can_access_company",
        "can_manage_user",
        "can_view_user_data",
        "can_access_resource",
        "evaluate_rule",
    ):
        getattr(mock, name).return_value = True
    return mock
