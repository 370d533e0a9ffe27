"""Permission evaluator - RBAC checks and resource relationship predicates.

All functions are pure. They return False for a failed check and only raise
ValidationError for strings outside the permission vocabulary.
"""

from collections.abc import Iterable

from tenantauth.domain.entities import Actor
from tenantauth.domain.services.role_catalog import DEFAULT_ROLE_CATALOG, RoleCatalog, role_grants
from tenantauth.domain.value_objects import PermissionName, UserRole


def has_permission(
    actor: Actor, permission: PermissionName | str, catalog: RoleCatalog = DEFAULT_ROLE_CATALOG
) -> bool:
    """Inactive actors hold nothing. Explicit grants add to the role set, never revoke."""
    permission = PermissionName.parse(permission)
    if not actor.is_active:
        return False
    if permission in actor.permissions:
        return True
    return role_grants(actor.role, permission, catalog)


def has_any_permission(
    actor: Actor,
    permissions: Iterable[PermissionName | str],
    catalog: RoleCatalog = DEFAULT_ROLE_CATALOG,
) -> bool:
    """False for an empty list."""
    return any([has_permission(actor, p, catalog) for p in permissions])


def has_all_permissions(
    actor: Actor,
    permissions: Iterable[PermissionName | str],
    catalog: RoleCatalog = DEFAULT_ROLE_CATALOG,
) -> bool:
    """True for an empty list."""
    return all([has_permission(actor, p, catalog) for p in permissions])


def can_access_company(actor: Actor, company_id: str | None) -> bool:
    if not actor.is_active:
        return False
    if actor.role == UserRole.SUPER_ADMIN:
        return True
    return actor.company_id == company_id


def can_manage_user(manager: Actor, target: Actor) -> bool:
    """Super admins manage anyone; company admins their company except super admins;
    company managers only company users of their company."""
    if not manager.is_active or not target.is_active:
        return False
    if manager.role == UserRole.SUPER_ADMIN:
        return True
    if manager.company_id != target.company_id:
        return False
    if manager.role == UserRole.COMPANY_ADMIN and target.role != UserRole.SUPER_ADMIN:
        return True
    if manager.role == UserRole.COMPANY_MANAGER and target.role == UserRole.COMPANY_USER:
        return True
    return False


def can_view_user_data(
    viewer: Actor, target: Actor, catalog: RoleCatalog = DEFAULT_ROLE_CATALOG
) -> bool:
    if not viewer.is_active:
        return False
    if viewer.id == target.id:
        return True
    if viewer.role == UserRole.SUPER_ADMIN:
        return True
    return (
        viewer.role in (UserRole.COMPANY_ADMIN, UserRole.COMPANY_MANAGER)
        and viewer.company_id == target.company_id
        and has_permission(viewer, PermissionName.VIEW_COMPANY_DATA, catalog)
    )


def can_access_owned_resource(
    actor: Actor, owner_id: str, owner_company_id: str | None
) -> bool:
    """Owner, super admin, or a company admin of the owner's company."""
    if not actor.is_active:
        return False
    if actor.id == owner_id:
        return True
    if actor.role == UserRole.SUPER_ADMIN:
        return True
    return (
        actor.role == UserRole.COMPANY_ADMIN
        and actor.company_id is not None
        and actor.company_id == owner_company_id
    )
