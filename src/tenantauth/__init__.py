"""TenantAuth - multi-tenant RBAC/ABAC authorization engine."""

__version__ = "0.1.0"
