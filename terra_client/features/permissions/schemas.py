"""Pydantic schemas for permissions, modules and bundles."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import Field

from terra_client.core.schemas import CamelModel

MODULE_PREFIX = "MODULE_"
SUPERADMIN_PREFIX = "SUPERADMIN_"


class PermissionType(StrEnum):
    MODULE = "MODULE"
    ACTION = "ACTION"


class Permission(CamelModel):
    """A permission as listed by the tenant-admin endpoints."""

    id: str
    name: str
    description: str | None = None
    type: PermissionType | None = None
    parent_permission_id: str | None = None
    parent_permission_name: str | None = None


class Module(CamelModel):
    """A MODULE-level permission with its ACTION children."""

    id: str
    name: str
    description: str | None = None
    type: PermissionType | None = None
    child_permissions: list[Permission] = Field(default_factory=list)


class Bundle(CamelModel):
    """Named set of permissions assignable to users."""

    id: str
    name: str
    description: str | None = None
    tenant_id: str | None = None
    permissions: list[Permission] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PermissionGroup(CamelModel):
    """ACTION permissions sharing one parent module."""

    module_id: str
    module_name: str
    permissions: list[Permission] = Field(default_factory=list)
    is_module_assigned: bool = False
