"""Helpers for presenting permission lists."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from terra_client.features.permissions.schemas import (
    SUPERADMIN_PREFIX,
    Module,
    Permission,
    PermissionGroup,
    PermissionType,
)

logger = logging.getLogger(__name__)


def group_permissions(
    permissions: Iterable[Permission],
    modules: Iterable[Module] = (),
) -> list[PermissionGroup]:
    """Group ACTION permissions by their parent module, sorted by module name.

    Grouping follows ``parent_permission_id``; names are never used to infer
    the parent. ``is_module_assigned`` is set when the parent appears in
    ``modules`` (matched by id or name).
    """
    modules = list(modules)
    groups: dict[str, PermissionGroup] = {}

    for permission in permissions:
        if permission.type != PermissionType.ACTION or permission.parent_permission_id is None:
            continue
        parent_id = permission.parent_permission_id
        parent_name = permission.parent_permission_name
        if not parent_name:
            logger.debug("Skipping permission without parent name", extra={"permission": permission.name})
            continue

        group = groups.get(parent_id)
        if group is None:
            group = PermissionGroup(
                module_id=parent_id,
                module_name=parent_name,
                is_module_assigned=any(m.id == parent_id or m.name == parent_name for m in modules),
            )
            groups[parent_id] = group
        group.permissions.append(permission)

    return sorted(groups.values(), key=lambda g: g.module_name)


def without_superadmin(permissions: Iterable[Permission]) -> list[Permission]:
    """Drop super-admin permissions, which tenants can never be granted."""
    return [
        p
        for p in permissions
        if not p.name.startswith(SUPERADMIN_PREFIX)
        and p.name != "MODULE_SUPERADMIN"
        and p.parent_permission_name != "MODULE_SUPERADMIN"
    ]


def module_names(permissions: Iterable[Permission]) -> list[str]:
    return sorted({p.parent_permission_name for p in permissions if p.parent_permission_name})
