"""Permissions, bundles and session permission sync."""

from terra_client.features.permissions.client import PermissionAPI
from terra_client.features.permissions.grouping import group_permissions, module_names, without_superadmin
from terra_client.features.permissions.schemas import (
    Bundle,
    Module,
    Permission,
    PermissionGroup,
    PermissionType,
)
from terra_client.features.permissions.sync import PermissionSync, merge_permissions

__all__ = [
    "Bundle",
    "Module",
    "Permission",
    "PermissionAPI",
    "PermissionGroup",
    "PermissionSync",
    "PermissionType",
    "group_permissions",
    "merge_permissions",
    "module_names",
    "without_superadmin",
]
