# =====================================================
# FILE: task_manager/core/permissions.py
# Role-Based Access Control Permission Definitions
# =====================================================

from enum import Enum
from typing import Dict, Set


class Role(str, Enum):
    ADMIN = "admin"
    USER = "user"


class Permission(str, Enum):
    # Task Permissions (own records)
    TASK_CREATE = "task.create"
    TASK_VIEW = "task.view"
    TASK_EDIT = "task.edit"
    TASK_DELETE = "task.delete"

    # Task Permissions (any record)
    TASK_VIEW_ANY = "task.view_any"
    TASK_EDIT_ANY = "task.edit_any"
    TASK_DELETE_ANY = "task.delete_any"
    TASK_ASSIGN = "task.assign"

    # User Management
    USER_CREATE = "user.create"
    USER_EDIT = "user.edit"
    USER_DELETE = "user.delete"
    USER_VIEW = "user.view"

    # Audit
    AUDIT_VIEW = "audit.view"
    AUDIT_VIEW_ANY = "audit.view_any"


# Role to Permissions Mapping
ROLE_PERMISSIONS: Dict[str, Set[Permission]] = {
    Role.ADMIN.value: {p for p in Permission},  # All permissions

    Role.USER.value: {
        Permission.TASK_CREATE, Permission.TASK_VIEW,
        Permission.TASK_EDIT, Permission.TASK_DELETE,
        Permission.AUDIT_VIEW,
    },
}


def get_permissions_for_role(role_name: str) -> Set[Permission]:
    """Get all permissions for a role"""
    return ROLE_PERMISSIONS.get(role_name, set())


def has_permission(role_name: str, permission: Permission) -> bool:
    """Check if a role grants a specific permission"""
    return permission in get_permissions_for_role(role_name)
