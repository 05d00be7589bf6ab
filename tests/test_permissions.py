"""
RBAC Permission Tests for AgencyHub
Covers the role/permission matrix, the ownership rules for content and users,
and verifies that every backend route declares a guard dependency.
"""
import importlib
import re

import pytest

from core.permissions import (
    Role, Permission, PERMISSION_MATRIX, ROLE_DISPLAY_NAMES, AGENCY_ROLES, CLIENT_ROLES,
    permissions_for, has_permission, is_agency_role, is_client_role, role_display_name,
    can_edit_content, can_delete_content, can_manage_user_of,
)

EXPECTED_PERMISSIONS = {
    Role.AGENCY_ADMIN: set(Permission),
    Role.AGENCY_STAFF: {
        Permission.CREATE_CONTENT, Permission.EDIT_CONTENT, Permission.DELETE_CONTENT,
        Permission.VIEW_ALL_CLIENTS, Permission.VIEW_OWN_CLIENT, Permission.VIEW_ANALYTICS,
        Permission.MANAGE_USERS,
    },
    Role.CLIENT_ADMIN: {
        Permission.APPROVE_CONTENT, Permission.REJECT_CONTENT, Permission.VIEW_OWN_CLIENT,
        Permission.VIEW_ANALYTICS, Permission.MANAGE_USERS, Permission.BILLING_MANAGEMENT,
    },
    Role.CLIENT_USER: {Permission.VIEW_OWN_CLIENT, Permission.VIEW_ANALYTICS},
}

GUARDED_ROUTE_MODULES = [
    "routes.dashboard", "routes.clients", "routes.projects", "routes.campaigns", "routes.blogs",
    "routes.messages", "routes.approvals", "routes.analytics", "routes.users", "routes.billing",
    "routes.settings", "routes.notifications", "routes.onboarding",
]
GUARDS = ("check_permission(", "require_session", "require_onboarded_session")


# ═══════════════════════════════════════════════════════════════
# 1. PERMISSION MATRIX
# ═══════════════════════════════════════════════════════════════
class TestPermissionMatrix:
    """The matrix is explicit per role and covers every role."""

    @pytest.mark.parametrize("role", list(Role))
    def test_role_permissions(self, role):
        assert set(permissions_for(role)) == EXPECTED_PERMISSIONS[role]

    def test_every_role_has_a_display_name(self):
        assert set(ROLE_DISPLAY_NAMES) == set(Role)
        assert role_display_name(Role.CLIENT_ADMIN) == "Client Admin"

    def test_every_role_has_permissions(self):
        for role in Role:
            assert PERMISSION_MATRIX[role], f"{role.value} has no permissions"

    def test_agency_and_client_roles_partition_roles(self):
        assert AGENCY_ROLES | CLIENT_ROLES == set(Role)
        assert not AGENCY_ROLES & CLIENT_ROLES
        for role in Role:
            assert is_agency_role(role) != is_client_role(role)

    def test_accepts_raw_string_values(self):
        assert has_permission("CLIENT_ADMIN", "APPROVE_CONTENT")
        assert not has_permission("AGENCY_STAFF", "APPROVE_CONTENT")

    def test_matrix_is_read_only(self):
        with pytest.raises(TypeError):
            PERMISSION_MATRIX[Role.CLIENT_USER] = frozenset(Permission)

    def test_only_client_admins_and_agency_admins_approve(self):
        approvers = {role for role in Role if has_permission(role, Permission.APPROVE_CONTENT)}
        assert approvers == {Role.AGENCY_ADMIN, Role.CLIENT_ADMIN}


# ═══════════════════════════════════════════════════════════════
# 2. OWNERSHIP RULES
# ═══════════════════════════════════════════════════════════════
class TestContentOwnership:
    """Admins edit anything; staff only their own content before approval."""

    def test_admin_edits_anything(self):
        assert can_edit_content(Role.AGENCY_ADMIN, "someone-else", "me", "published")
        assert can_delete_content(Role.AGENCY_ADMIN)

    @pytest.mark.parametrize("status", ["draft", "rejected"])
    def test_staff_edits_own_editable_content(self, status):
        assert can_edit_content(Role.AGENCY_STAFF, "me", "me", status)
        assert can_delete_content(Role.AGENCY_STAFF, "me", "me", status)

    @pytest.mark.parametrize("status", ["pending_review", "approved", "published"])
    def test_staff_cannot_edit_content_after_submission(self, status):
        assert not can_edit_content(Role.AGENCY_STAFF, "me", "me", status)
        assert not can_delete_content(Role.AGENCY_STAFF, "me", "me", status)

    def test_staff_cannot_edit_others_content(self):
        assert not can_edit_content(Role.AGENCY_STAFF, "someone-else", "me", "draft")

    def test_staff_without_author_cannot_edit(self):
        assert not can_edit_content(Role.AGENCY_STAFF, None, "me", "draft")

    @pytest.mark.parametrize("role", [Role.CLIENT_ADMIN, Role.CLIENT_USER])
    def test_client_roles_never_edit(self, role):
        assert not can_edit_content(role, "me", "me", "draft")
        assert not can_delete_content(role, "me", "me", "draft")


class TestUserManagement:

    def test_agency_admin_manages_everyone(self):
        assert can_manage_user_of(Role.AGENCY_ADMIN, "client-9", None)
        assert can_manage_user_of(Role.AGENCY_ADMIN, None, None)

    def test_client_admin_manages_own_client_only(self):
        assert can_manage_user_of(Role.CLIENT_ADMIN, "client-1", "client-1")
        assert not can_manage_user_of(Role.CLIENT_ADMIN, "client-2", "client-1")
        assert not can_manage_user_of(Role.CLIENT_ADMIN, None, None)

    @pytest.mark.parametrize("role", [Role.AGENCY_STAFF, Role.CLIENT_USER])
    def test_other_roles_manage_nobody(self, role):
        assert not can_manage_user_of(role, "client-1", "client-1")


# ═══════════════════════════════════════════════════════════════
# 3. BACKEND ROUTE GUARD COVERAGE
# ═══════════════════════════════════════════════════════════════
class TestRouteGuardCoverage:
    """Every endpoint outside login/signup must declare a guard dependency."""

    def _endpoint_blocks(self, module_path):
        mod = importlib.import_module(module_path)
        source = open(mod.__file__).read()
        return re.split(r"\n(?=@router\.)", source)[1:]

    @pytest.mark.parametrize("module_path", GUARDED_ROUTE_MODULES)
    def test_routes_declare_a_guard(self, module_path):
        for block in self._endpoint_blocks(module_path):
            header = block.split("\n")[0]
            assert any(guard in block for guard in GUARDS), f"{module_path}: {header} has no guard"

    def test_only_access_check_uses_raw_session(self):
        for module_path in GUARDED_ROUTE_MODULES:
            source = open(importlib.import_module(module_path).__file__).read()
            assert "Depends(get_current_session)" not in source, f"{module_path} bypasses the guard"

    def test_billing_requires_billing_management(self):
        source = open(importlib.import_module("routes.billing").__file__).read()
        assert source.count("check_permission(Permission.BILLING_MANAGEMENT)") == 2

    def test_calendar_requires_approve_content(self):
        for block in self._endpoint_blocks("routes.campaigns"):
            if '"/calendar"' in block.split("\n")[0]:
                assert "check_permission(Permission.APPROVE_CONTENT)" in block
                break
        else:
            pytest.fail("calendar route missing")
