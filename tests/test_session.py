"""
Session tests: capability checks, client scoping and the demo role switcher.
"""
import pytest

from core.permissions import Role, Permission
from core.session import Session, DemoModeDisabledError
from models.auth import SessionUser

from conftest import make_session, make_user


# ═══════════════════════════════════════════════════════════════
# 1. CAPABILITIES
# ═══════════════════════════════════════════════════════════════
class TestCapabilities:

    def test_no_user_can_nothing(self):
        session = Session()
        assert not session.is_authenticated
        assert session.permissions == frozenset()
        for permission in Permission:
            assert not session.can(permission)
        assert not session.is_agency_user()
        assert not session.is_client_user()
        assert not session.can_edit_content("x", "draft")
        assert not session.can_manage_user_of("client-1")

    def test_client_admin_capabilities(self):
        session = make_session(Role.CLIENT_ADMIN)
        assert session.is_client_user()
        assert session.can_approve_content()
        assert session.can_reject_content()
        assert not session.can_view_all_clients()
        assert session.can_manage_users()
        assert session.can_manage_user_of("client-1")
        assert not session.can_manage_user_of("client-2")

    def test_staff_edits_only_own_drafts(self):
        session = make_session(Role.AGENCY_STAFF)
        assert session.can_edit_content("user-staff", "draft")
        assert not session.can_edit_content("user-admin", "draft")
        assert not session.can_delete_content("user-staff", "approved")

    def test_pending_session_is_loading_until_resolved(self):
        session = Session.pending()
        assert session.is_loading
        session.resolve(make_user(Role.AGENCY_ADMIN))
        assert not session.is_loading
        assert session.has_role(Role.AGENCY_ADMIN)

    def test_clear_signs_out(self):
        session = make_session(Role.AGENCY_ADMIN)
        session.clear()
        assert session.user is None
        assert session.role is None

    def test_set_user_is_idempotent(self):
        session = Session()
        session.set_user(make_user(Role.AGENCY_STAFF))
        first = session.permissions
        session.set_user(make_user(Role.AGENCY_STAFF))
        assert session.permissions == first
        assert session.user == make_user(Role.AGENCY_STAFF)


class TestSessionUser:

    def test_client_roles_need_a_client(self):
        with pytest.raises(ValueError):
            SessionUser(id="u", name="No Client", email="nc@techcorp.com", role=Role.CLIENT_USER)

    def test_agency_roles_cannot_belong_to_a_client(self):
        with pytest.raises(ValueError):
            SessionUser(id="u", name="Agency", email="a@agency.io", role=Role.AGENCY_STAFF, client_id="client-1")


# ═══════════════════════════════════════════════════════════════
# 2. CLIENT SCOPING
# ═══════════════════════════════════════════════════════════════
class TestClientScoping:
    RECORDS = [
        {"id": 1, "client_id": "client-1"},
        {"id": 2, "client_id": "client-2"},
        {"id": 3, "client_id": None},
    ]

    def test_agency_sees_every_record(self):
        session = make_session(Role.AGENCY_STAFF)
        assert session.scope_client_id is None
        assert session.visible(self.RECORDS) == self.RECORDS

    @pytest.mark.parametrize("role", [Role.CLIENT_ADMIN, Role.CLIENT_USER])
    def test_client_sees_own_records(self, role):
        session = make_session(role)
        assert session.scope_client_id == "client-1"
        assert [r["id"] for r in session.visible(self.RECORDS)] == [1]

    def test_anonymous_sees_nothing(self):
        assert Session().visible(self.RECORDS) == []

    def test_custom_key_and_objects(self):
        session = make_session(Role.CLIENT_USER)
        clients = [make_user(Role.CLIENT_USER), make_user(Role.CLIENT_USER, client_id="client-2")]
        assert session.visible(clients) == clients[:1]
        assert session.visible([{"id": "client-1"}, {"id": "client-2"}], key="id") == [{"id": "client-1"}]


# ═══════════════════════════════════════════════════════════════
# 3. DEMO ROLE SWITCHER
# ═══════════════════════════════════════════════════════════════
class TestRoleSwitch:

    def test_disabled_outside_demo_mode(self):
        session = make_session(Role.AGENCY_ADMIN)
        with pytest.raises(DemoModeDisabledError):
            session.switch_role(Role.CLIENT_USER)
        assert session.role == Role.AGENCY_ADMIN

    def test_requires_a_user(self):
        with pytest.raises(ValueError):
            Session(demo_mode=True).switch_role(Role.CLIENT_USER)

    def test_switch_to_client_role_assigns_demo_client(self):
        session = make_session(Role.AGENCY_ADMIN, demo_mode=True)
        user = session.switch_role(Role.CLIENT_USER)
        assert user.role == Role.CLIENT_USER
        assert user.client_id == "client-1"
        assert session.can(Permission.VIEW_OWN_CLIENT)
        assert not session.can(Permission.CREATE_CONTENT)

    def test_switch_keeps_identity(self):
        session = make_session(Role.AGENCY_ADMIN, demo_mode=True)
        user = session.switch_role(Role.CLIENT_ADMIN, "client-4")
        assert user.id == "user-admin"
        assert user.client_id == "client-4"

    def test_switch_back_to_agency_drops_client(self):
        session = make_session(Role.CLIENT_USER, demo_mode=True)
        user = session.switch_role(Role.AGENCY_STAFF)
        assert user.client_id is None
        assert session.can_view_all_clients()
