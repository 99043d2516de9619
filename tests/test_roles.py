from skillsage.core.policy import FailurePolicy, policy_for
from skillsage.core.roles import ROLE_CAPABILITIES, Capability, Role, capabilities_of, is_privileged, roles_with


class TestRoleTable:
    def test_every_role_has_capabilities(self):
        assert set(ROLE_CAPABILITIES) == set(Role)

    def test_admin_capabilities_are_admin_only(self):
        for capability in (Capability.MANAGE_USERS, Capability.MANAGE_CONTENT, Capability.VIEW_AUDIT_LOG):
            assert roles_with(capability) == frozenset({Role.ADMIN})

    def test_member_roles_share_capabilities(self):
        assert capabilities_of(Role.USER) == capabilities_of(Role.STUDENT) == capabilities_of(Role.MENTOR)

    def test_only_admin_is_privileged(self):
        assert is_privileged(Role.ADMIN)
        assert not any(is_privileged(role) for role in (Role.USER, Role.STUDENT, Role.MENTOR))

    def test_roles_accept_string_values(self):
        assert capabilities_of("admin") == frozenset(Capability)


class TestFailurePolicy:
    def test_identity_fails_fast(self):
        assert policy_for("identity") == FailurePolicy.FAIL_FAST

    def test_ai_degrades(self):
        assert policy_for("ai") == FailurePolicy.DEGRADE
