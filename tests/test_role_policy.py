import pytest

from src.models.user import UserRole
from src.services import role_policy
from src.services.role_policy import (
    AVAILABLE_ROLES,
    can_change_role,
    can_delete,
    is_admin_role,
    is_delete_disabled,
    is_dropdown_disabled,
    is_role_option_disabled,
    role_level,
    row_permissions,
)

ROLES = ["user", "moderator", "admin", "superAdmin", "manager"]

# linha = papel do operador, coluna = papel do alvo
DROPDOWN_DISABLED = {
    "user":       [False, True,  True,  True,  True],
    "moderator":  [False, False, True,  True,  True],
    "admin":      [False, False, False, True,  True],
    "superAdmin": [False, False, False, False, True],
    "manager":    [False, False, False, False, False],
}

DELETE_DISABLED = {
    "user":       [True,  True,  True,  True,  True],
    "moderator":  [False, True,  True,  True,  True],
    "admin":      [False, False, True,  True,  True],
    "superAdmin": [False, False, False, False, False],
    "manager":    [False, False, False, True,  True],
}

ALL_PAIRS = [(current, target) for current in ROLES for target in ROLES]


def test_role_table_is_literal():
    assert AVAILABLE_ROLES == ROLES
    assert [role_level(r) for r in ROLES] == [0, 1, 2, 3, 4]
    # manager fica acima de superAdmin na tabela
    assert role_level("manager") > role_level("superAdmin")
    assert role_level(UserRole.ADMIN) == 2


@pytest.mark.parametrize("current,target", ALL_PAIRS)
def test_dropdown_disabled_for_every_pair(current, target):
    expected = DROPDOWN_DISABLED[current][ROLES.index(target)]
    assert is_dropdown_disabled(current, target) is expected


@pytest.mark.parametrize("current,target", ALL_PAIRS)
def test_delete_disabled_for_every_pair(current, target):
    expected = DELETE_DISABLED[current][ROLES.index(target)]
    assert is_delete_disabled(current, target) is expected


@pytest.mark.parametrize("current,target", ALL_PAIRS)
def test_loading_or_self_disables_both_controls(current, target):
    assert is_dropdown_disabled(current, target, loading=True)
    assert is_delete_disabled(current, target, loading=True)
    assert is_dropdown_disabled(current, target, is_self=True)
    assert is_delete_disabled(current, target, is_self=True)


def test_admin_acting_on_moderator():
    perms = row_permissions("admin", "moderator", is_self=False, loading=False)
    assert perms.delete_disabled is False
    assert perms.dropdown_disabled is False
    assert [r for r in ROLES if not perms.option_disabled(r)] == ["user", "moderator", "admin"]
    assert perms.disabled_options == frozenset({"superAdmin", "manager"})


def test_manager_acting_on_super_admin_is_blocked_by_top_tier_rule():
    perms = row_permissions("manager", "superAdmin", is_self=False, loading=False)
    # nível 4 > 3, mas o alvo é top-tier e o operador não
    assert perms.dropdown_disabled is False
    assert perms.delete_disabled is True
    assert perms.disabled_options == frozenset(ROLES)


def test_super_admin_cannot_grant_manager():
    assert is_role_option_disabled("manager", "superAdmin", "user")
    assert not is_role_option_disabled("superAdmin", "superAdmin", "user")


def test_peers_can_change_role_but_not_delete():
    assert not is_dropdown_disabled("admin", "admin")
    assert is_delete_disabled("admin", "admin")


def test_unknown_roles_never_satisfy_level_comparisons():
    assert role_level("guest") is None
    assert not is_dropdown_disabled("guest", "manager")
    assert not is_delete_disabled("guest", "admin")
    assert not is_role_option_disabled("manager", "guest", "user")
    assert not is_role_option_disabled("ghost", "admin", "user")


def test_admin_roles():
    assert {r for r in ROLES if is_admin_role(r)} == {"admin", "superAdmin", "manager"}
    assert not is_admin_role(None)
    assert role_policy.TOP_TIER_ROLE == "superAdmin"


class TestServerChecks:
    def test_change_role_follows_client_rules(self):
        assert can_change_role("admin", "moderator", "admin")
        assert not can_change_role("admin", "moderator", "manager")
        assert not can_change_role("admin", "manager", "user")
        assert not can_change_role("manager", "superAdmin", "user")
        assert can_change_role("superAdmin", "superAdmin", "user")

    def test_change_role_rejects_self_unknown_and_non_admins(self):
        assert not can_change_role("manager", "user", "admin", is_self=True)
        assert not can_change_role("manager", "user", "root")
        assert not can_change_role("moderator", "user", "user")
        assert not can_change_role("guest", "user", "user")

    def test_delete(self):
        assert can_delete("admin", "moderator")
        assert not can_delete("admin", "admin")
        assert not can_delete("manager", "superAdmin")
        assert can_delete("superAdmin", "manager")
        assert not can_delete("superAdmin", "user", is_self=True)
        # papel desconhecido passa nas regras de UI, mas não no servidor
        assert not can_delete("guest", "user")
