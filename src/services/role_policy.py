"""
Hierarquia de papéis e regras de elegibilidade.

Módulo único compartilhado entre o cliente (habilita/desabilita controles
da tabela) e o backend (bloqueia a operação de fato). No cliente as regras
são apenas de UX: a garantia real é a checagem do servidor.

Observação: superAdmin (3) fica abaixo de manager (4) na tabela de níveis,
mas continua sendo o "top-tier" para as regras especiais abaixo.
"""
import operator
from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, List, Optional

from src.models.user import UserRole

ROLE_LEVELS: Dict[str, int] = {
    UserRole.USER.value: 0,
    UserRole.MODERATOR.value: 1,
    UserRole.ADMIN.value: 2,
    UserRole.SUPER_ADMIN.value: 3,
    UserRole.MANAGER.value: 4,
}

# Ordem usada nas opções do dropdown
AVAILABLE_ROLES: List[str] = [role.value for role in UserRole]

ADMIN_ROLES: FrozenSet[str] = frozenset({
    UserRole.ADMIN.value,
    UserRole.SUPER_ADMIN.value,
    UserRole.MANAGER.value,
})

TOP_TIER_ROLE = UserRole.SUPER_ADMIN.value


def _role_value(role) -> Optional[str]:
    if isinstance(role, UserRole):
        return role.value
    return role


def role_level(role) -> Optional[int]:
    """Nível numérico do papel, ou None se o papel não estiver na tabela."""
    return ROLE_LEVELS.get(_role_value(role))


def _compare(left, right, op: Callable[[int, int], bool]) -> bool:
    # Papel desconhecido nunca satisfaz uma comparação
    left_level = role_level(left)
    right_level = role_level(right)
    if left_level is None or right_level is None:
        return False
    return op(left_level, right_level)


def is_admin_role(role) -> bool:
    return _role_value(role) in ADMIN_ROLES


def is_top_tier(role) -> bool:
    return _role_value(role) == TOP_TIER_ROLE


def is_dropdown_disabled(current_role, target_role, is_self: bool = False, loading: bool = False) -> bool:
    """O seletor de papel fica bloqueado durante requisições, na própria linha
    do operador e quando o alvo está acima do operador."""
    return (
        loading
        or is_self
        or _compare(current_role, target_role, operator.lt)
    )


def is_role_option_disabled(candidate_role, current_role, target_role) -> bool:
    return (
        _compare(candidate_role, current_role, operator.gt)
        or (is_top_tier(target_role) and not is_top_tier(current_role))
    )


def is_delete_disabled(current_role, target_role, is_self: bool = False, loading: bool = False) -> bool:
    return (
        loading
        or is_self
        or (_compare(current_role, target_role, operator.le) and not is_top_tier(current_role))
        or (is_top_tier(target_role) and not is_top_tier(current_role))
    )


@dataclass
class RowPermissions:
    dropdown_disabled: bool
    delete_disabled: bool
    disabled_options: FrozenSet[str] = field(default_factory=frozenset)

    def option_disabled(self, role: str) -> bool:
        return role in self.disabled_options


def row_permissions(current_role, target_role, is_self: bool, loading: bool) -> RowPermissions:
    """Todas as decisões de uma linha da tabela de uma vez."""
    return RowPermissions(
        dropdown_disabled=is_dropdown_disabled(current_role, target_role, is_self, loading),
        delete_disabled=is_delete_disabled(current_role, target_role, is_self, loading),
        disabled_options=frozenset(
            role for role in AVAILABLE_ROLES
            if is_role_option_disabled(role, current_role, target_role)
        ),
    )


# --- Checagens do lado do servidor ---

def can_change_role(actor_role, target_role, new_role, is_self: bool = False) -> bool:
    if not is_admin_role(actor_role):
        return False
    if _role_value(new_role) not in ROLE_LEVELS:
        return False
    if is_dropdown_disabled(actor_role, target_role, is_self):
        return False
    return not is_role_option_disabled(new_role, actor_role, target_role)


def can_delete(actor_role, target_role, is_self: bool = False) -> bool:
    if not is_admin_role(actor_role):
        return False
    return not is_delete_disabled(actor_role, target_role, is_self)
