from typing import Optional

from smart_account.account.domain.account_errors import NotFromOperator, NotFromOperatorOrOwner, NotOwner
from smart_account.account.interfaces.ownership_store import OwnershipStore
from smart_account.host.domain.address import ZERO_ADDRESS, normalize_address


def _caller_identity(caller: str) -> Optional[str]:
    # Unparseable callers and the zero address never match any identity.
    try:
        identity = normalize_address(caller)
    except ValueError:
        return None
    if identity == ZERO_ADDRESS:
        return None
    return identity


class AuthorizationGateway:
    """
    Caller checks run at the top of every state-changing entry point.
    Reads only the fixed operator and the ownership store, so the answer is the same under reentry.
    A renounced account has the zero address as owner; nobody is its owner.
    """

    def __init__(self, operator: str, ownership_store: OwnershipStore):
        self._operator = normalize_address(operator)
        self._ownership_store = ownership_store

    @property
    def operator(self) -> str:
        return self._operator

    def is_operator(self, caller: str) -> bool:
        identity = _caller_identity(caller)
        return identity is not None and identity == self._operator

    def is_owner(self, caller: str) -> bool:
        identity = _caller_identity(caller)
        return identity is not None and identity == self._ownership_store.current_owner()

    def require_operator(self, caller: str) -> None:
        if not self.is_operator(caller):
            raise NotFromOperator()

    def require_operator_or_owner(self, caller: str) -> None:
        if not (self.is_operator(caller) or self.is_owner(caller)):
            raise NotFromOperatorOrOwner()

    def require_owner(self, caller: str) -> None:
        if not self.is_owner(caller):
            raise NotOwner()
