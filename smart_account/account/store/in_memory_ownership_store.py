from typing import List, Tuple

from smart_account.account.domain.ownership_transfer import OwnershipTransfer
from smart_account.account.interfaces.ownership_store import OwnershipStore
from smart_account.host.domain.address import normalize_address
from smart_account.host.interfaces.journaled_state import JournaledState


class InMemoryOwnershipStore(OwnershipStore, JournaledState):
    """
    In-memory owner slot with an append-only transfer history.
    """

    def __init__(self, initial_owner: str):
        self._owner = normalize_address(initial_owner)
        self._history: List[OwnershipTransfer] = []

    def current_owner(self) -> str:
        return self._owner

    def set_owner(self, new_owner: str) -> None:
        new_owner = normalize_address(new_owner)
        self._history.append(OwnershipTransfer(previous_owner=self._owner, new_owner=new_owner))
        self._owner = new_owner

    def get_history(self) -> List[OwnershipTransfer]:
        return list(self._history)

    def snapshot(self) -> Tuple[str, List[OwnershipTransfer]]:
        return self._owner, list(self._history)

    def restore(self, snapshot: Tuple[str, List[OwnershipTransfer]]) -> None:
        self._owner, history = snapshot
        self._history = list(history)
