from abc import ABC, abstractmethod
from typing import List

from smart_account.account.domain.ownership_transfer import OwnershipTransfer


class OwnershipStore(ABC):
    """
    Source of truth for the account's owner.
    The only writer path for the owner identity.
    """
    @abstractmethod
    def current_owner(self) -> str:
        pass

    @abstractmethod
    def set_owner(self, new_owner: str) -> None:
        pass

    @abstractmethod
    def get_history(self) -> List[OwnershipTransfer]:
        pass
