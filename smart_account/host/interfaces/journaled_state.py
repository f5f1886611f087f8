from abc import ABC, abstractmethod
from typing import Any


class JournaledState(ABC):
    """
    State that the host ledger can capture before a call and put back if the call is unwound.
    """
    @abstractmethod
    def snapshot(self) -> Any:
        pass

    @abstractmethod
    def restore(self, snapshot: Any) -> None:
        pass
