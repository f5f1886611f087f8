from abc import ABC, abstractmethod
from typing import Sequence


class ExecutionDispatcher(ABC):
    """
    Forwards calls on behalf of the account.
    Failures are raised, never swallowed.
    """
    @abstractmethod
    def dispatch(self, account_address: str, destination: str, value: int, payload: bytes) -> None:
        pass

    @abstractmethod
    def dispatch_batch(
        self,
        account_address: str,
        destinations: Sequence[str],
        values: Sequence[int],
        payloads: Sequence[bytes],
    ) -> None:
        pass
