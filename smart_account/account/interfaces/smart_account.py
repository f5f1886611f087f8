from abc import ABC, abstractmethod
from typing import Sequence

from smart_account.account.domain.operation import Operation
from smart_account.account.domain.validation_outcome import ValidationOutcome


class SmartAccount(ABC):
    """
    Entry points of an operator-gated account.
    Every state-changing method takes the immediate caller explicitly.
    """
    @abstractmethod
    def execute(self, caller: str, destination: str, value: int, payload: bytes) -> None:
        pass

    @abstractmethod
    def execute_batch(
        self,
        caller: str,
        destinations: Sequence[str],
        values: Sequence[int],
        payloads: Sequence[bytes],
    ) -> None:
        pass

    @abstractmethod
    def validate_operation(
        self,
        caller: str,
        operation: Operation,
        operation_digest: bytes,
        missing_funds: int,
    ) -> ValidationOutcome:
        pass

    @abstractmethod
    def get_trusted_operator(self) -> str:
        pass

    @abstractmethod
    def receive(self, sender: str, value: int) -> None:
        pass
