from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Callable, Optional

from smart_account.host.domain.call_context import CallContext
from smart_account.host.domain.call_result import CallResult
from smart_account.host.interfaces.journaled_state import JournaledState

CallHandler = Callable[[CallContext], Optional[bytes]]


class HostLedger(ABC):
    """
    The environment an account lives in: balances, deployed code and the call primitive.
    The host, not the account, is responsible for all-or-nothing invocations.
    """
    @abstractmethod
    def balance_of(self, address: str) -> int:
        pass

    @abstractmethod
    def credit(self, address: str, amount: int) -> None:
        pass

    @abstractmethod
    def deploy(self, address: str, handler: CallHandler) -> None:
        pass

    @abstractmethod
    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        pass

    @abstractmethod
    def call(self, sender: str, destination: str, value: int, payload: bytes = b"") -> CallResult:
        pass

    @abstractmethod
    def attach(self, state: JournaledState) -> None:
        pass

    @abstractmethod
    def atomic(self) -> AbstractContextManager:
        pass
