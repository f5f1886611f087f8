import logging
from contextlib import contextmanager
from threading import RLock
from typing import Any, Dict, Iterator, List, Tuple

from smart_account.host.domain.address import normalize_address
from smart_account.host.domain.call_context import CallContext
from smart_account.host.domain.call_result import CallResult
from smart_account.host.domain.host_errors import InsufficientBalance, Revert
from smart_account.host.interfaces.host_ledger import CallHandler, HostLedger
from smart_account.host.interfaces.journaled_state import JournaledState

logger = logging.getLogger(__name__)

Checkpoint = Tuple[Dict[str, int], List[Any]]


class InMemoryHostLedger(HostLedger):
    """
    Single-process host used by the simulation, the dev server and tests.

    Every call is journaled: balances and attached state are captured before the
    call and restored if the destination reverts, so a failed call leaves no trace.
    `atomic()` gives the same guarantee to a whole invocation and serialises
    invocations behind a re-entrant lock.
    """

    def __init__(self):
        self._balances: Dict[str, int] = {}
        self._handlers: Dict[str, CallHandler] = {}
        self._journaled: List[JournaledState] = []
        self._lock = RLock()

    def balance_of(self, address: str) -> int:
        return self._balances.get(normalize_address(address), 0)

    def credit(self, address: str, amount: int) -> None:
        if amount < 0:
            raise ValueError("Credit amount must be non-negative")
        key = normalize_address(address)
        self._balances[key] = self._balances.get(key, 0) + amount

    def deploy(self, address: str, handler: CallHandler) -> None:
        self._handlers[normalize_address(address)] = handler

    def attach(self, state: JournaledState) -> None:
        self._journaled.append(state)

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        if amount < 0:
            raise ValueError("Transfer amount must be non-negative")
        sender = normalize_address(sender)
        recipient = normalize_address(recipient)
        balance = self._balances.get(sender, 0)
        if balance < amount:
            raise InsufficientBalance(sender, balance, amount)
        self._balances[sender] = balance - amount
        self._balances[recipient] = self._balances.get(recipient, 0) + amount

    def call(self, sender: str, destination: str, value: int, payload: bytes = b"") -> CallResult:
        if value < 0:
            raise ValueError("Call value must be non-negative")
        sender = normalize_address(sender)
        destination = normalize_address(destination)
        checkpoint = self._checkpoint()
        try:
            self.transfer(sender, destination, value)
            handler = self._handlers.get(destination)
            returned = None
            if handler is not None:
                returned = handler(
                    CallContext(
                        ledger=self,
                        sender=sender,
                        destination=destination,
                        value=value,
                        payload=bytes(payload),
                    )
                )
        except Revert as exc:
            self._rollback(checkpoint)
            logger.debug("Call %s -> %s reverted: %s", sender, destination, exc.data.hex())
            return CallResult(success=False, data=exc.data)
        except InsufficientBalance as exc:
            self._rollback(checkpoint)
            logger.debug("Call %s -> %s underfunded: %s", sender, destination, exc)
            return CallResult(success=False, data=b"")
        except Exception as exc:
            # A crashing callee is a failed call with no return data.
            self._rollback(checkpoint)
            logger.debug("Call %s -> %s failed: %r", sender, destination, exc)
            return CallResult(success=False, data=b"")
        return CallResult(success=True, data=bytes(returned or b""))

    @contextmanager
    def atomic(self) -> Iterator["InMemoryHostLedger"]:
        with self._lock:
            checkpoint = self._checkpoint()
            try:
                yield self
            except BaseException:
                self._rollback(checkpoint)
                raise

    def _checkpoint(self) -> Checkpoint:
        return dict(self._balances), [state.snapshot() for state in self._journaled]

    def _rollback(self, checkpoint: Checkpoint) -> None:
        balances, snapshots = checkpoint
        self._balances = dict(balances)
        for state, snapshot in zip(self._journaled, snapshots):
            state.restore(snapshot)
