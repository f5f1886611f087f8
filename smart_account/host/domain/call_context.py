from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from smart_account.host.interfaces.host_ledger import HostLedger


@dataclass(frozen=True)
class CallContext:
    """
    What a deployed handler sees while it runs: who called it, with how much, and what payload.
    `ledger` lets the handler make nested calls (including back into the caller).
    """
    ledger: "HostLedger"
    sender: str
    destination: str
    value: int
    payload: bytes
