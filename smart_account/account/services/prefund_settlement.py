from typing import Optional

from smart_account.host.interfaces.host_ledger import HostLedger
from smart_account.observability.structured_runtime_logger import StructuredRuntimeLogger


class PrefundSettlement:
    """
    Reimburses the submitting relay out of the account balance.
    The transfer outcome is recorded but never checked: a failed payment does not abort validation.
    """

    def __init__(self, ledger: HostLedger, runtime_logger: Optional[StructuredRuntimeLogger] = None):
        self.ledger = ledger
        self.runtime_logger = runtime_logger or StructuredRuntimeLogger(component="prefund")

    def pay_prefund(self, account_address: str, recipient: str, amount: int) -> None:
        if amount < 0:
            raise ValueError("Prefund amount must be non-negative")
        if amount == 0:
            return
        result = self.ledger.call(account_address, recipient, amount, b"")
        if result.success:
            self.runtime_logger.emit("prefund_paid", account=account_address, recipient=recipient, amount=amount)
        else:
            self.runtime_logger.emit(
                "prefund_transfer_failed",
                account=account_address,
                recipient=recipient,
                amount=amount,
                return_data=result.data,
            )
