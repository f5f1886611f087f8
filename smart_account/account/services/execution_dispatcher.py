from typing import Optional, Sequence

from smart_account.account.domain.account_errors import CallFailed, WrongArrayLengths
from smart_account.account.interfaces.execution_dispatcher import ExecutionDispatcher
from smart_account.host.interfaces.host_ledger import HostLedger
from smart_account.observability.structured_runtime_logger import StructuredRuntimeLogger


class StandardExecutionDispatcher(ExecutionDispatcher):
    """
    Fire-and-forget call primitive for the account.
    A failed call raises CallFailed with the callee's raw return data; successful return data is dropped.
    No retries.
    """

    def __init__(self, ledger: HostLedger, runtime_logger: Optional[StructuredRuntimeLogger] = None):
        self.ledger = ledger
        self.runtime_logger = runtime_logger or StructuredRuntimeLogger(component="dispatcher")

    def dispatch(self, account_address: str, destination: str, value: int, payload: bytes) -> None:
        result = self.ledger.call(account_address, destination, value, payload)
        if not result.success:
            self.runtime_logger.emit(
                "call_failed",
                account=account_address,
                destination=destination,
                value=value,
                return_data=result.data,
            )
            raise CallFailed(result.data)

    def dispatch_batch(
        self,
        account_address: str,
        destinations: Sequence[str],
        values: Sequence[int],
        payloads: Sequence[bytes],
    ) -> None:
        # Empty values means every call carries zero value.
        if len(destinations) != len(payloads) or (len(values) != 0 and len(values) != len(destinations)):
            raise WrongArrayLengths()
        for index, destination in enumerate(destinations):
            value = values[index] if values else 0
            self.dispatch(account_address, destination, value, payloads[index])
