from typing import Optional, Sequence

from smart_account.account.domain.account_errors import InvalidOwner
from smart_account.account.domain.operation import Operation
from smart_account.account.domain.validation_outcome import ValidationOutcome
from smart_account.account.interfaces.execution_dispatcher import ExecutionDispatcher
from smart_account.account.interfaces.ownership_store import OwnershipStore
from smart_account.account.interfaces.signature_validator import SignatureValidator
from smart_account.account.interfaces.smart_account import SmartAccount
from smart_account.account.security.authorization_gateway import AuthorizationGateway
from smart_account.account.security.signature_validator import EcdsaSignatureValidator
from smart_account.account.services.execution_dispatcher import StandardExecutionDispatcher
from smart_account.account.services.prefund_settlement import PrefundSettlement
from smart_account.host.domain.address import ZERO_ADDRESS, normalize_address
from smart_account.host.domain.call_context import CallContext
from smart_account.host.domain.host_errors import Revert
from smart_account.host.interfaces.host_ledger import HostLedger
from smart_account.host.interfaces.journaled_state import JournaledState
from smart_account.observability.structured_runtime_logger import StructuredRuntimeLogger


class OperatorSmartAccount(SmartAccount):
    """
    Account controlled by a single owner whose operations only a fixed operator may submit.

    The operator is bound at construction and never changes. The owner lives in the
    ownership store. Each state-changing entry point runs inside one host invocation,
    so a failure anywhere unwinds everything that invocation did.

    There is no nonce: a valid (operation, digest, signature) triple is accepted every
    time it is submitted. Prefund is paid whether or not the signature is accepted.
    """

    def __init__(
            self,
            address: str,
            operator: str,
            ownership_store: OwnershipStore,
            ledger: HostLedger,
            signature_validator: Optional[SignatureValidator] = None,
            dispatcher: Optional[ExecutionDispatcher] = None,
            prefund: Optional[PrefundSettlement] = None,
            runtime_logger: Optional[StructuredRuntimeLogger] = None,
    ):
        operator = normalize_address(operator)
        if operator == ZERO_ADDRESS:
            raise ValueError("Operator must not be the zero address")
        self._address = normalize_address(address)
        self._operator = operator
        self.ownership_store = ownership_store
        self.ledger = ledger
        self.runtime_logger = runtime_logger or StructuredRuntimeLogger()
        self.gateway = AuthorizationGateway(operator, ownership_store)
        self.signature_validator = signature_validator or EcdsaSignatureValidator()
        self.dispatcher = dispatcher or StandardExecutionDispatcher(ledger, self.runtime_logger)
        self.prefund = prefund or PrefundSettlement(ledger, self.runtime_logger)

        if isinstance(ownership_store, JournaledState):
            ledger.attach(ownership_store)
        ledger.deploy(self._address, self.handle_call)

    @property
    def address(self) -> str:
        return self._address

    @property
    def operator(self) -> str:
        return self._operator

    def get_trusted_operator(self) -> str:
        return self._operator

    def owner(self) -> str:
        return self.ownership_store.current_owner()

    def get_balance(self) -> int:
        return self.ledger.balance_of(self._address)

    def execute(self, caller: str, destination: str, value: int, payload: bytes) -> None:
        with self.ledger.atomic():
            self.gateway.require_operator_or_owner(caller)
            self.dispatcher.dispatch(self._address, destination, value, payload)
            self.runtime_logger.emit(
                "account_executed",
                account=self._address,
                caller=caller,
                destination=destination,
                value=value,
            )

    def execute_batch(
        self,
        caller: str,
        destinations: Sequence[str],
        values: Sequence[int],
        payloads: Sequence[bytes],
    ) -> None:
        with self.ledger.atomic():
            self.gateway.require_operator_or_owner(caller)
            self.dispatcher.dispatch_batch(self._address, destinations, values, payloads)
            self.runtime_logger.emit(
                "account_batch_executed",
                account=self._address,
                caller=caller,
                calls=len(destinations),
            )

    def validate_operation(
        self,
        caller: str,
        operation: Operation,
        operation_digest: bytes,
        missing_funds: int,
    ) -> ValidationOutcome:
        with self.ledger.atomic():
            self.gateway.require_operator(caller)
            outcome = self.signature_validator.validate(
                operation_digest,
                operation.signature,
                self.ownership_store.current_owner(),
            )
            self.prefund.pay_prefund(self._address, normalize_address(caller), missing_funds)
            self.runtime_logger.emit(
                "operation_validated",
                account=self._address,
                digest=operation_digest,
                status=outcome.status,
                missing_funds=missing_funds,
            )
        return outcome

    def receive(self, sender: str, value: int) -> None:
        with self.ledger.atomic():
            self.ledger.transfer(sender, self._address, value)
            self.runtime_logger.emit("account_received", account=self._address, sender=sender, value=value)

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        with self.ledger.atomic():
            self.gateway.require_owner(caller)
            new_owner = normalize_address(new_owner)
            if new_owner == ZERO_ADDRESS:
                raise InvalidOwner()
            self._set_owner(new_owner)

    def renounce_ownership(self, caller: str) -> None:
        with self.ledger.atomic():
            self.gateway.require_owner(caller)
            self._set_owner(ZERO_ADDRESS)

    def handle_call(self, ctx: CallContext) -> bytes:
        # Plain value transfers only; the account has no fallback for call data.
        if ctx.payload:
            raise Revert(b"")
        self.runtime_logger.emit("account_received", account=self._address, sender=ctx.sender, value=ctx.value)
        return b""

    def _set_owner(self, new_owner: str) -> None:
        previous = self.ownership_store.current_owner()
        self.ownership_store.set_owner(new_owner)
        self.runtime_logger.emit(
            "ownership_transferred",
            account=self._address,
            previous_owner=previous,
            new_owner=new_owner,
        )
