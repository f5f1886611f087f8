from eth_utils import keccak

from smart_account.host.domain.host_errors import Revert


def error_selector(signature: str) -> bytes:
    return keccak(text=signature)[:4]


class AccountError(Revert):
    """
    Base class for errors that abort an account invocation.
    Each error is also a revert whose data starts with the error's selector,
    so a failure inside a nested call surfaces to the outer caller as return data.
    """
    signature = "AccountError()"

    def __init__(self, detail: bytes = b""):
        super().__init__(error_selector(self.signature) + detail)


class NotFromOperator(AccountError):
    signature = "NotFromOperator()"


class NotFromOperatorOrOwner(AccountError):
    signature = "NotFromOperatorOrOwner()"


class NotOwner(AccountError):
    signature = "NotOwner()"


class InvalidOwner(AccountError):
    signature = "InvalidOwner()"


class WrongArrayLengths(AccountError):
    signature = "WrongArrayLengths()"


class CallFailed(AccountError):
    """Raised when a dispatched call fails; carries the inner call's raw return data."""
    signature = "CallFailed(bytes)"

    def __init__(self, return_data: bytes = b""):
        super().__init__(return_data)
        self.return_data = return_data
