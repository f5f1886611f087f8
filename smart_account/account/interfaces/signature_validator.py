from abc import ABC, abstractmethod

from smart_account.account.domain.validation_outcome import ValidationOutcome


class SignatureValidator(ABC):
    """
    Decides whether a signature over an operation digest was produced by the owner.
    Must be a pure function of its inputs: no state reads beyond its arguments, no side effects.
    """
    @abstractmethod
    def validate(self, operation_digest: bytes, signature: bytes, owner: str) -> ValidationOutcome:
        pass
