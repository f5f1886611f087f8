from dataclasses import dataclass
from enum import Enum

SIG_VALIDATION_SUCCESS = 0
SIG_VALIDATION_FAILED = 1

_ADDRESS_MASK = (1 << 160) - 1
_TIMESTAMP_MASK = (1 << 48) - 1


class ValidationStatus(Enum):
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class ValidationOutcome:
    """
    Binary result of signature validation.
    A zero `valid_until` means the operation never expires; this account always emits
    an unrestricted window, so the packed form is either 0 or 1.
    """
    status: ValidationStatus
    valid_until: int = 0
    valid_after: int = 0

    @classmethod
    def accepted(cls) -> "ValidationOutcome":
        return cls(ValidationStatus.ACCEPTED)

    @classmethod
    def rejected(cls) -> "ValidationOutcome":
        return cls(ValidationStatus.REJECTED)

    @property
    def is_accepted(self) -> bool:
        return self.status == ValidationStatus.ACCEPTED

    def pack(self) -> int:
        # authorizer | validUntil << 160 | validAfter << 208
        authorizer = SIG_VALIDATION_SUCCESS if self.is_accepted else SIG_VALIDATION_FAILED
        return (
            authorizer
            | (self.valid_until & _TIMESTAMP_MASK) << 160
            | (self.valid_after & _TIMESTAMP_MASK) << 208
        )

    @classmethod
    def unpack(cls, packed: int) -> "ValidationOutcome":
        authorizer = packed & _ADDRESS_MASK
        status = ValidationStatus.ACCEPTED if authorizer == SIG_VALIDATION_SUCCESS else ValidationStatus.REJECTED
        return cls(
            status=status,
            valid_until=(packed >> 160) & _TIMESTAMP_MASK,
            valid_after=(packed >> 208) & _TIMESTAMP_MASK,
        )
