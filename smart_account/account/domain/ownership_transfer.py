from dataclasses import dataclass


@dataclass(frozen=True)
class OwnershipTransfer:
    previous_owner: str
    new_owner: str
