from dataclasses import dataclass


@dataclass(frozen=True)
class Operation:
    """
    A requested action plus the owner's authorization for it.
    Built by the submitter, handed to the account once per validation attempt and never stored.
    """
    destination: str
    value: int
    payload: bytes
    signature: bytes
    digest: bytes = b""
