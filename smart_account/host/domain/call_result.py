from dataclasses import dataclass


@dataclass(frozen=True)
class CallResult:
    """
    Raw outcome of a single host call.
    Callers inspect `success` explicitly; a failed call never raises by itself.
    """
    success: bool
    data: bytes = b""
