class Revert(Exception):
    """Raised by a deployed handler to fail the current call with raw return data."""

    def __init__(self, data: bytes = b""):
        super().__init__(data.hex() if data else "revert")
        self.data = data


class InsufficientBalance(Exception):
    """Raised when a transfer would take an address below zero."""

    def __init__(self, address: str, balance: int, requested: int):
        super().__init__(f"{address} holds {balance}, requested {requested}")
        self.address = address
        self.balance = balance
        self.requested = requested
