import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def _encode(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if hasattr(value, "value"):  # Enum
        return value.value
    return str(value)


class StructuredRuntimeLogger:
    """
    JSON-lines event logger for account entry points.
    Byte strings are written as 0x-prefixed hex.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, component: str = "account"):
        self._logger = logger or logging.getLogger("smart_account.runtime")
        self.component = component

    def emit(self, event_type: str, **fields: Any) -> None:
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "component": self.component,
            "event_type": event_type,
        }
        payload.update(fields)
        self._logger.info(json.dumps(payload, default=_encode, ensure_ascii=True))
