from typing import Any, Dict, List, Optional

from eth_utils import decode_hex
from fastapi import APIRouter, Depends, Header, HTTPException

from smart_account.account.domain.account_errors import (
    CallFailed,
    NotFromOperator,
    NotFromOperatorOrOwner,
    WrongArrayLengths,
)
from smart_account.account.domain.operation import Operation
from smart_account.account.security.relay_tokens import RelayAuthError, RelayClaims, RelayTokenVerifier
from smart_account.account.services.operator_smart_account import OperatorSmartAccount


def _hex(payload: Dict[str, Any], key: str, default: Optional[str] = None) -> bytes:
    raw = payload.get(key, default)
    if raw is None:
        raise HTTPException(status_code=400, detail=f"Missing field: {key}")
    try:
        return decode_hex(str(raw))
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Field {key} is not hex")


def _int(payload: Dict[str, Any], key: str, default: int = 0) -> int:
    try:
        value = int(payload.get(key, default))
    except (TypeError, ValueError):
        raise HTTPException(status_code=400, detail=f"Field {key} is not an integer")
    if value < 0:
        raise HTTPException(status_code=400, detail=f"Field {key} must be non-negative")
    return value


def build_account_router(account: OperatorSmartAccount, verifier: RelayTokenVerifier):
    router = APIRouter(prefix="/account/v1", tags=["account"])

    def _claims(authorization: Optional[str] = Header(None)) -> RelayClaims:
        if not authorization or not authorization.startswith("Bearer "):
            raise HTTPException(status_code=401, detail="Missing bearer token")
        token = authorization.split(" ", 1)[1].strip()
        try:
            return verifier.verify(token)
        except RelayAuthError as exc:
            raise HTTPException(status_code=401, detail=str(exc))

    def _call_failed(exc: CallFailed) -> HTTPException:
        return HTTPException(
            status_code=422,
            detail={"error": "CallFailed", "return_data": "0x" + exc.return_data.hex()},
        )

    @router.get("/operator")
    def get_operator():
        return {"operator": account.get_trusted_operator()}

    @router.get("/owner")
    def get_owner():
        return {"owner": account.owner()}

    @router.get("/balance")
    def get_balance():
        return {"address": account.address, "balance": account.get_balance()}

    @router.post("/operations/validate")
    def validate_operation(payload: Dict[str, Any], claims: RelayClaims = Depends(_claims)):
        operation = Operation(
            destination=str(payload.get("destination", "")),
            value=_int(payload, "value"),
            payload=_hex(payload, "payload", "0x"),
            signature=_hex(payload, "signature"),
            digest=_hex(payload, "digest"),
        )
        missing_funds = _int(payload, "missing_funds")
        try:
            outcome = account.validate_operation(claims.caller, operation, operation.digest, missing_funds)
        except NotFromOperator:
            raise HTTPException(status_code=403, detail="NotFromOperator")
        return {"status": outcome.status.value, "validation_data": outcome.pack()}

    @router.post("/execute")
    def execute(payload: Dict[str, Any], claims: RelayClaims = Depends(_claims)):
        destination = payload.get("destination")
        if not destination:
            raise HTTPException(status_code=400, detail="Missing field: destination")
        try:
            account.execute(claims.caller, str(destination), _int(payload, "value"), _hex(payload, "payload", "0x"))
        except NotFromOperatorOrOwner:
            raise HTTPException(status_code=403, detail="NotFromOperatorOrOwner")
        except CallFailed as exc:
            raise _call_failed(exc)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        return {"status": "executed"}

    @router.post("/execute-batch")
    def execute_batch(payload: Dict[str, Any], claims: RelayClaims = Depends(_claims)):
        calls: List[Dict[str, Any]] = payload.get("calls") or []
        destinations = [str(call.get("destination", "")) for call in calls]
        values = [_int(call, "value") for call in calls]
        payloads = [_hex(call, "payload", "0x") for call in calls]
        try:
            account.execute_batch(claims.caller, destinations, values, payloads)
        except NotFromOperatorOrOwner:
            raise HTTPException(status_code=403, detail="NotFromOperatorOrOwner")
        except WrongArrayLengths:
            raise HTTPException(status_code=400, detail="WrongArrayLengths")
        except CallFailed as exc:
            raise _call_failed(exc)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        return {"status": "executed", "calls": len(calls)}

    return router
