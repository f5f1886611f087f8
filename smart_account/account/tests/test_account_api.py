import pytest

fastapi = pytest.importorskip("fastapi")
from fastapi import FastAPI
from fastapi.testclient import TestClient

from smart_account.account.interfaces.account_api import build_account_router
from smart_account.account.security.relay_tokens import RelayTokenVerifier
from smart_account.host.domain.host_errors import Revert

SINK = "0x00000000000000000000000000000000000000bb"
REVERTER = "0x00000000000000000000000000000000000000dd"


@pytest.fixture
def verifier():
    return RelayTokenVerifier(secret="api-secret")


@pytest.fixture
def client(account, verifier):
    app = FastAPI()
    app.include_router(build_account_router(account, verifier))
    return TestClient(app)


def _auth(verifier, caller: str) -> dict:
    return {"Authorization": f"Bearer {verifier.issue(caller)}"}


def test_read_only_accessors(client, account, operator, owner):
    assert client.get("/account/v1/operator").json() == {"operator": operator.address}
    assert client.get("/account/v1/owner").json() == {"owner": owner.address}
    assert client.get("/account/v1/balance").json() == {"address": account.address, "balance": 100}


def test_validate_requires_bearer_token(client):
    response = client.post("/account/v1/operations/validate", json={})
    assert response.status_code == 401


def test_operator_validates_and_is_reimbursed(client, verifier, ledger, operator, owner, digest, sign):
    body = {
        "destination": SINK,
        "value": 0,
        "payload": "0x",
        "signature": "0x" + sign(owner.key, digest).hex(),
        "digest": "0x" + digest.hex(),
        "missing_funds": 5,
    }

    response = client.post("/account/v1/operations/validate", json=body, headers=_auth(verifier, operator.address))

    assert response.status_code == 200
    assert response.json() == {"status": "ACCEPTED", "validation_data": 0}
    assert ledger.balance_of(operator.address) == 5


def test_non_operator_cannot_validate(client, verifier, owner, digest, sign):
    body = {
        "signature": "0x" + sign(owner.key, digest).hex(),
        "digest": "0x" + digest.hex(),
        "missing_funds": 5,
    }

    response = client.post("/account/v1/operations/validate", json=body, headers=_auth(verifier, owner.address))

    assert response.status_code == 403
    assert response.json()["detail"] == "NotFromOperator"


def test_validate_rejects_non_hex_signature(client, verifier, operator, digest):
    body = {"signature": "zz", "digest": "0x" + digest.hex()}

    response = client.post("/account/v1/operations/validate", json=body, headers=_auth(verifier, operator.address))

    assert response.status_code == 400


def test_execute_by_stranger_is_forbidden(client, verifier, ledger, stranger):
    response = client.post(
        "/account/v1/execute",
        json={"destination": SINK, "value": 1},
        headers=_auth(verifier, stranger.address),
    )

    assert response.status_code == 403
    assert ledger.balance_of(SINK) == 0


def test_execute_failure_reports_return_data(client, verifier, ledger, owner):
    def handler(ctx):
        raise Revert(b"\xca\xfe")

    ledger.deploy(REVERTER, handler)

    response = client.post(
        "/account/v1/execute",
        json={"destination": REVERTER, "value": 1},
        headers=_auth(verifier, owner.address),
    )

    assert response.status_code == 422
    assert response.json()["detail"] == {"error": "CallFailed", "return_data": "0xcafe"}


def test_execute_batch_by_owner(client, verifier, ledger, owner):
    body = {"calls": [{"destination": SINK, "value": 2}, {"destination": SINK, "value": 3, "payload": "0x"}]}

    response = client.post("/account/v1/execute-batch", json=body, headers=_auth(verifier, owner.address))

    assert response.status_code == 200
    assert response.json() == {"status": "executed", "calls": 2}
    assert ledger.balance_of(SINK) == 5


def test_zero_address_token_is_refused(client, verifier, account, owner):
    account.renounce_ownership(owner.address)

    response = client.post(
        "/account/v1/execute",
        json={"destination": SINK, "value": 1},
        headers=_auth(verifier, "0x0000000000000000000000000000000000000000"),
    )

    assert response.status_code == 401
