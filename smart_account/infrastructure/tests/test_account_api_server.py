import pytest

fastapi = pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from smart_account.account.security.relay_tokens import RelayTokenVerifier
from smart_account.config.settings import Settings
from smart_account.host.ledger.in_memory_host_ledger import InMemoryHostLedger
from smart_account.infrastructure.account_api_server import build_account, create_app

OPERATOR = "0x0000000000000000000000000000000000000B0B"
OWNER = "0x0000000000000000000000000000000000000CA7"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'account.db'}",
        OPERATOR_ADDRESS=OPERATOR,
        OWNER_ADDRESS=OWNER,
    )


def test_build_account_uses_configured_identities(settings):
    account = build_account(settings, InMemoryHostLedger())

    assert account.get_trusted_operator().lower() == OPERATOR.lower()
    assert account.owner().lower() == OWNER.lower()


def test_created_app_serves_account_routes(settings):
    ledger = InMemoryHostLedger()
    account = build_account(settings, ledger)
    ledger.credit(account.address, 9)
    client = TestClient(create_app(account, RelayTokenVerifier(secret=settings.RELAY_TOKEN_SECRET)))

    response = client.get("/account/v1/balance")

    assert response.status_code == 200
    assert response.json()["balance"] == 9


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("API_PORT", "9100")
    monkeypatch.setenv("OPERATOR_ADDRESS", OPERATOR)

    settings = Settings()

    assert settings.API_PORT == 9100
    assert settings.OPERATOR_ADDRESS == OPERATOR
