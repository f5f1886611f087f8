import logging

from fastapi import FastAPI
import uvicorn

from smart_account.account.interfaces.account_api import build_account_router
from smart_account.account.security.relay_tokens import RelayTokenVerifier
from smart_account.account.services.operator_smart_account import OperatorSmartAccount
from smart_account.account.store.sql_ownership_store import SqlOwnershipStore
from smart_account.config.settings import Settings
from smart_account.host.ledger.in_memory_host_ledger import InMemoryHostLedger

logger = logging.getLogger(__name__)


def create_app(account: OperatorSmartAccount, verifier: RelayTokenVerifier) -> FastAPI:
    app = FastAPI(title="smart-account")
    app.include_router(build_account_router(account, verifier))
    return app


def build_account(settings: Settings, ledger: InMemoryHostLedger) -> OperatorSmartAccount:
    store = SqlOwnershipStore.from_dsn(
        settings.DATABASE_URL,
        account_address=settings.ACCOUNT_ADDRESS,
        initial_owner=settings.OWNER_ADDRESS,
    )
    return OperatorSmartAccount(
        address=settings.ACCOUNT_ADDRESS,
        operator=settings.OPERATOR_ADDRESS,
        ownership_store=store,
        ledger=ledger,
    )


def serve(settings: Settings) -> None:
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    ledger = InMemoryHostLedger()
    account = build_account(settings, ledger)
    verifier = RelayTokenVerifier(
        secret=settings.RELAY_TOKEN_SECRET,
        issuer=settings.RELAY_TOKEN_ISSUER,
        leeway_seconds=settings.RELAY_TOKEN_LEEWAY_SECONDS,
        max_ttl_seconds=settings.RELAY_TOKEN_MAX_TTL_SECONDS,
    )
    logger.info(
        "Serving account %s (operator %s, owner %s)",
        account.address,
        account.get_trusted_operator(),
        account.owner(),
    )
    uvicorn.run(create_app(account, verifier), host=settings.API_HOST, port=settings.API_PORT)
