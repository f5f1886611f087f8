"""
SANITY RUN: operator-gated smart account

Walks through:
- operator submits a signed operation and is reimbursed
- replayed submission is accepted again (no nonce)
- stranger is refused by execute
- reverting destination surfaces its return data and changes nothing
"""

import logging
import os

from eth_account import Account
from eth_account.messages import encode_defunct

from smart_account.account.domain.account_errors import CallFailed, NotFromOperatorOrOwner
from smart_account.account.domain.operation import Operation
from smart_account.account.services.operator_smart_account import OperatorSmartAccount
from smart_account.account.store.in_memory_ownership_store import InMemoryOwnershipStore
from smart_account.host.domain.host_errors import Revert
from smart_account.host.ledger.in_memory_host_ledger import InMemoryHostLedger


# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------

def sign_digest(private_key: bytes, digest: bytes) -> bytes:
    return Account.sign_message(encode_defunct(primitive=digest), private_key).signature


def check(label: str, condition: bool) -> None:
    print(f"[{'OK' if condition else 'FAIL'}] {label}")
    if not condition:
        raise SystemExit(1)


# ---------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------

def main():
    logging.basicConfig(level=logging.WARNING)

    owner = Account.create()
    operator = Account.create()
    stranger = Account.create()
    account_address = Account.create().address
    vault_address = Account.create().address
    reverting_address = Account.create().address

    ledger = InMemoryHostLedger()
    account = OperatorSmartAccount(
        address=account_address,
        operator=operator.address,
        ownership_store=InMemoryOwnershipStore(owner.address),
        ledger=ledger,
    )
    ledger.credit(account.address, 100)

    def always_revert(ctx):
        raise Revert(b"nope")

    ledger.deploy(reverting_address, always_revert)

    # 1. Signed operation, prefund 5
    digest = os.urandom(32)
    operation = Operation(
        destination=vault_address,
        value=0,
        payload=b"",
        signature=sign_digest(owner.key, digest),
        digest=digest,
    )
    outcome = account.validate_operation(operator.address, operation, digest, 5)
    check("owner signature accepted", outcome.is_accepted)
    check("account paid 5", account.get_balance() == 95)
    check("operator received 5", ledger.balance_of(operator.address) == 5)

    # 2. Replay
    again = account.validate_operation(operator.address, operation, digest, 0)
    check("replayed operation accepted again", again.is_accepted)

    # 3. Stranger
    try:
        account.execute(stranger.address, vault_address, 1, b"")
        check("stranger refused", False)
    except NotFromOperatorOrOwner:
        check("stranger refused", account.get_balance() == 95)

    # 4. Reverting destination
    try:
        account.execute(operator.address, reverting_address, 10, b"")
        check("revert surfaced", False)
    except CallFailed as exc:
        check("revert surfaced", exc.return_data == b"nope")
        check("balance unchanged after revert", account.get_balance() == 95)

    # 5. Plain execution
    account.execute(owner.address, vault_address, 20, b"")
    check("owner moved 20 to vault", ledger.balance_of(vault_address) == 20)

    print("Simulation complete.")


if __name__ == "__main__":
    main()
