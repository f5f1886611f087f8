from datetime import datetime, timezone
from typing import List, Optional, Tuple
from uuid import uuid4

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

from smart_account.account.domain.ownership_transfer import OwnershipTransfer
from smart_account.account.interfaces.ownership_store import OwnershipStore
from smart_account.host.domain.address import normalize_address
from smart_account.host.interfaces.journaled_state import JournaledState


class SqlOwnershipStore(OwnershipStore, JournaledState):
    """
    Persistent owner slot keyed by account address.
    Every change is committed together with its transfer record.
    A host rollback writes the captured owner back and drops the transfers recorded since.
    """

    def __init__(self, engine: Engine, account_address: str, initial_owner: Optional[str] = None):
        self.engine = engine
        self.account_address = normalize_address(account_address)
        self.ensure_schema()
        if initial_owner is not None:
            self._initialize(normalize_address(initial_owner))

    @classmethod
    def from_dsn(cls, dsn: str, account_address: str, initial_owner: Optional[str] = None) -> "SqlOwnershipStore":
        engine = create_engine(dsn, pool_pre_ping=True, future=True)
        return cls(engine, account_address, initial_owner)

    def ensure_schema(self) -> None:
        with self.engine.begin() as conn:
            conn.execute(
                text(
                    """
                    CREATE TABLE IF NOT EXISTS account_owners (
                        account_address VARCHAR(42) PRIMARY KEY,
                        owner VARCHAR(42) NOT NULL,
                        updated_at TIMESTAMP NOT NULL
                    )
                    """
                )
            )
            conn.execute(
                text(
                    """
                    CREATE TABLE IF NOT EXISTS ownership_transfers (
                        id VARCHAR(36) PRIMARY KEY,
                        account_address VARCHAR(42) NOT NULL,
                        seq INTEGER NOT NULL,
                        previous_owner VARCHAR(42) NOT NULL,
                        new_owner VARCHAR(42) NOT NULL,
                        created_at TIMESTAMP NOT NULL
                    )
                    """
                )
            )

    def _initialize(self, owner: str) -> None:
        with self.engine.begin() as conn:
            existing = conn.execute(
                text("SELECT owner FROM account_owners WHERE account_address = :account"),
                {"account": self.account_address},
            ).first()
            if existing is None:
                conn.execute(
                    text(
                        """
                        INSERT INTO account_owners (account_address, owner, updated_at)
                        VALUES (:account, :owner, :updated_at)
                        """
                    ),
                    {"account": self.account_address, "owner": owner, "updated_at": datetime.now(timezone.utc).isoformat()},
                )

    def current_owner(self) -> str:
        with self.engine.connect() as conn:
            row = conn.execute(
                text("SELECT owner FROM account_owners WHERE account_address = :account"),
                {"account": self.account_address},
            ).first()
        if row is None:
            raise LookupError(f"No owner recorded for account {self.account_address}")
        return str(row[0])

    def set_owner(self, new_owner: str) -> None:
        new_owner = normalize_address(new_owner)
        previous = self.current_owner()
        now = datetime.now(timezone.utc).isoformat()
        with self.engine.begin() as conn:
            seq = conn.execute(
                text("SELECT COUNT(*) FROM ownership_transfers WHERE account_address = :account"),
                {"account": self.account_address},
            ).scalar_one()
            conn.execute(
                text(
                    """
                    UPDATE account_owners SET owner = :owner, updated_at = :updated_at
                    WHERE account_address = :account
                    """
                ),
                {"account": self.account_address, "owner": new_owner, "updated_at": now},
            )
            conn.execute(
                text(
                    """
                    INSERT INTO ownership_transfers (
                        id, account_address, seq, previous_owner, new_owner, created_at
                    ) VALUES (
                        :id, :account, :seq, :previous_owner, :new_owner, :created_at
                    )
                    """
                ),
                {
                    "id": str(uuid4()),
                    "account": self.account_address,
                    "seq": int(seq) + 1,
                    "previous_owner": previous,
                    "new_owner": new_owner,
                    "created_at": now,
                },
            )

    def get_history(self) -> List[OwnershipTransfer]:
        with self.engine.connect() as conn:
            rows = conn.execute(
                text(
                    """
                    SELECT previous_owner, new_owner FROM ownership_transfers
                    WHERE account_address = :account
                    ORDER BY seq ASC
                    """
                ),
                {"account": self.account_address},
            ).all()
        return [OwnershipTransfer(previous_owner=str(r[0]), new_owner=str(r[1])) for r in rows]

    def snapshot(self) -> Tuple[str, int]:
        with self.engine.connect() as conn:
            count = conn.execute(
                text("SELECT COUNT(*) FROM ownership_transfers WHERE account_address = :account"),
                {"account": self.account_address},
            ).scalar_one()
        return self.current_owner(), int(count)

    def restore(self, snapshot: Tuple[str, int]) -> None:
        owner, count = snapshot
        with self.engine.begin() as conn:
            conn.execute(
                text("UPDATE account_owners SET owner = :owner WHERE account_address = :account"),
                {"account": self.account_address, "owner": owner},
            )
            conn.execute(
                text("DELETE FROM ownership_transfers WHERE account_address = :account AND seq > :count"),
                {"account": self.account_address, "count": count},
            )
