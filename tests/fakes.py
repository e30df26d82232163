# tests/fakes.py
from typing import Any, Dict, List, Optional, Sequence, Tuple

from anymessage.auth.token_manager import DefaultUserTokenManager
from anymessage.auth.user_store import UserStore
from anymessage.billing.service import AbstractBillingService, get_billing_service
from anymessage.dependencies import get_credential_encryptor
from anymessage.main import create_app
from anymessage.storage.storage_interfaces import AbstractDatabase, AbstractTable, Row


class StoreError(Exception):
    """Store failure carrying an HTTP status, like a constraint violation surfaced by a driver."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status


def _matches(row: Row, criteria: Dict[str, Any]) -> bool:
    return all(row.get(column) == value for column, value in criteria.items())


class RecordingTable(AbstractTable):
    """In-memory table that records every write and can be told to fail."""

    def __init__(self, rows: Optional[List[Row]] = None, error: Optional[Exception] = None,
                 write_error: Optional[Exception] = None, insert_returns_nothing: bool = False):
        self.rows: List[Row] = [dict(row) for row in rows or []]
        self.writes: List[Tuple[str, Dict[str, Any]]] = []
        self.error = error
        self.write_error = write_error
        self.insert_returns_nothing = insert_returns_nothing

    async def find_one(self, criteria):
        if self.error:
            raise self.error
        return next((dict(row) for row in self.rows if _matches(row, criteria)), None)

    async def find(self, criteria):
        if self.error:
            raise self.error
        return [dict(row) for row in self.rows if _matches(row, criteria)]

    async def insert(self, fields):
        self.writes.append(("insert", dict(fields)))
        if self.error or self.write_error:
            raise self.error or self.write_error
        if self.insert_returns_nothing:
            return None
        row = {"id": len(self.rows) + 1, **fields}
        self.rows.append(row)
        return dict(row)

    async def update(self, criteria, fields):
        self.writes.append(("update", dict(fields)))
        if self.error or self.write_error:
            raise self.error or self.write_error
        for row in self.rows:
            if _matches(row, criteria):
                row.update(fields)
                return dict(row)
        return None


class RecordingDatabase(AbstractDatabase):
    """In-memory persistence gateway for accessor and middleware tests."""

    def __init__(self, tables: Optional[Dict[str, RecordingTable]] = None,
                 query_rows: Optional[List[Row]] = None, query_error: Optional[Exception] = None):
        self.tables = tables or {}
        self.query_rows = query_rows or []
        self.query_error = query_error
        self.queries: List[Tuple[str, Sequence[Any]]] = []

    async def initialize(self) -> None:
        pass

    async def teardown(self) -> None:
        pass

    def table(self, name: str) -> RecordingTable:
        return self.tables.setdefault(name, RecordingTable())

    async def query(self, sql, params=()):
        self.queries.append((sql, params))
        if self.query_error:
            raise self.query_error
        return [dict(row) for row in self.query_rows]

    @property
    def writes(self) -> List[Tuple[str, Dict[str, Any]]]:
        return [write for table in self.tables.values() for write in table.writes]


class FakeBillingService(AbstractBillingService):
    def __init__(self, active_customers=()):
        self.active_customers = set(active_customers)
        self.calls: List[Optional[str]] = []

    async def has_active_subscription(self, customer_id):
        self.calls.append(customer_id)
        return customer_id in self.active_customers


async def register_user(database: AbstractDatabase, email: str, team_id: Optional[int] = None) -> str:
    """Create a user row directly and return its bearer token."""
    token, token_hash = DefaultUserTokenManager().generate_token_and_hash()
    store = UserStore(database)
    user = await store.save_token_hash(email, token_hash)
    if team_id is not None:
        await store.assign_team(user.id, team_id)
    return token


def auth_headers(token: str, origin: Optional[str] = None) -> Dict[str, str]:
    headers = {"Authorization": f"Bearer {token}"}
    if origin:
        headers["Origin"] = origin
    return headers


def build_app(database: AbstractDatabase, encryptor, billing: AbstractBillingService):
    """Application wired to the given gateway with test encryptor and billing doubles."""
    app = create_app(database=database)
    app.dependency_overrides[get_credential_encryptor] = lambda: encryptor
    app.dependency_overrides[get_billing_service] = lambda: billing
    return app
