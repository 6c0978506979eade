# tests/conftest.py
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from postgrest.exceptions import APIError

from lobby.config import Settings
from lobby.main import create_app
from lobby.rooms.models import Room, RoomStatus

NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


def _as_datetime(value):
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    return value


def _lt(left, right):
    # NULL never compares
    if left is None:
        return False
    return _as_datetime(left) < _as_datetime(right)


class FakeResponse:
    def __init__(self, data):
        self.data = data
        self.count = len(data)


class FakeQuery:
    """Just enough of the postgrest query builder for these tests"""

    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.action = "select"
        self.columns = None
        self.payload = None
        self.filters = []
        self.max_rows = None

    def select(self, columns="*", count=None):
        if self.action == "select":
            self.columns = columns
        return self

    def update(self, payload):
        self.action = "update"
        self.payload = payload
        return self

    def delete(self):
        self.action = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def lt(self, column, value):
        self.filters.append(lambda row: _lt(row.get(column), value))
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def or_(self, expression):
        clauses = []
        for part in expression.split(","):
            column, op, value = part.split(".", 2)
            assert op == "lt", f"unsupported operator {op}"
            clauses.append((column, value))
        self.filters.append(
            lambda row: any(_lt(row.get(column), value) for column, value in clauses)
        )
        return self

    def limit(self, n):
        self.max_rows = n
        return self

    def _project(self, row):
        if not self.columns or self.columns == "*":
            return dict(row)
        names = [c.strip() for c in self.columns.split(",")]
        return {name: row.get(name) for name in names}

    def execute(self):
        self.db.queries.append((self.table, self.action))
        if self.action in self.db.fail_on:
            raise APIError({"message": f"{self.action} failed", "code": "XX000", "hint": None, "details": None})

        rows = self.db.tables.setdefault(self.table, [])
        matched = [row for row in rows if all(f(row) for f in self.filters)]

        if self.action == "update":
            for row in matched:
                row.update(self.payload)
            return FakeResponse([dict(row) for row in matched])

        if self.action == "delete":
            self.db.tables[self.table] = [row for row in rows if row not in matched]
            return FakeResponse([dict(row) for row in matched])

        if self.max_rows is not None:
            matched = matched[:self.max_rows]
        return FakeResponse([self._project(row) for row in matched])


class FakeSupabase:
    """In-memory stand-in for supabase.Client"""

    def __init__(self):
        self.tables = {}
        self.queries = []
        self.fail_on = set()

    def table(self, name):
        return FakeQuery(self, name)

    def rows(self, table="programs"):
        return self.tables.get(table, [])


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def fake_supabase():
    return FakeSupabase()


@pytest.fixture
def make_room(fake_supabase):
    """Insert a room into the fake `programs` table and return its row"""
    counter = {"n": 1000}

    def _make(**overrides):
        counter["n"] += 1
        fields = {
            "id": str(counter["n"]),
            "title": "Room",
            "created_by": "u1",
            "created_at": NOW - timedelta(days=1),
            "status": RoomStatus.ACTIVE,
            "last_activity": NOW - timedelta(hours=1),
        }
        fields.update(overrides)
        row = Room(**fields).model_dump(mode="json")
        fake_supabase.tables.setdefault("programs", []).append(row)
        return row

    return _make


@pytest.fixture
def settings():
    return Settings(supabase_url="https://example.supabase.co", supabase_key="test-key", jwt_secret=None)


@pytest.fixture
def client(settings, fake_supabase):
    return TestClient(create_app(settings, fake_supabase))
