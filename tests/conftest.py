from __future__ import annotations

from typing import Any
from uuid import uuid4

import pytest


class FakeResponse:
    def __init__(self, *, data=None, count=None, error=None):  # noqa: ANN001
        self.data = data if data is not None else []
        self.count = count
        self.error = error


class FakeQuery:
    """Just enough of the PostgREST query builder for the movies repository."""

    def __init__(self, store: FakeSupabase, table_name: str) -> None:
        self._store = store
        self._table_name = table_name
        self._op = "select"
        self._count: str | None = None
        self._payload: dict[str, Any] | None = None
        self._filters: list[tuple[str, Any]] = []
        self._orders: list[tuple[str, bool]] = []
        self._range: tuple[int, int] | None = None
        self._limit: int | None = None

    def select(self, *_columns: str, count: str | None = None) -> FakeQuery:
        self._op = "select"
        self._count = count
        return self

    def insert(self, payload: dict[str, Any]) -> FakeQuery:
        self._op = "insert"
        self._payload = dict(payload)
        return self

    def delete(self) -> FakeQuery:
        self._op = "delete"
        return self

    def eq(self, column: str, value: Any) -> FakeQuery:
        self._filters.append((column, value))
        return self

    def order(self, column: str, desc: bool = False) -> FakeQuery:
        self._orders.append((column, desc))
        return self

    def range(self, start: int, end: int) -> FakeQuery:
        self._range = (start, end)
        return self

    def limit(self, n: int) -> FakeQuery:
        self._limit = n
        return self

    def _matches(self, row: dict[str, Any]) -> bool:
        return all(str(row.get(column)) == str(value) for column, value in self._filters)

    def execute(self) -> FakeResponse:
        self._store.executed.append((self._table_name, self._op))
        if self._store.fail_with is not None:
            raise self._store.fail_with

        rows = self._store.rows
        if self._op == "insert":
            assert self._payload is not None
            row = {
                "id": str(uuid4()),
                "created_at": self._store.next_timestamp(),
                **self._payload,
            }
            rows.append(row)
            return FakeResponse(data=[dict(row)])

        matching = [row for row in rows if self._matches(row)]
        if self._op == "delete":
            self._store.rows = [row for row in rows if not self._matches(row)]
            return FakeResponse(data=[dict(row) for row in matching])

        for column, desc in reversed(self._orders):
            matching.sort(key=lambda row: str(row.get(column)), reverse=desc)
        total = len(matching)
        if self._range is not None:
            start, end = self._range
            matching = matching[start : end + 1]
        if self._limit is not None:
            matching = matching[: self._limit]
        return FakeResponse(
            data=[dict(row) for row in matching],
            count=total if self._count else None,
        )


class FakeSupabase:
    """In-memory stand-in for a Supabase client holding a single table."""

    def __init__(self) -> None:
        self.rows: list[dict[str, Any]] = []
        self.executed: list[tuple[str, str]] = []
        self.schemas: list[str] = []
        self.fail_with: Exception | None = None
        self._ticks = 0

    def next_timestamp(self) -> str:
        self._ticks += 1
        return f"2025-01-01T00:00:00.{self._ticks:06d}+00:00"

    def schema(self, name: str) -> FakeSupabase:
        self.schemas.append(name)
        return self

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)


@pytest.fixture
def fake_db() -> FakeSupabase:
    return FakeSupabase()
