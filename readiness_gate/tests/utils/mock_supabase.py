"""
Supabase test doubles.

A minimal stand-in for the supabase-py query builder: serves rows from
in-memory tables and applies the equality and membership filters the loader
uses.
"""

from types import SimpleNamespace
from typing import Any

Row = dict[str, Any]


class FakeQuery:
    """Chainable query over one table's rows."""

    def __init__(self, rows: list[Row], error: Exception | None = None):
        self._rows = list(rows)
        self._error = error
        self._single = False
        self._count = False
        self._negate = False

    def select(self, *columns: str, count: str | None = None, head: bool = False):
        self._count = count == "exact"
        return self

    def eq(self, column: str, value: Any):
        self._rows = [row for row in self._rows if row.get(column, value) == value]
        return self

    def in_(self, column: str, values: list[Any]):
        wanted = set(values)
        self._rows = [
            row for row in self._rows if (row.get(column) in wanted) != self._negate
        ]
        self._negate = False
        return self

    @property
    def not_(self):
        self._negate = True
        return self

    def maybe_single(self):
        self._single = True
        return self

    def execute(self):
        if self._error is not None:
            raise self._error
        if self._count:
            return SimpleNamespace(data=[], count=len(self._rows))
        if self._single:
            # supabase-py returns no response for a missing maybe_single row
            if not self._rows:
                return None
            return SimpleNamespace(data=self._rows[0], count=None)
        return SimpleNamespace(data=self._rows, count=None)


class FakeRpc:
    def __init__(self, data: Any, error: Exception | None = None):
        self._data = data
        self._error = error

    def execute(self):
        if self._error is not None:
            raise self._error
        return SimpleNamespace(data=self._data, count=None)


class FakeSupabaseClient:
    """Client double exposing ``table`` and ``rpc``."""

    def __init__(self, tables: dict[str, list[Row]] | None = None, rpc_data: Any = None):
        self.tables = tables or {}
        self.rpc_data = rpc_data
        self.rpc_calls: list[tuple[str, dict[str, Any]]] = []
        self.table_calls: list[str] = []
        self.errors: dict[str, Exception] = {}

    def table(self, name: str) -> FakeQuery:
        self.table_calls.append(name)
        return FakeQuery(self.tables.get(name, []), self.errors.get(name))

    def rpc(self, fn: str, params: dict[str, Any]) -> "FakeRpc":
        self.rpc_calls.append((fn, params))
        return FakeRpc(self.rpc_data, self.errors.get(fn))


class FakeSupabaseWrapper:
    """Stands in for ``SupabaseClient`` around a fake client."""

    def __init__(self, client: FakeSupabaseClient):
        self.client = client
