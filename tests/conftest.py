from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure tests always import the local src tree, not an older installed wheel.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))

from bqcontext.core.models import Dataset, Table, TableMetadata  # noqa: E402


class FakeWarehouse:
    """In-memory warehouse: {dataset: {table: schema}} in enumeration order."""

    def __init__(self, layout: dict[str, dict[str, object]], failing: set[str] | None = None):
        self.layout = layout
        self.failing = failing or set()
        self.calls: list[str] = []

    def list_datasets(self) -> list[Dataset]:
        self.calls.append("list_datasets")
        return [Dataset(dataset_id=d) for d in self.layout]

    def list_tables(self, dataset_id: str) -> list[Table]:
        self.calls.append(f"list_tables:{dataset_id}")
        return [Table(dataset_id=dataset_id, table_id=t) for t in self.layout[dataset_id]]

    def get_table_metadata(self, dataset_id: str, table_id: str) -> TableMetadata:
        self.calls.append(f"get_table_metadata:{dataset_id}.{table_id}")
        if f"{dataset_id}.{table_id}" in self.failing:
            raise RuntimeError(f"403 Access Denied: Table {dataset_id}.{table_id}")
        try:
            return TableMetadata(schema=self.layout[dataset_id][table_id])
        except KeyError:
            raise RuntimeError(f"404 Not found: Table {dataset_id}.{table_id}") from None


ORDERS_SCHEMA = [{"name": "id", "type": "INTEGER"}]


@pytest.fixture
def warehouse() -> FakeWarehouse:
    return FakeWarehouse(
        {
            "sales": {
                "orders": ORDERS_SCHEMA,
                "customers": [
                    {"name": "id", "type": "INTEGER", "mode": "REQUIRED"},
                    {"name": "email", "type": "STRING", "mode": "NULLABLE"},
                ],
            },
            "marketing": {
                "campaigns": [{"name": "budget", "type": "NUMERIC"}],
                "orders": [{"name": "campaign_id", "type": "STRING"}],
            },
        }
    )
