"""Core domain models for BigQuery schema metadata.

These models represent datasets, tables and schema results in a simple,
immutable form. They are intentionally free of google-cloud-bigquery types
and of protocol/CLI concerns.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, Union

ALL_TABLES = "all-tables"


@dataclass(frozen=True)
class Dataset:
    """Lightweight representation of a BigQuery dataset."""

    dataset_id: str


@dataclass(frozen=True)
class Table:
    """Lightweight representation of a BigQuery table inside a dataset."""

    dataset_id: str
    table_id: str

    @property
    def full_name(self) -> str:
        return f"{self.dataset_id}.{self.table_id}"


@dataclass(frozen=True)
class TableMetadata:
    """
    Metadata returned for a single table.

    `schema` is the ordered list of field descriptors exactly as the
    warehouse reports them. Nothing in this package inspects it.
    """

    schema: Any


@dataclass(frozen=True)
class SpecificTable:
    """A resolved `dataset.table` pair."""

    dataset: str
    table: str


@dataclass(frozen=True)
class AllTables:
    """Target meaning every table in every dataset."""


ResolvedTarget = Union[SpecificTable, AllTables]


@dataclass(frozen=True)
class SchemaRecord:
    """Schema of one table, attributed to its dataset."""

    dataset: str
    table: str
    schema: Any

    def to_dict(self) -> dict[str, Any]:
        return {"dataset": self.dataset, "table": self.table, "schema": self.schema}


@dataclass(frozen=True)
class SchemaResult:
    """
    Result of a schema lookup.

    Attributes:
        records: Records in warehouse enumeration order.
        all_tables: True when the result answers the all-tables target. A
            specific-table result always holds exactly one record.
    """

    records: tuple[SchemaRecord, ...]
    all_tables: bool = False

    def to_value(self) -> Any:
        """Return the JSON-serializable value: one object, or a list of objects."""
        if self.all_tables:
            return [r.to_dict() for r in self.records]
        return self.records[0].to_dict()


class WarehouseAdapter(Protocol):
    """Interface for the warehouse metadata calls used by the core domain."""

    def list_datasets(self) -> list[Dataset]:
        """Return all datasets visible to the current principal."""
        ...

    def list_tables(self, dataset_id: str) -> list[Table]:
        """Return the tables of one dataset."""
        ...

    def get_table_metadata(self, dataset_id: str, table_id: str) -> TableMetadata:
        """Return the metadata (schema) of one table."""
        ...
