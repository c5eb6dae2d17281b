"""Schema retrieval and serialization.

The aggregator walks the warehouse sequentially (datasets, then tables, then
one metadata call per table) and returns structured results. A failure on any
table aborts the whole lookup; no partial results are returned.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from bqcontext.core.errors import upstream_errors
from bqcontext.core.models import (
    ALL_TABLES,
    AllTables,
    ResolvedTarget,
    SchemaRecord,
    SchemaResult,
    SpecificTable,
    Table,
    WarehouseAdapter,
)

logger = logging.getLogger(__name__)


class SchemaAggregator:
    """Fetches schema metadata for resolved targets."""

    def __init__(self, warehouse: WarehouseAdapter) -> None:
        self.warehouse = warehouse

    def list_tables(self) -> list[Table]:
        """Return every table of every dataset, in enumeration order."""
        out: list[Table] = []
        with upstream_errors():
            for dataset in self.warehouse.list_datasets():
                out.extend(self.warehouse.list_tables(dataset.dataset_id))
        return out

    def get_table_schema(self, dataset_id: str, table_id: str) -> Any:
        """Return the raw schema value of one table."""
        with upstream_errors():
            return self.warehouse.get_table_metadata(dataset_id, table_id).schema

    def get_schema(self, target: ResolvedTarget) -> SchemaResult:
        """
        Fetch schema metadata for a target.

        Args:
            target: A `SpecificTable` or `AllTables`.

        Returns:
            A SchemaResult with one record for a specific table, or one record
            per table (in enumeration order) for all tables.

        Raises:
            UpstreamError: any warehouse call failed. The original exception
                is chained as `__cause__`.
        """
        if isinstance(target, AllTables):
            records = []
            for table in self.list_tables():
                logger.debug("Fetching schema for %s", table.full_name)
                schema = self.get_table_schema(table.dataset_id, table.table_id)
                records.append(
                    SchemaRecord(dataset=table.dataset_id, table=table.table_id, schema=schema)
                )
            return SchemaResult(records=tuple(records), all_tables=True)

        if isinstance(target, SpecificTable):
            schema = self.get_table_schema(target.dataset, target.table)
            record = SchemaRecord(dataset=target.dataset, table=target.table, schema=schema)
            return SchemaResult(records=(record,))

        raise TypeError(f"Unsupported target: {target!r}")


def to_json_text(value: Any) -> str:
    """Serialize a value as two-space indented JSON followed by a newline."""
    return json.dumps(value, indent=2, ensure_ascii=False) + "\n"


def render_schema(result: SchemaResult) -> str:
    """Serialize a SchemaResult for protocol responses."""
    return to_json_text(result.to_value())


def describe_identifier(identifier: str) -> str:
    """Return the human description used for prompt results."""
    if identifier == ALL_TABLES:
        return "all table schemas"
    return f"{identifier} schema"


def describe_target(target: ResolvedTarget) -> str:
    """Return a human description of a resolved target."""
    if isinstance(target, AllTables):
        return describe_identifier(ALL_TABLES)
    return describe_identifier(f"{target.dataset}.{target.table}")
