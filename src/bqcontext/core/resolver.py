"""Resolution of user-supplied table identifiers.

An identifier is either the `all-tables` sentinel, a qualified
`dataset.table` name, or a bare table name. Bare names are located by
scanning every dataset in the order the warehouse lists them; the first
dataset holding a table with that id wins. Identical table names in several
datasets therefore resolve to whichever dataset is enumerated first.
"""

from __future__ import annotations

import logging

from bqcontext.core.errors import (
    InvalidIdentifierError,
    TableNotFoundError,
    upstream_errors,
)
from bqcontext.core.models import (
    ALL_TABLES,
    AllTables,
    ResolvedTarget,
    SpecificTable,
    WarehouseAdapter,
)

logger = logging.getLogger(__name__)


def parse_table_full_name(full_name: str) -> tuple[str, str]:
    """Split `dataset.table` into (dataset, table)."""
    parts = full_name.strip().split(".")
    if len(parts) != 2:
        raise InvalidIdentifierError("Table must be in the form `dataset.table`.")
    dataset, table = parts
    if not dataset or not table:
        raise InvalidIdentifierError("Table must be in the form `dataset.table`.")
    return dataset, table


class TableResolver:
    """Turns identifiers into resolved targets using a warehouse adapter."""

    def __init__(self, warehouse: WarehouseAdapter) -> None:
        self.warehouse = warehouse

    def resolve(self, identifier: object) -> ResolvedTarget:
        """
        Resolve an identifier into a target.

        Qualified names are returned without checking that the table exists;
        the metadata fetch reports missing tables.

        Raises:
            InvalidIdentifierError: identifier is empty, not a string or malformed.
            TableNotFoundError: a bare name is present in no dataset.
            UpstreamError: dataset or table enumeration failed.
        """
        if not isinstance(identifier, str) or not identifier.strip():
            raise InvalidIdentifierError(f"Invalid table: {identifier!r}")

        identifier = identifier.strip()
        if identifier == ALL_TABLES:
            return AllTables()

        if "." in identifier:
            dataset, table = parse_table_full_name(identifier)
            return SpecificTable(dataset=dataset, table=table)

        return self._find_bare_table(identifier)

    def _find_bare_table(self, table_id: str) -> SpecificTable:
        with upstream_errors():
            for dataset in self.warehouse.list_datasets():
                tables = self.warehouse.list_tables(dataset.dataset_id)
                if any(t.table_id == table_id for t in tables):
                    logger.debug("Resolved %s to dataset %s", table_id, dataset.dataset_id)
                    return SpecificTable(dataset=dataset.dataset_id, table=table_id)
        raise TableNotFoundError(table_id)
