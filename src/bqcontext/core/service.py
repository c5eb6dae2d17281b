"""Request-level schema operations shared by the MCP server, line protocol and CLI."""

from __future__ import annotations

from dataclasses import dataclass

from bqcontext.core.models import ALL_TABLES, WarehouseAdapter
from bqcontext.core.resolver import TableResolver
from bqcontext.core.schema import SchemaAggregator, render_schema


@dataclass
class SchemaService:
    """Resolver and aggregator bound to one warehouse adapter and project."""

    project_id: str
    resolver: TableResolver
    aggregator: SchemaAggregator

    @classmethod
    def for_adapter(cls, adapter: WarehouseAdapter, project_id: str) -> "SchemaService":
        return cls(
            project_id=project_id,
            resolver=TableResolver(adapter),
            aggregator=SchemaAggregator(adapter),
        )

    def schema_text(self, identifier: object) -> str:
        """Resolve an identifier and return the rendered schema JSON."""
        target = self.resolver.resolve(identifier)
        return render_schema(self.aggregator.get_schema(target))

    def table_candidates(self) -> list[str]:
        """Return the sentinel followed by every `dataset.table` name."""
        return [ALL_TABLES] + [t.full_name for t in self.aggregator.list_tables()]
