from __future__ import annotations

from google.cloud import bigquery

from bqcontext.core.models import Dataset, Table, TableMetadata


class BigQueryAdapter:
    """Adapter around google-cloud-bigquery dataset/table metadata APIs."""

    def __init__(self, client: bigquery.Client) -> None:
        self.client = client

    @property
    def project(self) -> str:
        """Return the project the client is bound to."""
        return self.client.project

    def list_datasets(self) -> list[Dataset]:
        """List all datasets in the client's project."""
        out: list[Dataset] = []
        for d in self.client.list_datasets():
            dataset_id = getattr(d, "dataset_id", None)
            if not dataset_id:
                continue
            out.append(Dataset(dataset_id=dataset_id))
        return out

    def list_tables(self, dataset_id: str) -> list[Table]:
        """List tables (and views) in a dataset."""
        out: list[Table] = []
        for t in self.client.list_tables(dataset_id):
            table_id = getattr(t, "table_id", None)
            if not table_id:
                continue
            out.append(Table(dataset_id=dataset_id, table_id=table_id))
        return out

    def get_table_metadata(self, dataset_id: str, table_id: str) -> TableMetadata:
        """Fetch a table and return its schema as JSON-ready field descriptors."""
        ref = bigquery.DatasetReference(self.project, dataset_id).table(table_id)
        table = self.client.get_table(ref)
        # SchemaField.to_api_repr keeps nested RECORD fields, modes and descriptions
        return TableMetadata(schema=[field.to_api_repr() for field in table.schema])
