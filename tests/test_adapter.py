from types import SimpleNamespace

from google.cloud import bigquery

from bqcontext.core.adapters.bigquery import BigQueryAdapter
from bqcontext.core.models import Dataset, Table


class _Client:
    project = "my-proj"

    def __init__(self):
        self.requested: list[str] = []

    def list_datasets(self):
        return [
            SimpleNamespace(dataset_id="sales"),
            SimpleNamespace(dataset_id=None),
            SimpleNamespace(dataset_id="marketing"),
        ]

    def list_tables(self, dataset_id):
        return [SimpleNamespace(table_id=f"{dataset_id}_t"), SimpleNamespace(table_id="")]

    def get_table(self, ref):
        self.requested.append(f"{ref.project}.{ref.dataset_id}.{ref.table_id}")
        return SimpleNamespace(
            schema=[
                bigquery.SchemaField("id", "INTEGER", mode="REQUIRED"),
                bigquery.SchemaField(
                    "address",
                    "RECORD",
                    fields=[bigquery.SchemaField("city", "STRING")],
                ),
            ]
        )


def test_list_datasets_skips_entries_without_id():
    adapter = BigQueryAdapter(_Client())

    assert adapter.list_datasets() == [Dataset("sales"), Dataset("marketing")]
    assert adapter.project == "my-proj"


def test_list_tables_attributes_dataset():
    assert BigQueryAdapter(_Client()).list_tables("sales") == [Table("sales", "sales_t")]


def test_get_table_metadata_returns_api_field_dicts():
    client = _Client()

    metadata = BigQueryAdapter(client).get_table_metadata("sales", "orders")

    assert client.requested == ["my-proj.sales.orders"]
    id_field, address = metadata.schema
    assert (id_field["name"], id_field["type"], id_field["mode"]) == ("id", "INTEGER", "REQUIRED")
    assert address["type"] == "RECORD"
    assert address["fields"][0]["name"] == "city"
