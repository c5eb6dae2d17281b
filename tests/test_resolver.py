import pytest

from bqcontext.core.errors import (
    ErrorKind,
    InvalidIdentifierError,
    TableNotFoundError,
    UpstreamError,
)
from bqcontext.core.models import AllTables, SpecificTable
from bqcontext.core.resolver import TableResolver, parse_table_full_name


@pytest.mark.parametrize("value", ["sales", "a.b.c", "sales.", ".orders", ""])
def test_parse_table_full_name_rejects_invalid_input(value: str):
    with pytest.raises(InvalidIdentifierError, match="dataset.table"):
        parse_table_full_name(value)


def test_parse_table_full_name_accepts_valid_input():
    assert parse_table_full_name(" sales.orders ") == ("sales", "orders")


def test_qualified_name_resolves_without_enumeration(warehouse):
    target = TableResolver(warehouse).resolve("sales.orders")

    assert target == SpecificTable(dataset="sales", table="orders")
    assert warehouse.calls == []


def test_qualified_name_is_not_checked_for_existence(warehouse):
    target = TableResolver(warehouse).resolve("nope.missing")

    assert target == SpecificTable(dataset="nope", table="missing")
    assert warehouse.calls == []


def test_sentinel_resolves_to_all_tables(warehouse):
    assert TableResolver(warehouse).resolve("all-tables") == AllTables()
    assert warehouse.calls == []


def test_sentinel_and_names_are_stripped_before_matching(warehouse):
    resolver = TableResolver(warehouse)

    assert resolver.resolve(" all-tables ") == AllTables()
    assert resolver.resolve(" sales.orders ") == SpecificTable("sales", "orders")
    assert warehouse.calls == []


def test_bare_name_first_dataset_wins(warehouse):
    # "orders" exists in sales and marketing; sales is listed first
    target = TableResolver(warehouse).resolve("orders")

    assert target == SpecificTable(dataset="sales", table="orders")
    assert warehouse.calls == ["list_datasets", "list_tables:sales"]


def test_bare_name_scans_later_datasets(warehouse):
    target = TableResolver(warehouse).resolve("campaigns")

    assert target == SpecificTable(dataset="marketing", table="campaigns")
    assert warehouse.calls == [
        "list_datasets",
        "list_tables:sales",
        "list_tables:marketing",
    ]


def test_bare_name_not_found_names_the_table(warehouse):
    with pytest.raises(TableNotFoundError, match="invoices") as excinfo:
        TableResolver(warehouse).resolve("invoices")

    assert excinfo.value.table == "invoices"
    assert excinfo.value.kind is ErrorKind.NOT_FOUND


@pytest.mark.parametrize("value", ["", "   ", None, 42])
def test_empty_or_non_string_identifier_is_invalid(warehouse, value):
    with pytest.raises(InvalidIdentifierError) as excinfo:
        TableResolver(warehouse).resolve(value)

    assert excinfo.value.kind is ErrorKind.INVALID_INPUT
    assert warehouse.calls == []


def test_enumeration_failure_is_upstream_error():
    class _Warehouse:
        def list_datasets(self):
            raise ConnectionError("connection reset")

    with pytest.raises(UpstreamError, match="connection reset") as excinfo:
        TableResolver(_Warehouse()).resolve("orders")

    assert isinstance(excinfo.value.__cause__, ConnectionError)
