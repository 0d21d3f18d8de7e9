"""
Tests for cycle record storage.
"""
import pytest
from datetime import date
from unittest.mock import patch

from botocore.exceptions import ClientError

from cyclephase.models.record import CycleRecord
from cyclephase.services.records import CycleRecordRepository, record_to_item, item_to_record
from cyclephase.services.exceptions import DuplicateCycleRecordError, CycleRecordStorageError

def _client_error(code: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": "Test error"}}, operation)

@pytest.fixture
def repository(mock_dynamo):
    return CycleRecordRepository(dynamo=mock_dynamo)

def test_list_cycle_records(repository, mock_dynamo, mock_cycle_items):
    """Test records are read from the user's partition, most recent first."""
    mock_dynamo.query_items.return_value = list(reversed(mock_cycle_items))

    records = repository.list_cycle_records("123")

    assert [r.start_date for r in records] == [date(2024, 2, 26), date(2024, 1, 29)]
    assert records[0].symptoms == {"cramps", "headache"}
    assert records[0].end_date is None
    assert records[1].end_date == date(2024, 2, 2)

    call_kwargs = mock_dynamo.query_items.call_args.kwargs
    assert call_kwargs["partition_key"] == "PK"
    assert call_kwargs["partition_value"] == "USER#123"
    assert call_kwargs["scan_forward"] is False

def test_list_cycle_records_empty(repository, mock_dynamo):
    mock_dynamo.query_items.return_value = []
    assert repository.list_cycle_records("123") == []

def test_list_cycle_records_storage_error(repository, mock_dynamo):
    mock_dynamo.query_items.side_effect = _client_error("ProvisionedThroughputExceededException", "Query")

    with pytest.raises(CycleRecordStorageError) as exc:
        repository.list_cycle_records("123")
    assert "Failed to list cycle records" in str(exc.value)

def test_create_cycle_record(repository, mock_dynamo):
    """Test a new record is written with its start date as sort key."""
    record = repository.create_cycle_record(
        "123",
        date(2024, 3, 25),
        symptoms=["headache", "cramps", "cramps"],
        notes="Started early morning"
    )

    assert record.user_id == "123"
    assert record.start_date == date(2024, 3, 25)
    assert record.symptoms == {"cramps", "headache"}
    assert record.created_at is not None

    item = mock_dynamo.put_item.call_args.args[0]
    assert item["PK"] == "USER#123"
    assert item["SK"] == "CYCLE#2024-03-25"
    assert item["start_date"] == "2024-03-25"
    assert item["symptoms"] == ["cramps", "headache"]
    assert "end_date" not in item
    assert mock_dynamo.put_item.call_args.kwargs["condition_expression"] == "attribute_not_exists(SK)"

def test_create_back_filled_record(repository, mock_dynamo):
    """Test a record older than existing ones is accepted."""
    record = repository.create_cycle_record("123", date(2023, 12, 4), end_date=date(2023, 12, 8))

    assert record.end_date == date(2023, 12, 8)
    assert mock_dynamo.put_item.call_args.args[0]["end_date"] == "2023-12-08"

def test_create_duplicate_record(repository, mock_dynamo):
    mock_dynamo.put_item.side_effect = _client_error("ConditionalCheckFailedException", "PutItem")

    with pytest.raises(DuplicateCycleRecordError):
        repository.create_cycle_record("123", date(2024, 3, 25))

def test_create_record_storage_error(repository, mock_dynamo):
    mock_dynamo.put_item.side_effect = _client_error("InternalServerError", "PutItem")

    with pytest.raises(CycleRecordStorageError):
        repository.create_cycle_record("123", date(2024, 3, 25))

def test_item_conversion_keeps_fields():
    record = CycleRecord(
        user_id="123",
        start_date=date(2024, 1, 1),
        end_date=date(2024, 1, 5),
        symptoms={"fatigue"},
        notes="Tired"
    )

    assert item_to_record(record_to_item(record)) == record

def test_repository_uses_shared_client(mock_dynamo):
    with patch("cyclephase.services.records.get_dynamo") as mock_get_dynamo:
        mock_get_dynamo.return_value = mock_dynamo
        repository = CycleRecordRepository()

    assert repository.dynamo is mock_dynamo

def test_get_dynamo_requires_table_name(monkeypatch):
    """Test missing table configuration fails loudly."""
    from cyclephase.utils.dynamo import get_dynamo, reset_dynamo

    monkeypatch.delenv("TRACKER_TABLE_NAME", raising=False)
    reset_dynamo()
    try:
        with pytest.raises(EnvironmentError, match="TRACKER_TABLE_NAME"):
            get_dynamo()
    finally:
        reset_dynamo()
