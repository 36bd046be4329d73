"""
Tests for the DynamoDB client and key builders.
"""
import pytest
from unittest.mock import MagicMock

from src.utils.dynamo import (
    MAX_READINGS_PER_SERIES,
    DynamoDBClient,
    create_cycle_event_sk,
    create_pk,
    create_reading_prefix,
    create_reading_sk,
    get_dynamo,
    reset_dynamo
)

@pytest.fixture
def mock_boto3(monkeypatch) -> MagicMock:
    """Replace boto3 and start every test without a cached client."""
    boto3 = MagicMock()
    monkeypatch.setattr("src.utils.dynamo.boto3", boto3)
    monkeypatch.setenv("TRACKER_TABLE_NAME", "TrackerTable-test")
    reset_dynamo()
    yield boto3
    reset_dynamo()

def test_get_dynamo_is_cached(mock_boto3):
    """Test that the client is created once and reused."""
    first = get_dynamo()
    second = get_dynamo()

    assert first is second
    mock_boto3.resource.assert_called_once_with('dynamodb')
    mock_boto3.resource.return_value.Table.assert_called_once_with("TrackerTable-test")

def test_reset_dynamo_creates_new_client(mock_boto3, monkeypatch):
    """Test that a reset picks up a changed table name."""
    first = get_dynamo()
    monkeypatch.setenv("TRACKER_TABLE_NAME", "TrackerTable-other")
    reset_dynamo()
    second = get_dynamo()

    assert first is not second
    mock_boto3.resource.return_value.Table.assert_called_with("TrackerTable-other")

def test_get_dynamo_requires_table_name(mock_boto3, monkeypatch):
    """Test the error when the table name is not configured."""
    monkeypatch.delenv("TRACKER_TABLE_NAME")

    with pytest.raises(EnvironmentError):
        get_dynamo()
    mock_boto3.resource.assert_not_called()

def test_query_prefix_follows_pagination(mock_boto3):
    """Test that every page of a query is returned."""
    table = mock_boto3.resource.return_value.Table.return_value
    table.query.side_effect = [
        {"Items": [{"SK": "READING#spo2#00000000"}], "LastEvaluatedKey": {"SK": "READING#spo2#00000000"}},
        {"Items": [{"SK": "READING#spo2#00000001"}]}
    ]

    items = DynamoDBClient("TrackerTable-test").query_prefix("USER#123", "READING#")

    assert [item["SK"] for item in items] == ["READING#spo2#00000000", "READING#spo2#00000001"]
    assert table.query.call_count == 2
    assert table.query.call_args.kwargs["ExclusiveStartKey"] == {"SK": "READING#spo2#00000000"}

def test_key_builders():
    """Test partition and sort key formats."""
    assert create_pk("123") == "USER#123"
    assert create_reading_prefix() == "READING#"
    assert create_reading_prefix("spo2") == "READING#spo2#"
    assert create_reading_sk("spo2", 7) == "READING#spo2#00000007"
    assert create_cycle_event_sk("2024-01-01") == "CYCLE#2024-01-01"

def test_reading_sort_keys_keep_order_past_four_digits():
    """Test that lexicographic key order matches sequence order."""
    sequences = [9, 10, 9998, 9999, 10000, 123456, MAX_READINGS_PER_SERIES - 1]
    keys = [create_reading_sk("heart_rate", sequence) for sequence in sequences]

    assert sorted(keys) == keys

@pytest.mark.parametrize("sequence", [-1, MAX_READINGS_PER_SERIES])
def test_reading_sort_key_rejects_out_of_range_sequence(sequence):
    """Test that sequences outside the padded width are refused."""
    with pytest.raises(ValueError):
        create_reading_sk("heart_rate", sequence)
