"""
DynamoDB utility functions for profile and reading storage.
"""
import os
from typing import Dict, List, Optional, Any
import boto3
from boto3.dynamodb.conditions import Key

# Singleton instance
_dynamo_instance = None

# Width of the zero-padded reading sequence in sort keys
READING_SEQUENCE_DIGITS = 8
MAX_READINGS_PER_SERIES = 10 ** READING_SEQUENCE_DIGITS

def get_dynamo() -> 'DynamoDBClient':
    """
    Get or create the singleton DynamoDB client.

    The table name is read from TRACKER_TABLE_NAME on first use, so
    importing this module never touches AWS.

    Example:
        dynamo = get_dynamo()
        item = dynamo.get_item({"PK": create_pk("123"), "SK": create_profile_sk()})

    Returns:
        DynamoDBClient: Singleton instance of DynamoDB client

    Raises:
        EnvironmentError: If TRACKER_TABLE_NAME environment variable is not set
    """
    global _dynamo_instance
    if _dynamo_instance is None:
        try:
            table_name = os.environ['TRACKER_TABLE_NAME']
        except KeyError:
            raise EnvironmentError(
                "TRACKER_TABLE_NAME environment variable not set. "
                "This variable must be set to the DynamoDB table name."
            )
        _dynamo_instance = DynamoDBClient(table_name)
    return _dynamo_instance

def reset_dynamo() -> None:
    """Drop the cached client, used when the table configuration changes."""
    global _dynamo_instance
    _dynamo_instance = None

class DynamoDBClient:
    """Client for the tracker table."""

    def __init__(self, table_name: str):
        self.dynamodb = boto3.resource('dynamodb')
        self.table = self.dynamodb.Table(table_name)

    def put_item(self, item: Dict[str, Any]) -> Dict[str, Any]:
        """Put a single item into the table."""
        return self.table.put_item(Item=item)

    def put_items(self, items: List[Dict[str, Any]]) -> None:
        """
        Write several items in batches.

        Args:
            items: Items to write, each with its full key
        """
        with self.table.batch_writer() as batch:
            for item in items:
                batch.put_item(Item=item)

    def get_item(self, key: Dict[str, str]) -> Optional[Dict[str, Any]]:
        """
        Get a single item from the table.

        Args:
            key: Dictionary containing partition key and sort key

        Returns:
            Item if found, None otherwise
        """
        response = self.table.get_item(Key=key)
        return response.get('Item')

    def query_prefix(self, partition_value: str, sort_prefix: str) -> List[Dict[str, Any]]:
        """
        Query all items of a partition whose sort key starts with a prefix.

        Follows pagination so large series come back whole, in ascending
        sort key order.

        Args:
            partition_value: Value of the PK attribute
            sort_prefix: Sort key prefix, e.g. "READING#"

        Returns:
            List of matching items
        """
        key_condition = Key("PK").eq(partition_value) & Key("SK").begins_with(sort_prefix)
        items = []
        kwargs = {"KeyConditionExpression": key_condition}
        while True:
            response = self.table.query(**kwargs)
            items.extend(response.get('Items', []))
            last_key = response.get('LastEvaluatedKey')
            if not last_key:
                return items
            kwargs["ExclusiveStartKey"] = last_key

    def delete_items(self, keys: List[Dict[str, str]]) -> None:
        """Delete several items in batches."""
        with self.table.batch_writer() as batch:
            for key in keys:
                batch.delete_item(Key=key)

def create_pk(user_id: str) -> str:
    """Create partition key from user ID."""
    return f"USER#{user_id}"

def create_profile_sk() -> str:
    """Create sort key for the user profile document."""
    return "PROFILE"

def create_reading_prefix(kind: Optional[str] = None) -> str:
    """Sort key prefix for all readings, or the readings of one kind."""
    return f"READING#{kind}#" if kind else "READING#"

def create_reading_sk(kind: str, sequence: int) -> str:
    """
    Create sort key for a metric reading.

    The zero-padded sequence keeps readings of a kind in insertion order
    when queried by sort key.

    Args:
        kind: Metric kind value
        sequence: Position of the reading in its series

    Returns:
        Sort key in format "READING#{kind}#{sequence:08d}"

    Raises:
        ValueError: If the sequence does not fit the padded width
    """
    if not 0 <= sequence < MAX_READINGS_PER_SERIES:
        raise ValueError(f"Reading sequence {sequence} out of range")
    return f"{create_reading_prefix(kind)}{sequence:0{READING_SEQUENCE_DIGITS}d}"

def create_cycle_event_sk(date_str: str) -> str:
    """Create sort key for marked cycle days."""
    return f"CYCLE#{date_str}"

def create_baby_profile_sk() -> str:
    """Create sort key for the baby profile document."""
    return "BABY#PROFILE"

def create_record_prefix(record_type: str) -> str:
    """Sort key prefix for the records of one type, e.g. "FEEDING#"."""
    return f"{record_type}#"

def create_record_sk(record_type: str, sort_value: str, record_id: str) -> str:
    """
    Create sort key for a dated record.

    Args:
        record_type: Record type prefix, e.g. "FEEDING"
        sort_value: ISO date or timestamp the records are ordered by
        record_id: Record identifier, keeps records on the same date apart

    Returns:
        Sort key in format "{record_type}#{sort_value}#{record_id}"
    """
    return f"{create_record_prefix(record_type)}{sort_value}#{record_id}"
