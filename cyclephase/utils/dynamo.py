"""
DynamoDB utility functions for data access.
"""
import os
from typing import Dict, List, Optional, Any
import boto3
from boto3.dynamodb.conditions import Key

# Singleton instance
_dynamo_instance = None

def get_dynamo() -> 'DynamoDBClient':
    """
    Get or create singleton DynamoDB client instance.

    All table access in this project goes through this function so that the
    table name is resolved once and missing configuration fails loudly.

    Example:
        dynamo = get_dynamo()
        items = dynamo.query_items("PK", create_pk("123"), Key("SK").begins_with(CYCLE_SK_PREFIX))

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
    """Drop the cached client so the next get_dynamo() call re-reads configuration."""
    global _dynamo_instance
    _dynamo_instance = None

class DynamoDBClient:
    """Client for interacting with DynamoDB table."""

    def __init__(self, table_name: str):
        self.dynamodb = boto3.resource('dynamodb')
        self.table = self.dynamodb.Table(table_name)

    def put_item(
        self,
        item: Dict[str, Any],
        condition_expression: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Put a single item into the table.

        Args:
            item: Dictionary containing item attributes
            condition_expression: Optional condition the write must satisfy

        Returns:
            Response from DynamoDB
        """
        if condition_expression:
            return self.table.put_item(Item=item, ConditionExpression=condition_expression)
        return self.table.put_item(Item=item)

    def query_items(
        self,
        partition_key: str,
        partition_value: str,
        sort_key_condition: Optional[Key] = None,
        scan_forward: bool = True
    ) -> List[Dict[str, Any]]:
        """
        Query items using partition key and optional sort key condition.

        Args:
            partition_key: Name of partition key
            partition_value: Value of partition key
            sort_key_condition: Optional sort key condition
            scan_forward: False to return items in descending sort key order

        Returns:
            List of matching items
        """
        key_condition = Key(partition_key).eq(partition_value)
        if sort_key_condition:
            key_condition = key_condition & sort_key_condition

        response = self.table.query(
            KeyConditionExpression=key_condition,
            ScanIndexForward=scan_forward
        )
        return response.get('Items', [])

CYCLE_SK_PREFIX = "CYCLE#"
NOTIFICATION_SK_PREFIX = "NOTIFICATION#"

def create_pk(user_id: str) -> str:
    """Create partition key from user ID."""
    return f"USER#{user_id}"

def create_cycle_sk(date_str: str) -> str:
    """Create sort key for cycle records, keyed by ISO start date."""
    return f"{CYCLE_SK_PREFIX}{date_str}"

def create_notification_sk(timestamp: str) -> str:
    """
    Create sort key for notifications.

    Args:
        timestamp: ISO format creation timestamp

    Returns:
        Sort key in format "NOTIFICATION#{timestamp}"
    """
    return f"{NOTIFICATION_SK_PREFIX}{timestamp}"
