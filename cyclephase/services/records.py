"""
Cycle record storage.

Records live in the tracker table under the user's partition, one item per
cycle keyed by its start date:

    PK = USER#{user_id}
    SK = CYCLE#{YYYY-MM-DD}

Typical usage:
    repository = CycleRecordRepository()
    repository.create_cycle_record(user_id, date(2024, 1, 1), {"cramps"}, "")
    records = repository.list_cycle_records(user_id)  # most recent first
"""
from typing import Any, Dict, Iterable, List, Optional
from datetime import date, datetime, timezone

from aws_lambda_powertools import Logger
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from cyclephase.models.record import CycleRecord
from cyclephase.services.exceptions import DuplicateCycleRecordError, CycleRecordStorageError
from cyclephase.utils.dynamo import get_dynamo, create_pk, create_cycle_sk, CYCLE_SK_PREFIX

logger = Logger()

def record_to_item(record: CycleRecord) -> Dict[str, Any]:
    """
    Convert a record into a DynamoDB item.

    Dates are stored as ISO strings and symptoms as a sorted list, since
    DynamoDB rejects empty string sets.
    """
    item = {
        "PK": create_pk(record.user_id),
        "SK": create_cycle_sk(record.start_date.isoformat()),
        "user_id": record.user_id,
        "start_date": record.start_date.isoformat(),
        "symptoms": sorted(record.symptoms),
        "notes": record.notes,
        "created_at": record.created_at
    }
    if record.end_date is not None:
        item["end_date"] = record.end_date.isoformat()
    return item

def item_to_record(item: Dict[str, Any]) -> CycleRecord:
    """Convert a DynamoDB item back into a record."""
    return CycleRecord(
        user_id=item["user_id"],
        start_date=item["start_date"],
        end_date=item.get("end_date"),
        symptoms=set(item.get("symptoms") or []),
        notes=item.get("notes") or "",
        created_at=item.get("created_at")
    )

class CycleRecordRepository:
    """Read and create cycle records for a user."""

    def __init__(self, dynamo=None):
        self.dynamo = dynamo or get_dynamo()

    def list_cycle_records(self, user_id: str) -> List[CycleRecord]:
        """
        List a user's cycle records, most recent first.

        Args:
            user_id: User identifier

        Returns:
            Records ordered by start date descending

        Raises:
            CycleRecordStorageError: If the table cannot be queried
        """
        try:
            items = self.dynamo.query_items(
                partition_key="PK",
                partition_value=create_pk(user_id),
                sort_key_condition=Key("SK").begins_with(CYCLE_SK_PREFIX),
                scan_forward=False
            )
        except ClientError as e:
            logger.error("Failed to list cycle records", extra={
                "user_id": user_id,
                "error": str(e)
            })
            raise CycleRecordStorageError(f"Failed to list cycle records: {str(e)}") from e

        records = [item_to_record(item) for item in items]
        return sorted(records, key=lambda x: x.start_date, reverse=True)

    def create_cycle_record(
        self,
        user_id: str,
        start_date: date,
        symptoms: Optional[Iterable[str]] = None,
        notes: str = "",
        end_date: Optional[date] = None
    ) -> CycleRecord:
        """
        Store a new cycle record.

        Records earlier than the latest existing one are accepted so history
        can be back-filled; only an exact duplicate start date is refused.

        Args:
            user_id: User identifier
            start_date: First day of menstruation
            symptoms: Optional symptom tags
            notes: Free text notes
            end_date: Optional last day of menstruation

        Returns:
            The stored record

        Raises:
            DuplicateCycleRecordError: If a record already starts on start_date
            CycleRecordStorageError: If the write fails
        """
        record = CycleRecord(
            user_id=user_id,
            start_date=start_date,
            end_date=end_date,
            symptoms=set(symptoms or []),
            notes=notes,
            created_at=datetime.now(timezone.utc).isoformat()
        )

        try:
            self.dynamo.put_item(
                record_to_item(record),
                condition_expression="attribute_not_exists(SK)"
            )
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
                logger.warning("Duplicate cycle record rejected", extra={
                    "user_id": user_id,
                    "start_date": start_date.isoformat()
                })
                raise DuplicateCycleRecordError(
                    f"A cycle starting on {start_date.isoformat()} is already recorded"
                ) from e
            logger.error("Failed to store cycle record", extra={
                "user_id": user_id,
                "error": str(e)
            })
            raise CycleRecordStorageError(f"Failed to store cycle record: {str(e)}") from e

        logger.info("Cycle record created", extra={
            "user_id": user_id,
            "start_date": start_date.isoformat(),
            "symptom_count": len(record.symptoms)
        })
        return record
