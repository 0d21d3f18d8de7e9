"""
Pytest configuration and shared fixtures.
"""
import os

os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "1")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "cycle_phase")
os.environ.setdefault("TRACKER_TABLE_NAME", "TrackerTable-test")
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-1")

import pytest
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List
from unittest.mock import Mock

from cyclephase.models.record import CycleRecord
from cyclephase.models.template import CycleTemplate
from cyclephase.services.template import build_template, default_template

@pytest.fixture
def template() -> CycleTemplate:
    """Default 5/9/5/9 template."""
    return default_template()

@pytest.fixture
def abcd_template() -> CycleTemplate:
    """Four single-letter phases summing to 28 days."""
    return build_template([("A", 5), ("B", 9), ("C", 5), ("D", 9)])

@pytest.fixture
def cycle_records() -> List[CycleRecord]:
    """Three recorded cycles, oldest first, 28 days apart."""
    return [
        CycleRecord(
            user_id="123",
            start_date=date(2024, 1, 1) + timedelta(days=i * 28),
            symptoms={"cramps"} if i == 2 else set(),
            notes=f"Cycle {i + 1}"
        )
        for i in range(3)
    ]

@pytest.fixture
def mock_dynamo() -> Mock:
    """DynamoDB client double."""
    return Mock()

@pytest.fixture
def mock_cycle_items() -> List[dict]:
    """Stored cycle record items as returned by a descending query."""
    return [
        {
            "PK": "USER#123",
            "SK": "CYCLE#2024-02-26",
            "user_id": "123",
            "start_date": "2024-02-26",
            "symptoms": ["cramps", "headache"],
            "notes": "Heavy first day",
            "created_at": "2024-02-26T08:00:00+00:00"
        },
        {
            "PK": "USER#123",
            "SK": "CYCLE#2024-01-29",
            "user_id": "123",
            "start_date": "2024-01-29",
            "end_date": "2024-02-02",
            "symptoms": [],
            "notes": "",
            "created_at": "2024-01-29T08:00:00+00:00"
        }
    ]

@pytest.fixture
def lambda_context():
    """Minimal Lambda context for handler tests."""
    @dataclass
    class LambdaContext:
        function_name: str = "cycle-phase-test"
        memory_limit_in_mb: int = 128
        invoked_function_arn: str = "arn:aws:lambda:eu-west-1:123456789012:function:cycle-phase-test"
        aws_request_id: str = "52fdfc07-2182-154f-163f-5f0f9a621d72"

    return LambdaContext()
