from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple
from unittest.mock import MagicMock

import pytest

from alb_metrics.services.cloudwatch import CloudWatchService

NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def dims_key(dimensions: List[Dict[str, str]]) -> Tuple[Tuple[str, str], ...]:
    return tuple((d["Name"], d["Value"]) for d in dimensions)


class FakeCloudWatch:
    """In-memory stand-in for the boto3 CloudWatch client"""

    def __init__(self) -> None:
        self.pages: List[Dict[str, Any]] = []
        self.datapoints: Dict[Tuple[str, Tuple[Tuple[str, str], ...]], List[Dict[str, Any]]] = {}
        self.errors: Dict[str, Exception] = {}
        self.calls: List[Dict[str, Any]] = []
        self.paginator = MagicMock()
        self.paginator.paginate.side_effect = lambda **kw: iter(self.pages)

    def get_paginator(self, name: str) -> MagicMock:
        assert name == "list_metrics"
        return self.paginator

    def add(self, metric: str, dimensions: List[Tuple[str, str]], points: List[Dict[str, Any]]) -> None:
        self.datapoints[(metric, tuple(dimensions))] = points

    def get_metric_statistics(self, **kwargs: Any) -> Dict[str, Any]:
        self.calls.append(kwargs)
        metric = kwargs["MetricName"]
        if metric in self.errors:
            raise self.errors[metric]
        key = (metric, dims_key(kwargs["Dimensions"]))
        return {"Label": metric, "Datapoints": self.datapoints.get(key, [])}


@pytest.fixture
def fake_client() -> FakeCloudWatch:
    return FakeCloudWatch()


@pytest.fixture
def service(fake_client: FakeCloudWatch) -> CloudWatchService:
    return CloudWatchService(fake_client)


def point(minute: int, average: Optional[float] = None, total: Optional[float] = None) -> Dict[str, Any]:
    dp: Dict[str, Any] = {"Timestamp": datetime(2024, 5, 1, 11, minute, tzinfo=timezone.utc)}
    if average is not None:
        dp["Average"] = average
    if total is not None:
        dp["Sum"] = total
    return dp
