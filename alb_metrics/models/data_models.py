"""
Data Models (DTOs - Data Transfer Objects)

This module contains all dataclass definitions used throughout the plugin.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

# 2 min window with 1 min period, so at least one datapoint is eligible
QUERY_WINDOW_SECONDS = 120
QUERY_PERIOD_SECONDS = 60


@dataclass(frozen=True)
class Dimension:
    """Named key/value tag scoping a query to a resource"""
    name: str
    value: str

    def to_wire(self) -> Dict[str, str]:
        return {"Name": self.name, "Value": self.value}


@dataclass
class Datapoint:
    """One time-stamped aggregate sample returned by CloudWatch"""
    timestamp: datetime
    average: Optional[float] = None
    sum: Optional[float] = None


class Statistic(str, Enum):
    """Aggregation kind requested for a query"""
    AVERAGE = "Average"
    SUM = "Sum"

    def select(self, dp: Datapoint) -> Optional[float]:
        """Pick the datapoint field matching this aggregation kind"""
        if self is Statistic.AVERAGE:
            return dp.average
        return dp.sum


@dataclass
class StatisticQuery:
    """Request for one metric statistic over a time window"""
    dimensions: List[Dimension]
    metric_name: str
    statistic: Statistic
    start_time: datetime
    end_time: datetime
    period: int = QUERY_PERIOD_SECONDS

    @classmethod
    def latest(
        cls,
        dimensions: List[Dimension],
        metric_name: str,
        statistic: Statistic,
        now: Optional[datetime] = None,
    ) -> "StatisticQuery":
        """Query covering the last two minutes up to `now`"""
        end = now or datetime.now(timezone.utc)
        return cls(
            dimensions=list(dimensions),
            metric_name=metric_name,
            statistic=statistic,
            start_time=end - timedelta(seconds=QUERY_WINDOW_SECONDS),
            end_time=end,
        )


@dataclass
class MetricResult:
    """
    Outcome of one statistic query for a single output key.
    Either a value was recorded, or the key is skipped with a reason.
    """
    key: str
    value: Optional[float] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.value is not None

    @classmethod
    def skip(cls, key: str, reason: str) -> "MetricResult":
        return cls(key=key, error=reason)


@dataclass
class GraphMetric:
    """One metric line inside a graph definition"""
    name: str
    label: str
    stacked: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "label": self.label, "stacked": self.stacked}


@dataclass
class Graph:
    """Graph definition: display label, unit and ordered metrics"""
    label: str
    unit: str
    metrics: List[GraphMetric] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "unit": self.unit,
            "metrics": [m.to_dict() for m in self.metrics],
        }
