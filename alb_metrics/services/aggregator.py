"""
Aggregator Class - Collects the latest ALB metric values

This module queries CloudWatch for every metric of one polling cycle and
folds the results into a flat metric-name-to-value map.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional

from alb_metrics.models.data_models import (
    Datapoint,
    Dimension,
    MetricResult,
    Statistic,
    StatisticQuery,
)
from alb_metrics.services.cloudwatch import CloudWatchService, QueryError
from alb_metrics.services.discovery import ZONE_DIMENSION

logger = logging.getLogger(__name__)

STATISTICS_NAMESPACE = "AWS/ApplicationELB"

HEALTH_METRICS = ("HealthyHostCount", "UnHealthyHostCount")
RESPONSE_TIME_METRIC = "TargetResponseTime"
HTTP_CODE_METRICS = (
    "HTTPCode_Target_2XX_Count",
    "HTTPCode_Target_3XX_Count",
    "HTTPCode_Target_4XX_Count",
    "HTTPCode_Target_5XX_Count",
)


def latest_datapoint(datapoints: Iterable[Datapoint]) -> Optional[Datapoint]:
    """
    Datapoint with the greatest timestamp.
    On equal timestamps the one seen later wins. None for no datapoints.
    """
    best: Optional[Datapoint] = None
    for dp in datapoints:
        if best is not None and dp.timestamp < best.timestamp:
            continue
        best = dp
    return best


def balancer_dimensions(lb_name: Optional[str], tg_name: Optional[str]) -> List[Dimension]:
    dims: List[Dimension] = []
    if lb_name:
        dims.append(Dimension("LoadBalancer", lb_name))
    if tg_name:
        dims.append(Dimension("TargetGroup", tg_name))
    return dims


def zone_key(metric_name: str, zone: str) -> str:
    return f"{metric_name}_{zone}"


class MetricAggregator:
    """
    Fetches one cycle of ALB metrics.
    Responsibilities:
    - Build per-zone and whole-balancer queries
    - Pick the latest datapoint of every query
    - Skip (never fail on) metrics that could not be fetched
    """

    def __init__(
        self,
        service: CloudWatchService,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.service = service
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def fetch_metrics(
        self,
        zones: Iterable[str],
        lb_name: Optional[str] = None,
        tg_name: Optional[str] = None,
    ) -> Dict[str, float]:
        """Return the value map for this cycle, possibly partial"""
        glb = balancer_dimensions(lb_name, tg_name)
        results: List[MetricResult] = []

        # HostCount per AZ
        for zone in zones:
            dims = [Dimension(ZONE_DIMENSION, zone)] + glb
            for met in HEALTH_METRICS:
                results.append(self.lookup(zone_key(met, zone), dims, met, Statistic.AVERAGE))

        results.append(self.lookup(RESPONSE_TIME_METRIC, glb, RESPONSE_TIME_METRIC, Statistic.AVERAGE))
        for met in HTTP_CODE_METRICS:
            results.append(self.lookup(met, glb, met, Statistic.SUM))

        return self.fold(results)

    def lookup(
        self,
        key: str,
        dimensions: List[Dimension],
        metric_name: str,
        statistic: Statistic,
    ) -> MetricResult:
        """Run one query and reduce it to a MetricResult"""
        query = StatisticQuery.latest(dimensions, metric_name, statistic, now=self.clock())
        try:
            datapoints = self.service.get_statistics(query, STATISTICS_NAMESPACE)
        except QueryError as e:
            return MetricResult.skip(key, str(e))

        dp = latest_datapoint(datapoints)
        if dp is None:
            return MetricResult.skip(key, "fetched no datapoints")

        value = statistic.select(dp)
        if value is None:
            return MetricResult.skip(key, f"datapoint has no {statistic.value}")
        return MetricResult(key=key, value=value)

    @staticmethod
    def fold(results: Iterable[MetricResult]) -> Dict[str, float]:
        """Keep successful results; skipped keys are left out"""
        stat: Dict[str, float] = {}
        for r in results:
            if not r.ok:
                logger.debug("Skipping %s: %s", r.key, r.error)
                continue
            stat[r.key] = r.value
        return stat
