"""
CloudWatchService Class - Handles the monitoring API

This module wraps the boto3 CloudWatch client behind the two calls the
plugin needs: metric catalog listing and statistic queries.
"""

import logging
from typing import Any, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from alb_metrics.config import PluginConfig
from alb_metrics.models.data_models import Datapoint, Dimension, StatisticQuery
from alb_metrics.utils.helpers import parse_ts, safe_float, to_dimensions

logger = logging.getLogger(__name__)


class QueryError(Exception):
    """A monitoring API call failed or returned something unusable"""

    def __init__(self, operation: str, message: str):
        super().__init__(f"{operation}: {message}")
        self.operation = operation


def create_client(config: PluginConfig) -> Any:
    """Build a CloudWatch client; empty credentials fall back to the default chain"""
    return boto3.client(
        "cloudwatch",
        region_name=config.region,
        aws_access_key_id=config.access_key_id or None,
        aws_secret_access_key=config.secret_access_key or None,
    )


class CloudWatchService:
    """
    Thin query service over a CloudWatch client.
    Responsibilities:
    - List metric catalog entries (all pages)
    - Fetch statistics as Datapoint objects
    - Translate client failures into QueryError
    """

    def __init__(self, client: Any):
        self.client = client

    def list_metrics(
        self,
        namespace: str,
        metric_name: str,
        dimension_filter: Optional[List[str]] = None,
    ) -> List[List[Dimension]]:
        """Return the dimension list of every catalog entry"""
        params: dict = {"Namespace": namespace, "MetricName": metric_name}
        if dimension_filter:
            params["Dimensions"] = [{"Name": name} for name in dimension_filter]

        entries: List[List[Dimension]] = []
        try:
            paginator = self.client.get_paginator("list_metrics")
            for page in paginator.paginate(**params):
                for met in page.get("Metrics", []):
                    entries.append(to_dimensions(met.get("Dimensions") or []))
        except (ClientError, BotoCoreError) as e:
            raise QueryError("ListMetrics", str(e)) from e
        except (AttributeError, TypeError) as e:
            raise QueryError("ListMetrics", f"malformed response: {e}") from e

        logger.debug("ListMetrics %s/%s returned %d entries", namespace, metric_name, len(entries))
        return entries

    def get_statistics(self, query: StatisticQuery, namespace: str) -> List[Datapoint]:
        """Run one GetMetricStatistics call"""
        try:
            response = self.client.get_metric_statistics(
                Namespace=namespace,
                MetricName=query.metric_name,
                Dimensions=[d.to_wire() for d in query.dimensions],
                StartTime=query.start_time,
                EndTime=query.end_time,
                Period=query.period,
                Statistics=[query.statistic.value],
            )
        except (ClientError, BotoCoreError) as e:
            raise QueryError("GetMetricStatistics", str(e)) from e

        datapoints: List[Datapoint] = []
        try:
            for raw in response.get("Datapoints", []):
                ts = parse_ts(raw.get("Timestamp"))
                if ts is None:
                    raise QueryError("GetMetricStatistics", f"datapoint without timestamp: {raw!r}")
                datapoints.append(
                    Datapoint(
                        timestamp=ts,
                        average=safe_float(raw.get("Average")),
                        sum=safe_float(raw.get("Sum")),
                    )
                )
        except (AttributeError, TypeError) as e:
            raise QueryError("GetMetricStatistics", f"malformed response: {e}") from e
        return datapoints
