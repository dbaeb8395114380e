"""
Graph definitions

Static graphs for whole-ALB metrics plus health graphs expanded per zone.
"""

from typing import Dict, Iterable, List

from alb_metrics.models.data_models import Graph, GraphMetric
from alb_metrics.services.aggregator import HTTP_CODE_METRICS, RESPONSE_TIME_METRIC

HEALTH_GRAPHS = {
    # graph id: (metric name prefix, label)
    "alb.healthy_host_count": ("HealthyHostCount_", "ALB Healthy Host Count"),
    "alb.unhealthy_host_count": ("UnHealthyHostCount_", "ALB Unhealthy Host Count"),
}


def static_graphs() -> Dict[str, Graph]:
    return {
        "alb.targetresponsetime": Graph(
            label="Whole ALB TargetResponseTime",
            unit="float",
            metrics=[GraphMetric(RESPONSE_TIME_METRIC, RESPONSE_TIME_METRIC)],
        ),
        "alb.http_target": Graph(
            label="Whole ALB HTTP Target Count",
            unit="integer",
            # "HTTPCode_Target_2XX_Count" -> "2XX"
            metrics=[GraphMetric(m, m.split("_")[2], stacked=True) for m in HTTP_CODE_METRICS],
        ),
    }


def graph_definition(zones: Iterable[str]) -> Dict[str, Graph]:
    """Build a fresh schema for the given zone list"""
    zones = list(zones)
    graphs = static_graphs()
    for grp, (name_prefix, label) in HEALTH_GRAPHS.items():
        metrics: List[GraphMetric] = [
            GraphMetric(name_prefix + az, az, stacked=True) for az in zones
        ]
        graphs[grp] = Graph(label=label, unit="integer", metrics=metrics)
    return graphs
