"""
Zone discovery

Enumerates the availability zones that report target health for ELB.
"""

import logging
from typing import List

from alb_metrics.services.cloudwatch import CloudWatchService

logger = logging.getLogger(__name__)

DISCOVERY_NAMESPACE = "AWS/ELB"
DISCOVERY_METRIC = "HealthyHostCount"
ZONE_DIMENSION = "AvailabilityZone"


def discover_zones(service: CloudWatchService) -> List[str]:
    """
    List zones from the single-dimension (zone only) catalog view.
    Entries with any other dimension combination are skipped.
    Zones keep service order; repeats are dropped.
    Raises QueryError on any catalog failure.
    """
    entries = service.list_metrics(DISCOVERY_NAMESPACE, DISCOVERY_METRIC, [ZONE_DIMENSION])

    zones: List[str] = []
    for dims in entries:
        if len(dims) != 1:
            continue
        if dims[0].name != ZONE_DIMENSION:
            continue
        if dims[0].value in zones:
            continue
        zones.append(dims[0].value)

    logger.info("Discovered %d availability zone(s): %s", len(zones), ", ".join(zones))
    return zones
