"""CLI entry point for the ALB metrics plugin."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, TextIO, Tuple

from alb_metrics.config import (
    DEFAULT_TEMPFILE,
    ConfigError,
    PluginConfig,
    is_meta_mode,
    resolve_region,
)
from alb_metrics.services.aggregator import MetricAggregator
from alb_metrics.services.cloudwatch import CloudWatchService, QueryError, create_client
from alb_metrics.services.discovery import discover_zones
from alb_metrics.services.output import PluginOutput
from alb_metrics.services.schema import graph_definition
from alb_metrics.services.storage import ValueStore

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="mackerel-agent plugin for AWS ALB metrics")
    p.add_argument("--region", default="", help="AWS Region")
    p.add_argument("--lbname", default="", help="ALB Name")
    p.add_argument("--tgname", default="", help="TargetGroup Name")
    p.add_argument("--access-key-id", default="", help="AWS Access Key ID")
    p.add_argument("--secret-access-key", default="", help="AWS Secret Access Key")
    p.add_argument("--tempfile", default="", help="Temp file name")
    p.add_argument("--verbose", action="store_true", help="debug logging to stderr")
    return p.parse_args(argv)


def build_config(args: argparse.Namespace) -> PluginConfig:
    return PluginConfig(
        region=resolve_region(args.region),
        lb_name=args.lbname or None,
        tg_name=args.tgname or None,
        access_key_id=args.access_key_id or None,
        secret_access_key=args.secret_access_key or None,
        tempfile=args.tempfile or DEFAULT_TEMPFILE,
    )


def prepare(config: PluginConfig) -> Tuple[CloudWatchService, List[str]]:
    """Create the client and discover zones; raises QueryError"""
    service = CloudWatchService(create_client(config))
    zones = discover_zones(service)
    return service, zones


def run(
    config: PluginConfig,
    service: CloudWatchService,
    zones: List[str],
    meta: bool,
    stream: Optional[TextIO] = None,
) -> None:
    """Emit definitions or values for one invocation"""
    graphs = graph_definition(zones)
    output = PluginOutput(ValueStore(config.tempfile), stream=stream)

    if meta:
        output.output_definitions(graphs)
        return

    values = MetricAggregator(service).fetch_metrics(zones, config.lb_name, config.tg_name)
    written = output.output_values(graphs, values)
    logger.debug("Wrote %d value line(s)", written)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )

    try:
        config = build_config(args)
        service, zones = prepare(config)
    except (ConfigError, QueryError) as e:
        logger.error("Failed to prepare: %s", e)
        return 1

    run(config, service, zones, meta=is_meta_mode())
    return 0


if __name__ == "__main__":
    sys.exit(main())
