"""
PluginOutput Class - Writes the host agent protocol

Definition mode prints the graph schema as JSON, value mode prints one
tab-separated line per known metric.
"""

import json
import sys
from datetime import datetime, timezone
from typing import Dict, Optional, TextIO

from alb_metrics.models.data_models import Graph
from alb_metrics.services.storage import ValueStore

META_HEADER = "# mackerel-agent-plugin"


class PluginOutput:
    """
    Renders graphs and values for mackerel-agent.
    Responsibilities:
    - Print graph definitions
    - Print metric values keyed by graph
    - Save printed values to the tempfile
    """

    def __init__(self, store: ValueStore, stream: Optional[TextIO] = None):
        self.store = store
        self.stream = stream or sys.stdout

    def output_definitions(self, graphs: Dict[str, Graph]) -> None:
        payload = {"graphs": {key: g.to_dict() for key, g in graphs.items()}}
        self.stream.write(META_HEADER + "\n")
        self.stream.write(json.dumps(payload) + "\n")

    def output_values(
        self,
        graphs: Dict[str, Graph],
        values: Dict[str, float],
        now: Optional[datetime] = None,
    ) -> int:
        """Print values for every defined metric we have; returns lines written"""
        now = now or datetime.now(timezone.utc)
        epoch = int(now.timestamp())

        written = 0
        for key, graph in graphs.items():
            for metric in graph.metrics:
                if metric.name not in values:
                    continue
                self.stream.write(f"{key}.{metric.name}\t{values[metric.name]:f}\t{epoch}\n")
                written += 1

        self.store.save(values, now)
        return written
