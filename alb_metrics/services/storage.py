"""
ValueStore Class - Handles the plugin tempfile

This module persists the last emitted metric values between runs.
"""

import json
import os
from datetime import datetime
from typing import Dict


class ValueStore:
    """
    Manages the tempfile holding the last run's values.
    Responsibilities:
    - Save the values emitted this run
    """

    def __init__(self, file_path: str):
        self.file_path = file_path

    def save(self, values: Dict[str, float], now: datetime) -> None:
        """Overwrite the tempfile with this run's values"""
        self._ensure_parent_dir()
        payload = {"_lastTime": now.isoformat(), "values": values}
        with open(self.file_path, "w", encoding="utf-8") as f:
            json.dump(payload, f)

    def _ensure_parent_dir(self) -> None:
        """Create parent directories if needed"""
        os.makedirs(os.path.dirname(os.path.abspath(self.file_path)), exist_ok=True)
