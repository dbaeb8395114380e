"""Plugin configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

import boto3
from botocore.utils import InstanceMetadataRegionFetcher

DEFAULT_TEMPFILE = "/tmp/mackerel-plugin-alb"
META_ENV = "MACKEREL_AGENT_PLUGIN_META"


class ConfigError(Exception):
    """Configuration could not be resolved"""


@dataclass(frozen=True)
class PluginConfig:
    """Resolved inputs for discovery and fetching."""
    region: str
    lb_name: Optional[str] = None
    tg_name: Optional[str] = None
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    tempfile: str = DEFAULT_TEMPFILE


def resolve_region(explicit: Optional[str] = None) -> str:
    """Flag, then boto3 session default, then EC2 instance metadata."""
    if explicit:
        return explicit

    region = boto3.session.Session().region_name
    if region:
        return region

    region = InstanceMetadataRegionFetcher().retrieve_region()
    if region:
        return region

    raise ConfigError("AWS region not given and could not be detected")


def is_meta_mode() -> bool:
    """Host agent asks for graph definitions instead of values"""
    return os.getenv(META_ENV, "") != ""
