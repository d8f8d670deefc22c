"""
Configuration Module

Architectural Intent:
- Centralized configuration loading from a JSON file
- Provides typed access to autoscaling, discovery and backend settings
- Falls back to sensible defaults when the config file is absent
- Environment variables override file-based config

Design Decisions:
- Config is a frozen dataclass for immutability after load
- Nested config sections map to sub-dataclasses
- Backend connection settings (rancher) hang off AutoscalingOptions so a
  cloud provider builder receives everything it needs in one object
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Optional
import json
import logging
import os

from poolscale.domain.value_objects.resource_limiter import (
    RESOURCE_CPU,
    RESOURCE_MEMORY,
    RESOURCE_NODES,
    ResourceLimiter,
)

logger = logging.getLogger(__name__)

GIB = 1024 ** 3


@dataclass(frozen=True)
class RancherConfig:
    """Rancher API connection configuration."""
    url: str = ""
    token: str = ""
    cluster_id: str = ""
    state_file: str = ""


@dataclass(frozen=True)
class AutoscalingOptions:
    """Scaling configuration handed to cloud provider builders."""
    cloud_provider: str = "rancher"
    max_nodes_total: int = 0
    min_cores: int = 0
    max_cores: int = 320000
    min_memory_gib: int = 0
    max_memory_gib: int = 6400000
    scan_interval_seconds: int = 10
    cleanup_timeout_seconds: int = 5
    rancher: RancherConfig = field(default_factory=RancherConfig)


@dataclass(frozen=True)
class NodeGroupDiscoveryOptions:
    """Node group discovery configuration ("min:max:pool-id" specs)."""
    node_group_specs: tuple[str, ...] = ()


@dataclass(frozen=True)
class PoolscaleConfig:
    """Root configuration for the poolscale application."""
    autoscaling: AutoscalingOptions = field(default_factory=AutoscalingOptions)
    discovery: NodeGroupDiscoveryOptions = field(default_factory=NodeGroupDiscoveryOptions)
    log_level: str = "WARNING"
    log_format: str = "text"


def resource_limiter_from_options(options: AutoscalingOptions) -> ResourceLimiter:
    """Build the resource limiter the control loop hands to the cloud provider."""
    max_limits = {
        RESOURCE_CPU: options.max_cores,
        RESOURCE_MEMORY: options.max_memory_gib * GIB,
    }
    if options.max_nodes_total > 0:
        max_limits[RESOURCE_NODES] = options.max_nodes_total
    return ResourceLimiter(
        min_limits={
            RESOURCE_CPU: options.min_cores,
            RESOURCE_MEMORY: options.min_memory_gib * GIB,
        },
        max_limits=max_limits,
    )


def _env_override(data: dict, prefix: str = "POOLSCALE") -> dict:
    """Override config values with environment variables.

    Environment variables follow the pattern POOLSCALE_SECTION_KEY.
    For example: POOLSCALE_RANCHER_URL=https://rancher.local/v3,
    POOLSCALE_DISCOVERY_NODE_GROUP_SPECS=1:5:np-a,0:3:np-b
    """
    for key, value in os.environ.items():
        if not key.startswith(f"{prefix}_"):
            continue
        name = key[len(prefix) + 1:].lower()
        if name in ("log_level", "log_format"):
            data[name] = value
            continue
        parts = name.split("_", 1)
        if len(parts) == 2:
            section, field_name = parts
            if not isinstance(data.get(section), dict):
                data[section] = {}
            data[section][field_name] = value
    return data


def _parse_config_file(path: Path) -> dict:
    """Parse a JSON config file. Returns empty dict on failure."""
    try:
        with open(path) as f:
            return json.load(f)
    except FileNotFoundError:
        logger.debug("Config file not found: %s", path)
        return {}
    except json.JSONDecodeError as e:
        logger.warning("Invalid config file %s: %s", path, e)
        return {}


def _build_sub_config(cls, data: dict):
    """Build a sub-config dataclass from a dict, ignoring unknown keys."""
    valid_fields = {f.name: f for f in fields(cls) if f.type in ("str", "int", "tuple[str, ...]")}
    filtered = {k: v for k, v in data.items() if k in valid_fields}

    for name, value in filtered.items():
        field_type = valid_fields[name].type
        # Comma-separated strings become tuples for tuple fields
        if field_type == "tuple[str, ...]":
            if isinstance(value, str):
                filtered[name] = tuple(v.strip() for v in value.split(",") if v.strip())
            elif isinstance(value, list):
                filtered[name] = tuple(value)
        elif field_type == "int" and isinstance(value, str):
            filtered[name] = int(value)

    return cls(**filtered)


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "POOLSCALE",
) -> PoolscaleConfig:
    """Load configuration from file and environment variables.

    Priority (highest to lowest):
    1. Environment variables (POOLSCALE_SECTION_KEY)
    2. Config file values
    3. Defaults

    Args:
        path: Path to config file (JSON). Defaults to poolscale.json in CWD.
        env_prefix: Environment variable prefix. Defaults to POOLSCALE.
    """
    config_path = Path(path) if path else Path("poolscale.json")
    data = _parse_config_file(config_path)
    data = _env_override(data, env_prefix)

    autoscaling = _build_sub_config(AutoscalingOptions, data.get("autoscaling", {}))
    rancher = _build_sub_config(RancherConfig, data.get("rancher", {}))

    return PoolscaleConfig(
        autoscaling=replace(autoscaling, rancher=rancher),
        discovery=_build_sub_config(
            NodeGroupDiscoveryOptions, data.get("discovery", {})
        ),
        log_level=data.get("log_level", "WARNING"),
        log_format=data.get("log_format", "text"),
    )
