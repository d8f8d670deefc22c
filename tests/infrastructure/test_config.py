"""Tests for configuration module."""

import json
import os
import pytest
from unittest.mock import patch

from poolscale.infrastructure.config import (
    GIB,
    AutoscalingOptions,
    NodeGroupDiscoveryOptions,
    PoolscaleConfig,
    RancherConfig,
    load_config,
    resource_limiter_from_options,
)


@pytest.fixture(autouse=True)
def clean_env():
    env = {k: v for k, v in os.environ.items() if not k.startswith("POOLSCALE_")}
    with patch.dict(os.environ, env, clear=True):
        yield


class TestDefaultConfig:
    def test_defaults(self):
        config = load_config(path="/nonexistent/poolscale.json")
        assert config.log_level == "WARNING"
        assert config.log_format == "text"
        assert config.autoscaling.cloud_provider == "rancher"
        assert config.autoscaling.scan_interval_seconds == 10
        assert config.autoscaling.cleanup_timeout_seconds == 5
        assert config.discovery.node_group_specs == ()
        assert config.autoscaling.rancher.url == ""

    def test_all_sections_present(self):
        config = load_config(path="/nonexistent/poolscale.json")
        assert isinstance(config, PoolscaleConfig)
        assert isinstance(config.autoscaling, AutoscalingOptions)
        assert isinstance(config.discovery, NodeGroupDiscoveryOptions)
        assert isinstance(config.autoscaling.rancher, RancherConfig)


class TestFileConfig:
    def test_load_from_file(self, tmp_path):
        config_file = tmp_path / "poolscale.json"
        config_file.write_text(json.dumps({
            "log_level": "DEBUG",
            "log_format": "json",
            "autoscaling": {"max_nodes_total": 50, "scan_interval_seconds": 30},
            "discovery": {"node_group_specs": ["1:5:np-a", "0:3:np-b"]},
            "rancher": {"url": "https://rancher.local/v3", "cluster_id": "c-abc12"},
        }))

        config = load_config(path=str(config_file))
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"
        assert config.autoscaling.max_nodes_total == 50
        assert config.autoscaling.scan_interval_seconds == 30
        assert config.discovery.node_group_specs == ("1:5:np-a", "0:3:np-b")
        assert config.autoscaling.rancher.url == "https://rancher.local/v3"
        assert config.autoscaling.rancher.cluster_id == "c-abc12"

    def test_partial_config(self, tmp_path):
        config_file = tmp_path / "poolscale.json"
        config_file.write_text(json.dumps({"rancher": {"token": "t"}}))

        config = load_config(path=str(config_file))
        assert config.autoscaling.rancher.token == "t"
        assert config.autoscaling.rancher.url == ""  # default preserved
        assert config.autoscaling.scan_interval_seconds == 10  # default preserved

    def test_invalid_json_returns_defaults(self, tmp_path):
        config_file = tmp_path / "poolscale.json"
        config_file.write_text("not valid json{{{")

        config = load_config(path=str(config_file))
        assert config.autoscaling.scan_interval_seconds == 10

    def test_unknown_keys_ignored(self, tmp_path):
        config_file = tmp_path / "poolscale.json"
        config_file.write_text(json.dumps({
            "autoscaling": {"max_cores": 8, "unknown_key": "ignored", "rancher": {"url": "x"}},
        }))

        config = load_config(path=str(config_file))
        assert config.autoscaling.max_cores == 8
        assert config.autoscaling.rancher.url == ""


class TestEnvOverride:
    def test_env_overrides_file(self, tmp_path):
        config_file = tmp_path / "poolscale.json"
        config_file.write_text(json.dumps({"autoscaling": {"max_cores": 8}}))

        with patch.dict(os.environ, {"POOLSCALE_AUTOSCALING_MAX_CORES": "16"}):
            config = load_config(path=str(config_file))

        assert config.autoscaling.max_cores == 16

    def test_env_rancher_settings(self):
        with patch.dict(os.environ, {
            "POOLSCALE_RANCHER_URL": "https://rancher.env/v3",
            "POOLSCALE_RANCHER_CLUSTER_ID": "c-env",
        }):
            config = load_config(path="/nonexistent/poolscale.json")

        assert config.autoscaling.rancher.url == "https://rancher.env/v3"
        assert config.autoscaling.rancher.cluster_id == "c-env"

    def test_env_specs_comma_separated(self):
        with patch.dict(os.environ, {"POOLSCALE_DISCOVERY_NODE_GROUP_SPECS": "1:5:np-a, 0:3:np-b"}):
            config = load_config(path="/nonexistent/poolscale.json")

        assert config.discovery.node_group_specs == ("1:5:np-a", "0:3:np-b")

    def test_env_log_level(self):
        with patch.dict(os.environ, {"POOLSCALE_LOG_LEVEL": "INFO"}):
            config = load_config(path="/nonexistent/poolscale.json")

        assert config.log_level == "INFO"

    def test_custom_prefix(self):
        with patch.dict(os.environ, {"MYAPP_AUTOSCALING_MAX_NODES_TOTAL": "7"}):
            config = load_config(path="/nonexistent/poolscale.json", env_prefix="MYAPP")

        assert config.autoscaling.max_nodes_total == 7


class TestResourceLimiterFromOptions:
    def test_limits(self):
        options = AutoscalingOptions(
            min_cores=2, max_cores=64, min_memory_gib=4, max_memory_gib=256, max_nodes_total=20
        )
        limiter = resource_limiter_from_options(options)
        assert limiter.get_min("cpu") == 2
        assert limiter.get_max("cpu") == 64
        assert limiter.get_min("memory") == 4 * GIB
        assert limiter.get_max("memory") == 256 * GIB
        assert limiter.get_max("nodes") == 20

    def test_unbounded_node_count(self):
        limiter = resource_limiter_from_options(AutoscalingOptions())
        assert not limiter.has_max_limit_set("nodes")


class TestConfigImmutability:
    def test_frozen(self):
        config = load_config(path="/nonexistent/poolscale.json")
        with pytest.raises(AttributeError):
            config.log_level = "DEBUG"

    def test_sub_config_frozen(self):
        config = load_config(path="/nonexistent/poolscale.json")
        with pytest.raises(AttributeError):
            config.autoscaling.rancher.url = "x"
