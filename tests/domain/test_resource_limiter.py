"""Tests for ResourceLimiter value object."""

import pytest
from poolscale.domain.value_objects.resource_limiter import ResourceLimiter


class TestResourceLimiter:
    def test_limits(self):
        limiter = ResourceLimiter(min_limits={"cpu": 2}, max_limits={"cpu": 64, "nodes": 10})
        assert limiter.get_min("cpu") == 2
        assert limiter.get_max("cpu") == 64
        assert limiter.get_max("nodes") == 10

    def test_unset_limits_are_zero(self):
        limiter = ResourceLimiter()
        assert limiter.get_min("memory") == 0
        assert limiter.get_max("memory") == 0
        assert not limiter.has_min_limit_set("memory")
        assert not limiter.has_max_limit_set("memory")

    def test_resources_sorted_union(self):
        limiter = ResourceLimiter(min_limits={"memory": 0}, max_limits={"cpu": 4})
        assert limiter.resources() == ["cpu", "memory"]

    def test_min_above_max_rejected(self):
        with pytest.raises(ValueError, match="above max limit"):
            ResourceLimiter(min_limits={"cpu": 8}, max_limits={"cpu": 4})

    def test_limits_are_read_only(self):
        source = {"cpu": 4}
        limiter = ResourceLimiter(max_limits=source)
        source["cpu"] = 100
        assert limiter.get_max("cpu") == 4
        with pytest.raises(TypeError):
            limiter.max_limits["cpu"] = 1

    def test_identity_equality(self):
        a = ResourceLimiter(max_limits={"cpu": 4})
        b = ResourceLimiter(max_limits={"cpu": 4})
        assert a == a
        assert a != b

    def test_str(self):
        limiter = ResourceLimiter(min_limits={"cpu": 1}, max_limits={"cpu": 4})
        assert str(limiter) == "{cpu:1-4}"
