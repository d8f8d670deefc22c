"""Tests for node group DTOs."""

from unittest.mock import patch

import pytest

from poolscale.application.dtos.node_group_dtos import NodeGroupSummary
from poolscale.infrastructure.adapters.rancher.rancher_node_group import RancherNodeGroup


class TestNodeGroupSummary:
    @pytest.mark.asyncio
    async def test_from_node_group(self, manager):
        await manager.refresh()
        summary = NodeGroupSummary.from_node_group(RancherNodeGroup(manager, "pool-a"))
        assert summary.to_dict() == {
            "id": "pool-a",
            "min_size": 1,
            "max_size": 5,
            "target_size": 2,
            "node_count": 2,
        }

    def test_frozen(self):
        summary = NodeGroupSummary("p", 0, 1, 1, 1)
        with pytest.raises(AttributeError):
            summary.id = "q"

    @pytest.mark.asyncio
    async def test_reads_one_generation(self, manager, rancher_client):
        await manager.refresh()
        old = manager.snapshot()
        await rancher_client.scale_node_pool("pool-a", 4)
        await manager.refresh()
        new = manager.snapshot()

        # Every read after the first sees the newer generation
        with patch.object(manager, "snapshot", side_effect=[old] + [new] * 10):
            summary = NodeGroupSummary.from_node_group(RancherNodeGroup(manager, "pool-a"))
        assert (summary.target_size, summary.node_count) == (2, 2)
