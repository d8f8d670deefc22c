"""
Refresh Loop Use Case

Architectural Intent:
- Drives one cloud provider refresh per control-loop tick
- A failed refresh is logged and reported; the provider keeps serving the
  last good cache generation and the next tick retries
"""

import asyncio
import logging
from typing import List, Optional

from poolscale.application.dtos.node_group_dtos import RefreshTickReport
from poolscale.domain.errors import RefreshError
from poolscale.domain.ports.cloud_provider_port import CloudProviderPort

logger = logging.getLogger(__name__)


class RefreshLoop:
    def __init__(self, cloud_provider: CloudProviderPort):
        self.cloud_provider = cloud_provider

    async def tick(self) -> RefreshTickReport:
        error: Optional[str] = None
        try:
            await self.cloud_provider.refresh()
        except RefreshError as e:
            logger.error(
                "Refresh of %s failed: %s",
                self.cloud_provider.name(),
                e,
                extra={"provider": self.cloud_provider.name()},
            )
            error = str(e)

        groups = self.cloud_provider.node_groups()
        generation = self.cloud_provider.generation()
        if error is None:
            logger.info(
                "Tick complete: generation %d, %d node group(s)",
                generation,
                len(groups),
                extra={"provider": self.cloud_provider.name(), "generation": generation},
            )
        return RefreshTickReport(
            generation=generation,
            succeeded=error is None,
            node_group_count=len(groups),
            error=error,
        )

    async def execute(
        self,
        interval_seconds: int = 10,
        run_once: bool = False,
        max_ticks: Optional[int] = None,
    ) -> List[RefreshTickReport]:
        reports: List[RefreshTickReport] = []
        while True:
            reports.append(await self.tick())

            if run_once or (max_ticks is not None and len(reports) >= max_ticks):
                break

            await asyncio.sleep(interval_seconds)
        return reports
