"""
CLI Module

Architectural Intent:
- Command-line interface for poolscale
- Builds the cloud provider once via the composition root and fails fast on
  ConstructionError
- Supports --verbose/--debug flags for log level control
"""

import argparse
import asyncio
import json
import logging
import sys
import traceback

from poolscale.application.dtos.node_group_dtos import NodeGroupSummary
from poolscale.composition_root import PoolscaleContainer, create_container
from poolscale.domain.errors import CleanupError, ConstructionError, RefreshError
from poolscale.infrastructure.config import load_config
from poolscale.infrastructure.logging import configure_from_settings

logger = logging.getLogger(__name__)


async def _describe(container: PoolscaleContainer) -> None:
    provider = container.cloud_provider
    await provider.refresh()
    summaries = [
        NodeGroupSummary.from_node_group(group).to_dict()
        for group in provider.node_groups()
    ]
    print(json.dumps(summaries, indent=2))


async def _watch(container: PoolscaleContainer, interval: int, once: bool) -> None:
    print(f"[*] Watching {container.cloud_provider.name()} node groups every {interval}s...")
    reports = await container.refresh_loop.execute(interval, run_once=once)
    last = reports[-1]
    print(
        f"[*] Generation {last.generation}: {last.node_group_count} node group(s)"
        + ("" if last.succeeded else f" (refresh failed: {last.error})")
    )


async def _cleanup(container: PoolscaleContainer) -> None:
    try:
        await container.cloud_provider.cleanup()
    except CleanupError as e:
        logger.warning("Cleanup failed: %s", e)


async def async_main():
    parser = argparse.ArgumentParser(
        description="poolscale: node pool backends for cluster autoscaling"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output with tracebacks"
    )
    parser.add_argument(
        "--config", "-c", default=None, help="Path to poolscale.json"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "describe", help="Refresh once and print the managed node groups"
    )

    watch_parser = subparsers.add_parser(
        "watch", help="Refresh the cloud provider once per tick"
    )
    watch_parser.add_argument(
        "--interval", "-i", type=int, default=None, help="Tick interval in seconds"
    )
    watch_parser.add_argument("--once", action="store_true", help="Run one tick and exit")

    dash_parser = subparsers.add_parser("dash", help="Launch the node group dashboard")
    dash_parser.add_argument(
        "--interval", "-i", type=int, default=None, help="Refresh interval in seconds"
    )

    args = parser.parse_args()
    config = load_config(args.config)

    configure_from_settings(
        config.log_level, config.log_format, verbose=args.verbose, debug=args.debug
    )

    verbose = args.verbose or args.debug

    if args.command is None:
        parser.print_help()
        return

    try:
        container = create_container(config)
    except ConstructionError as e:
        logger.critical("Failed to create cloud provider: %s", e)
        print(f"[-] Failed to create cloud provider: {e}")
        sys.exit(1)

    try:
        if args.command == "describe":
            await _describe(container)
        elif args.command == "watch":
            interval = args.interval or config.autoscaling.scan_interval_seconds
            await _watch(container, interval, args.once)
        elif args.command == "dash":
            from poolscale.presentation.tui.dashboard import Dashboard

            interval = args.interval or config.autoscaling.scan_interval_seconds
            await Dashboard(container.refresh_loop, interval).run_async()
    except KeyboardInterrupt:
        print("\n[*] Stopping.")
    except RefreshError as e:
        print(f"[-] Refresh failed: {e}")
        if verbose:
            traceback.print_exc()
        sys.exit(1)
    finally:
        await _cleanup(container)


def main():
    asyncio.run(async_main())


if __name__ == "__main__":
    main()
