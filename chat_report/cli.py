"""CLI entry point for posting test run reports to chat."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from chat_report.errors import DeliveryError, MalformedResultError
from chat_report.results_loader import load_results
from chat_report.targets.loading import load_target_manifest


async def run(target_key: str, target_config_json: str, results_path: Path) -> int:
    """Send a report for the results file and return exit code."""
    log = logging.getLogger("chat_report")

    log.info("Loading target: %s", target_key)
    manifest = load_target_manifest(target_key)

    config = manifest.parse_config(target_config_json)

    log.info("Loading results from %s", results_path)
    results = await load_results(results_path)

    mode = config.publish
    try:
        async with manifest.target_factory(config) as target:
            delivered = await target.send(results)
    except (DeliveryError, MalformedResultError) as e:
        log.error("Failed to send report: %s", e)
        print(json.dumps({"mode": mode, "status": "error", "delivered": False}))
        return 1

    status = results[0].status if results else None
    print(json.dumps({"mode": mode, "status": status, "delivered": delivered}))
    return 0


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Post a test run report to a chat endpoint"
    )
    parser.add_argument(
        "--target",
        default="slack",
        help="Target key (slack)",
    )
    parser.add_argument(
        "--target-config",
        required=True,
        help="JSON configuration for the target (webhook url, report options)",
    )
    parser.add_argument(
        "--results",
        type=Path,
        required=True,
        help="Path to a YAML or JSON file with run results",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    exit_code = asyncio.run(
        run(
            target_key=args.target,
            target_config_json=args.target_config,
            results_path=args.results,
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
