"""CLI entrypoint for the ECS scraper."""

from __future__ import annotations

import argparse
import logging
import sys

from rich.logging import RichHandler

from ecsdog import __version__
from ecsdog.config import get_settings
from ecsdog.scraper import run


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not a number") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return number


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Scrape ECS service metrics and events into DogStatsD.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--cluster",
        "-c",
        default=None,
        help="Cluster to scrape metrics from (default: ECSDOG_CLUSTER env)",
    )
    parser.add_argument(
        "--statsd",
        default=None,
        help="Statsd address, host:port or unix:///path (default: ECSDOG_STATSD_ADDRESS env or 127.0.0.1:8125)",
    )
    parser.add_argument(
        "--interval",
        type=_positive_float,
        default=None,
        help="Seconds between scrapes (default: ECSDOG_INTERVAL_SECONDS env or 20)",
    )
    parser.add_argument(
        "--region",
        default=None,
        help="AWS region (default: ECSDOG_AWS_REGION env or the boto3 default chain)",
    )
    parser.add_argument(
        "--endpoint-url",
        default=None,
        help="Custom ECS endpoint URL, e.g. for LocalStack",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for ecsdog CLI."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )
    if args.verbose:
        # botocore logs every request and credential lookup at debug level
        logging.getLogger("botocore").setLevel(logging.INFO)

    try:
        settings = get_settings()
        if args.region:
            settings.aws_region = args.region
        if args.endpoint_url:
            settings.aws_endpoint_url = args.endpoint_url
        if args.interval is not None:
            settings.interval_seconds = args.interval

        cluster = args.cluster or settings.cluster
        if not cluster:
            print("Error: a cluster name is required (--cluster or ECSDOG_CLUSTER)", file=sys.stderr)
            return 2

        run(
            cluster=cluster,
            statsd_address=args.statsd or settings.statsd_address,
            settings=settings,
        )
        return 0
    except Exception as e:
        logging.exception("Scraper failed")
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
