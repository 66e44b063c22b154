"""
Command-line front end for the TLS assessor.

Usage:
    tls-assessor example.com
    tls-assessor --host example.com [--from-cache] [--json]
    tls-assessor --info
"""

import argparse
import asyncio
import sys

from .config import Settings, get_settings
from .exceptions import AssessmentError, MissingInputError
from .logging_config import setup_logging
from .models import AssessmentRequest, Host, Info
from .polling import AssessmentEngine
from .ssllabs_client import SSLLabsClient

USAGE = """Error: You must provide a host.
Usage:
  - Via argument: tls-assessor google.com
  - Via flag:     tls-assessor --host=google.com
  - Via flag (with space instead of equals): tls-assessor --host google.com"""


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="tls-assessor",
        description="Run an SSL Labs assessment for a host and print the report",
    )
    parser.add_argument("hostname", nargs="?", help="The domain name to analyze")
    parser.add_argument("--host", help="The domain name to analyze")
    parser.add_argument(
        "--from-cache",
        action="store_true",
        help="Accept a cached report instead of starting a new assessment",
    )
    parser.add_argument(
        "--json", action="store_true", help="Print the full report as JSON"
    )
    parser.add_argument(
        "--info", action="store_true", help="Print service information and exit"
    )
    return parser


def render_summary(host: Host) -> str:
    """Flatten a Host report into the plain-text summary."""
    lines = [
        f"Host: {host.host}",
        f"Port: {host.port}",
        f"Protocol: {host.protocol}",
        f"IsPublic: {str(host.is_public).lower()}",
        f"Status: {host.status}",
        f"StatusMessage: {host.status_message}",
    ]
    for endpoint in host.endpoints:
        lines.append(f"  Endpoint IPAddress: {endpoint.ip_address}")
        lines.append(f"  Endpoint StatusMessage: {endpoint.status_message}")
        lines.append(f"  Endpoint Grade: {endpoint.grade}")
    return "\n".join(lines)


def render_info(info: Info) -> str:
    """Flatten service information into plain text."""
    lines = [
        f"EngineVersion: {info.engine_version}",
        f"CriteriaVersion: {info.criteria_version}",
        f"MaxAssessments: {info.max_assessments}",
        f"CurrentAssessments: {info.current_assessments}",
        f"NewAssessmentCoolOff: {info.new_assessment_cool_off}",
    ]
    lines.extend(f"Message: {message}" for message in info.messages)
    return "\n".join(lines)


async def run_assessment(request: AssessmentRequest, settings: Settings) -> Host:
    """Run one assessment session with a client built from settings."""
    async with SSLLabsClient.from_settings(settings) as client:
        engine = AssessmentEngine.from_settings(client, settings)
        return await engine.run(request)


async def fetch_info(settings: Settings) -> Info:
    """Fetch service information with a client built from settings."""
    async with SSLLabsClient.from_settings(settings) as client:
        return await client.info()


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
    except AssessmentError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    setup_logging(settings)

    if args.info:
        try:
            info = asyncio.run(fetch_info(settings))
        except AssessmentError as e:
            print(f"Error fetching service info: {e}", file=sys.stderr)
            return 1
        if args.json:
            print(info.model_dump_json(by_alias=True, indent=2))
        else:
            print(render_info(info))
        return 0

    try:
        request = AssessmentRequest.for_host(
            args.host or args.hostname, from_cache=args.from_cache
        )
    except MissingInputError:
        print(USAGE)
        return 1

    try:
        host = asyncio.run(run_assessment(request, settings))
    except AssessmentError as e:
        print(f"Error analyzing the host: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(host.model_dump_json(by_alias=True, indent=2))
    else:
        print(render_summary(host))
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
