"""
r53elb CLI (flat-layout friendly).

Find the ELB(s) and instances behind a DNS name hosted in Route 53.

Usage
-----
r53elb --fqdn www.example.com
r53elb --fqdn www.example.com. --verbose
r53elb --fqdn www.example.com --debug        # botocore wire/signing output
r53elb --print-version

Credentials and the default region are resolved by boto3 (environment,
shared config, instance profile). Exit status: 0 on success (including
"nothing found"), 2 when --fqdn is missing, 1 on any AWS or data error.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

import boto3
from botocore.exceptions import BotoCoreError

from contracts.errors import ConfigurationError, R53ElbError
from contracts.interfaces import DirectoryProtocol
from contracts.models import LookupOptions
from contracts.services import ServicesFactory
from infra.aws_config import build_sdk_config
from infra.config import Settings, ValidationError, get_settings
from infra.logging_config import clear_lookup_context, set_lookup_context, setup_logging
from lookup import report
from lookup.engine import run_lookup
from lookup.zones import normalize_fqdn
from services.aws_directory import AwsDirectory
from version import TOOL_NAME, TOOL_VERSION

_LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

VERBOSE_LOGGERS = ("lookup",)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog=TOOL_NAME,
        description="Route53 to ELB instances lookup tool",
    )
    p.add_argument("--fqdn", "-fqdn", default="", help="the FQDN to look up (e.g. foo.example.com.)")
    p.add_argument("--verbose", "-verbose", action="store_true", help="show verbose output")
    p.add_argument("--debug", "-debug", action="store_true", help="show aws sdk debug output")
    p.add_argument(
        "--region",
        default=None,
        help="Region for the Route 53 session (or AWS_DEFAULT_REGION env var). Default: us-east-1",
    )
    p.add_argument("--print-version", action="store_true", help="Print tool version and exit.")
    return p


def make_directory(settings: Settings, *, region: Optional[str] = None) -> DirectoryProtocol:
    """Build the boto3-backed directory for this run."""
    try:
        session = boto3.Session()
    except BotoCoreError as exc:
        raise ConfigurationError(str(exc)) from exc
    factory = ServicesFactory(
        session=session,
        sdk_config=build_sdk_config(settings),
        control_region=region or settings.aws.default_region,
    )
    return AwsDirectory(factory=factory)


def _load_settings(options: LookupOptions) -> Settings:
    """Configure logging and return settings; invalid env values are fatal."""
    try:
        setup_logging(
            sdk_debug=options.debug,
            verbose_loggers=VERBOSE_LOGGERS if options.verbose else (),
        )
        return get_settings()
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.print_version:
        print(f"{TOOL_NAME} {TOOL_VERSION}")
        return EXIT_OK

    report.write_banner(sys.stdout)

    fqdn = str(args.fqdn or "").strip()
    if not fqdn:
        parser.print_help(sys.stderr)
        return EXIT_USAGE

    fqdn = normalize_fqdn(fqdn)
    options = LookupOptions(verbose=bool(args.verbose), debug=bool(args.debug))

    set_lookup_context(fqdn=fqdn)
    try:
        settings = _load_settings(options)
        report.write_using_fqdn(sys.stdout, fqdn)
        directory = make_directory(settings, region=args.region)
        run_lookup(fqdn, directory=directory, options=options, out=sys.stdout)
    except R53ElbError as exc:
        _LOGGER.error("%s", exc)
        return EXIT_FAILURE
    finally:
        clear_lookup_context()
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
