"""AWS SDK configuration for the lookup tool.

The CLI and the service factory import from this module to keep AWS/client
tuning in one place. Retry and timeout knobs come from :mod:`infra.config`.
"""

from __future__ import annotations

import logging

import boto3
from botocore.config import Config

from infra.config import Settings, get_settings
from version import TOOL_NAME, TOOL_VERSION


def build_sdk_config(settings: Settings | None = None) -> Config:
    """Return the botocore client config derived from settings."""
    aws_cfg = (settings or get_settings()).aws
    return Config(
        retries={"max_attempts": int(aws_cfg.max_retries), "mode": "adaptive"},
        user_agent_extra=f"{TOOL_NAME}/{TOOL_VERSION}",
        connect_timeout=int(aws_cfg.connect_timeout),
        read_timeout=int(aws_cfg.timeout),
    )


def enable_sdk_debug_logging() -> None:
    """Stream botocore wire and signing diagnostics to stderr.

    The SDK loggers stop propagating so the dump stays off the root handler,
    which writes the lookup report stream.
    """
    for name in ("botocore", "boto3"):
        boto3.set_stream_logger(name, logging.DEBUG)
        logging.getLogger(name).propagate = False
