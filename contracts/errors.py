"""Typed failures raised by the lookup stages and the AWS adapter.

Every one of these is fatal: the CLI logs the message and exits non-zero.
Not-found outcomes are reported through :class:`contracts.models.LookupOutcome`
instead and never raise.
"""

from __future__ import annotations


class R53ElbError(Exception):
    """Base class for fatal lookup errors."""


class DuplicateZoneError(R53ElbError):
    """Two hosted zones share the same domain name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"duplicate domain name entries for {name}")
        self.name = name


class AliasFormatError(R53ElbError):
    """An ELB alias target does not have the ``<name>.<region>.elb.amazonaws.com.`` shape."""

    def __init__(self, dns_name: str) -> None:
        super().__init__(f"cannot extract region from alias target {dns_name!r}")
        self.dns_name = dns_name


class CollaboratorError(R53ElbError):
    """An AWS API call failed."""

    def __init__(self, operation: str, *, code: str = "", message: str = "") -> None:
        detail = f"{code}: {message}" if code else message
        super().__init__(f"{operation} failed: {detail}" if detail else f"{operation} failed")
        self.operation = operation
        self.code = code


class ConfigurationError(R53ElbError):
    """Settings or AWS credentials/profile could not be loaded."""

    def __init__(self, message: str) -> None:
        super().__init__(f"configuration error: {message}")
