"""Contracts shared by the lookup stages and the AWS adapter.

The contracts package defines:
- the records exchanged between stages (models)
- the typed fatal errors (errors)
- Protocol definitions for dependency injection (interfaces)
- the region-aware boto3 client factory (services)
"""

from contracts.errors import (
    AliasFormatError,
    CollaboratorError,
    ConfigurationError,
    DuplicateZoneError,
    R53ElbError,
)
from contracts.interfaces import DirectoryProtocol
from contracts.models import (
    ELB_DNS_SUFFIX,
    AliasGroup,
    HostedZone,
    InstanceHealthRecord,
    LoadBalancerMatch,
    LoadBalancerRecord,
    LookupOptions,
    LookupOutcome,
    LookupReport,
    RecordSet,
    ZoneDirectory,
    ZoneMatch,
)

__all__ = [
    "ELB_DNS_SUFFIX",
    "AliasFormatError",
    "AliasGroup",
    "CollaboratorError",
    "ConfigurationError",
    "DirectoryProtocol",
    "DuplicateZoneError",
    "HostedZone",
    "InstanceHealthRecord",
    "LoadBalancerMatch",
    "LoadBalancerRecord",
    "LookupOptions",
    "LookupOutcome",
    "LookupReport",
    "R53ElbError",
    "RecordSet",
    "ZoneDirectory",
    "ZoneMatch",
]
