"""
contracts/models.py

Records exchanged between the AWS directory adapter and the lookup stages.

Everything here is built fresh per run and never persisted. The adapter in
:mod:`services.aws_directory` is the only place that knows the boto3 response
shapes; the lookup stages only see these types.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

ELB_DNS_SUFFIX = "elb.amazonaws.com."

# Zone name (dot-terminated) -> hosted zone id.
ZoneDirectory = Mapping[str, str]

# Region -> alias target DNS names, in first-seen order.
AliasGroup = dict[str, list[str]]


@dataclass(frozen=True)
class LookupOptions:
    """Run configuration handed to every lookup stage.

    ``verbose`` turns on step-by-step diagnostics, ``debug`` turns on botocore
    wire output (consumed by the CLI when configuring logging).
    """

    verbose: bool = False
    debug: bool = False
    elb_suffix: str = ELB_DNS_SUFFIX


@dataclass(frozen=True)
class HostedZone:
    name: str
    zone_id: str
    private: bool = False
    record_count: int = 0


@dataclass(frozen=True)
class ZoneMatch:
    """Result of the suffix search; all fields empty when no zone owns the fqdn."""

    zone_id: str = ""
    prefix: str = ""
    domain: str = ""

    def __bool__(self) -> bool:
        return bool(self.zone_id)


@dataclass(frozen=True)
class RecordSet:
    name: str
    type: str
    alias_target: str = ""
    set_identifier: str = ""


@dataclass(frozen=True)
class LoadBalancerRecord:
    name: str
    dns_name: str
    canonical_hosted_zone_name: str = ""
    canonical_hosted_zone_id: str = ""
    instances: tuple[str, ...] = ()
    region: str = ""


@dataclass(frozen=True)
class InstanceHealthRecord:
    instance_id: str
    state: str
    reason_code: str = ""
    description: str = ""


@dataclass(frozen=True)
class LoadBalancerMatch:
    """A load balancer whose DNS name is a suffix of a Route 53 alias target."""

    fqdn: str
    alias: str
    load_balancer: LoadBalancerRecord
    region: str = ""


class LookupOutcome(str, Enum):
    """How a lookup run ended. None of these are failures."""

    NO_ZONE = "no_zone"
    NO_RECORD_SETS = "no_record_sets"
    NO_ELB_ALIASES = "no_elb_aliases"
    COMPLETED = "completed"


@dataclass
class LookupReport:
    """Everything a run discovered, in the order it was discovered."""

    fqdn: str
    outcome: LookupOutcome = LookupOutcome.NO_ZONE
    zone: ZoneMatch = field(default_factory=ZoneMatch)
    record_sets: list[RecordSet] = field(default_factory=list)
    aliases: AliasGroup = field(default_factory=dict)
    matches: list[LoadBalancerMatch] = field(default_factory=list)
    # (region, load balancer name) -> instance health
    health: dict[tuple[str, str], list[InstanceHealthRecord]] = field(default_factory=dict)
