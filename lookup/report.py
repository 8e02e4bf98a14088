"""lookup/report.py

Plain-text rendering of lookup progress and results.

Output is meant for an operator's terminal; there is no machine-readable
format.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TextIO

from contracts.models import InstanceHealthRecord, LoadBalancerMatch, ZoneMatch

BANNER = "Route53 to ELB Instances Lookup Tool"
SEPARATOR = "-" * 33


def _line(out: TextIO, text: str = "") -> None:
    out.write(text + "\n")


def write_banner(out: TextIO) -> None:
    _line(out, BANNER)


def write_using_fqdn(out: TextIO, fqdn: str) -> None:
    _line(out, f"using fqdn {fqdn}")


def write_zone(out: TextIO, fqdn: str, zone: ZoneMatch) -> None:
    if zone:
        _line(out, f"found zone {zone.zone_id} for {zone.domain}")
    else:
        _line(out, f"could not find hosted zone for {fqdn}")


def write_no_record_sets(out: TextIO, zone: ZoneMatch) -> None:
    _line(out, f"No recordset found for {zone.prefix} in zone {zone.zone_id} for domain {zone.domain}")


def write_no_elb_aliases(out: TextIO) -> None:
    _line(out, "did not find any matching elb resource record sets")


def write_unmatched_alias(out: TextIO, region: str, alias: str) -> None:
    _line(out, f"no load balancer in {region} matches {alias}")


def write_match(out: TextIO, match: LoadBalancerMatch) -> None:
    lb = match.load_balancer
    _line(out, SEPARATOR)
    _line(out, f"FQDN:      {match.fqdn}")
    _line(out, f"R53 Alias: {match.alias}")
    _line(out, f"ELB Name:  {lb.name}")
    _line(out, f"DNS:       {lb.dns_name}")
    _line(out, f"ZoneName:  {lb.canonical_hosted_zone_name}")
    _line(out, f"ZoneID:    {lb.canonical_hosted_zone_id}")


def write_instance_health(
    out: TextIO,
    records: Iterable[InstanceHealthRecord],
    *,
    verbose: bool = False,
) -> None:
    for rec in records:
        _line(out, f"Instance:  {rec.instance_id}\t{rec.state}")
        if verbose and (rec.reason_code or rec.description):
            _line(out, f"           {rec.reason_code or '-'}: {rec.description or '-'}")
