"""lookup/engine.py

Route 53 -> ELB -> instance health lookup.

Pipeline (sequential, single-threaded):
  hosted zones -> zone directory -> longest-suffix zone
    -> record sets named fqdn -> ELB aliases grouped by region
      -> per region: load balancers matching an alias
        -> per match: instance health

Not-found outcomes end the run early or report zero findings; they are
recorded in :class:`contracts.models.LookupReport` and never raise. Fatal
conditions propagate as :class:`contracts.errors.R53ElbError` subclasses.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from contracts.interfaces import DirectoryProtocol
from contracts.models import LookupOptions, LookupOutcome, LookupReport
from lookup import report
from lookup.aliases import group_aliases, select_record_sets
from lookup.correlate import correlate
from lookup.health import fetch_instance_health
from lookup.zones import build_zone_directory, find

_LOGGER = logging.getLogger(__name__)


def run_lookup(
    fqdn: str,
    *,
    directory: DirectoryProtocol,
    options: LookupOptions,
    out: TextIO | None = None,
) -> LookupReport:
    """Resolve a dot-terminated ``fqdn`` to load balancers and instance health."""
    if out is None:
        out = sys.stdout
    result = LookupReport(fqdn=fqdn)

    zones = build_zone_directory(directory.list_hosted_zones(), options)
    result.zone = find(fqdn, zones, options)
    report.write_zone(out, fqdn, result.zone)
    if not result.zone:
        result.outcome = LookupOutcome.NO_ZONE
        return result

    result.record_sets = select_record_sets(
        directory.list_resource_record_sets(result.zone.zone_id), fqdn
    )
    if not result.record_sets:
        report.write_no_record_sets(out, result.zone)
        result.outcome = LookupOutcome.NO_RECORD_SETS
        return result

    result.aliases = group_aliases(result.record_sets, options)
    if not result.aliases:
        report.write_no_elb_aliases(out)
        result.outcome = LookupOutcome.NO_ELB_ALIASES
        return result

    for region, alias_targets in result.aliases.items():
        if options.verbose:
            _LOGGER.info("Checking Load Balancers in region %s", region)

        matched_aliases: set[str] = set()
        load_balancers = directory.list_load_balancers(region)
        for match in correlate(fqdn, region, alias_targets, load_balancers, options):
            report.write_match(out, match)
            health = fetch_instance_health(directory, match, options)
            report.write_instance_health(out, health, verbose=options.verbose)
            result.matches.append(match)
            result.health[(match.region, match.load_balancer.name)] = health
            matched_aliases.add(match.alias)

        for alias in alias_targets:
            if alias not in matched_aliases:
                report.write_unmatched_alias(out, region, alias)

    result.outcome = LookupOutcome.COMPLETED
    return result
