"""lookup/aliases.py

Alias target classification.

Only record sets whose name is exactly the fqdn are considered. Among those,
alias targets ending in the ELB service suffix are grouped by the region
embedded in their DNS name. Aliases to anything else (CloudFront, S3 website
endpoints, other record sets) are skipped.

Expected ELB alias shapes::

    name-123456789.region.elb.amazonaws.com.
    ipv6.name-123456789.region.elb.amazonaws.com.
    dualstack.name-123456789.region.elb.amazonaws.com.

The region is the 5th label from the end in all three (the trailing dot
produces an empty last label).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from contracts.errors import AliasFormatError
from contracts.models import AliasGroup, LookupOptions, RecordSet

_LOGGER = logging.getLogger(__name__)

_REGION_LABEL_FROM_END = 5
# load balancer name + region + "elb", "amazonaws", "com" + trailing empty label
_MIN_LABELS = 6


def select_record_sets(record_sets: Iterable[RecordSet], fqdn: str) -> list[RecordSet]:
    """Keep record sets named exactly ``fqdn`` (case and trailing dot included)."""
    return [r for r in record_sets if r.name == fqdn]


def region_from_alias(dns_name: str) -> str:
    """Return the region label of an ELB alias target DNS name."""
    labels = dns_name.split(".")
    if len(labels) < _MIN_LABELS:
        raise AliasFormatError(dns_name)
    region = labels[-_REGION_LABEL_FROM_END]
    if not region:
        raise AliasFormatError(dns_name)
    return region


def group_aliases(
    record_sets: Iterable[RecordSet],
    options: LookupOptions,
) -> AliasGroup:
    """Group the ELB alias targets of already-selected record sets by region."""
    aliases: AliasGroup = {}
    for record in record_sets:
        if options.verbose:
            _LOGGER.info(
                "record set %s %s alias=%s%s",
                record.name,
                record.type,
                record.alias_target or "-",
                f" id={record.set_identifier}" if record.set_identifier else "",
            )
        target = record.alias_target
        if not target:
            continue
        if not target.endswith(options.elb_suffix):
            if options.verbose:
                _LOGGER.info("skipping %s", target)
            continue
        aliases.setdefault(region_from_alias(target), []).append(target)
    return aliases


def classify_aliases(
    record_sets: Iterable[RecordSet],
    fqdn: str,
    options: LookupOptions,
) -> AliasGroup:
    """Exact-name filter followed by ELB alias grouping."""
    return group_aliases(select_record_sets(record_sets, fqdn), options)
