"""lookup/correlate.py

Match load balancers of one region against the Route 53 alias targets seen
for that region.

The ELB API reports DNS names without a trailing dot, while alias targets are
dot-terminated and may carry a ``dualstack.`` or ``ipv6.`` prefix. A load
balancer matches an alias when its dot-terminated DNS name is a suffix of the
alias. Every matching (load balancer, alias) pair is reported, including
several load balancers matching the same alias.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence

from contracts.models import LoadBalancerMatch, LoadBalancerRecord, LookupOptions

_LOGGER = logging.getLogger(__name__)


def alias_matches(alias: str, lb_dns_name: str) -> bool:
    return alias.endswith(lb_dns_name + ".")


def correlate(
    fqdn: str,
    region: str,
    alias_targets: Sequence[str],
    load_balancers: Iterable[LoadBalancerRecord],
    options: LookupOptions,
) -> Iterator[LoadBalancerMatch]:
    """Yield a match for each load balancer/alias pair satisfying the suffix rule.

    ``load_balancers`` is consumed lazily; callers may issue further API calls
    for a match before the next load balancer is pulled.
    """
    for lb in load_balancers:
        for alias in alias_targets:
            if options.verbose:
                _LOGGER.info("checking %s against %s.", alias, lb.dns_name)
            if alias_matches(alias, lb.dns_name):
                yield LoadBalancerMatch(fqdn=fqdn, alias=alias, load_balancer=lb, region=region)
