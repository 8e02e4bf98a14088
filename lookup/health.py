"""lookup/health.py

Instance health for a matched load balancer.
"""

from __future__ import annotations

import logging

from contracts.interfaces import DirectoryProtocol
from contracts.models import InstanceHealthRecord, LoadBalancerMatch, LookupOptions

_LOGGER = logging.getLogger(__name__)


def fetch_instance_health(
    directory: DirectoryProtocol,
    match: LoadBalancerMatch,
    options: LookupOptions,
) -> list[InstanceHealthRecord]:
    """Describe health for the instances registered with the matched load balancer.

    The request uses the load balancer's own instance list. Failures propagate
    as :class:`contracts.errors.CollaboratorError`.
    """
    lb = match.load_balancer
    if options.verbose:
        _LOGGER.info(
            "describing health of %d instance(s) behind %s in %s",
            len(lb.instances),
            lb.name,
            match.region,
        )
    return directory.describe_instance_health(match.region, lb.name, lb.instances)
