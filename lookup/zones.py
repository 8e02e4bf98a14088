"""lookup/zones.py

Hosted zone directory + longest-suffix zone search.

The directory maps dot-terminated zone names to hosted zone ids. Names must be
unique: the suffix search relies on a single owner per name, so a duplicate
aborts the run instead of silently replacing the earlier zone.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from contracts.errors import DuplicateZoneError
from contracts.models import HostedZone, LookupOptions, ZoneDirectory, ZoneMatch

_LOGGER = logging.getLogger(__name__)


def normalize_fqdn(fqdn: str) -> str:
    """Return ``fqdn`` with a trailing dot."""
    if fqdn.endswith("."):
        return fqdn
    return fqdn + "."


def build_zone_directory(zones: Iterable[HostedZone], options: LookupOptions) -> dict[str, str]:
    """Collect zones into a name -> id mapping, rejecting duplicate names."""
    directory: dict[str, str] = {}
    for zone in zones:
        if zone.name in directory:
            raise DuplicateZoneError(zone.name)
        if options.verbose:
            _LOGGER.info(
                "%s %s records=%d%s",
                zone.name,
                zone.zone_id,
                zone.record_count,
                " (private)" if zone.private else "",
            )
        directory[zone.name] = zone.zone_id
    return directory


def find(fqdn: str, zones: ZoneDirectory, options: LookupOptions | None = None) -> ZoneMatch:
    """Find the hosted zone owning ``fqdn`` (longest matching suffix first).

    ``fqdn`` must already be dot-terminated. ``foo.example.com.`` is split into
    ``["foo", "example", "com", ""]`` and the candidates are tried in order
    ``foo.example.com.``, ``example.com.``, ``com.``, ``""``: skipping fewer
    leading labels means a longer suffix, so the most deeply delegated zone
    wins.

    Returns an empty :class:`ZoneMatch` when no suffix is a registered zone.
    """
    verbose = bool(options and options.verbose)
    labels = fqdn.split(".")

    for i in range(len(labels)):
        candidate = ".".join(labels[i:])
        if verbose:
            _LOGGER.info("searching for %s", candidate)
        zone_id = zones.get(candidate)
        if zone_id is not None:
            return ZoneMatch(zone_id=zone_id, prefix=".".join(labels[:i]), domain=candidate)

    return ZoneMatch()
