"""
contracts/services.py

Services container + region-aware factory (DI-friendly).

Goals:
- Route 53 is a global API: one client per run.
- Classic ELB is regional: ``factory.for_region("us-west-2")`` returns a
  Services bag whose ``elb`` client is bound to that region (cached).
- Lookup code never builds boto3 clients itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import boto3
from botocore.config import Config


@dataclass(frozen=True)
class Services:
    """
    Regional SDK clients.

    `region` is informational and helps with debugging.
    """
    elb: Any
    region: str = ""


class ServicesFactory:
    """
    Creates and caches AWS SDK clients per region.

    Usage:
      session = boto3.Session()
      factory = ServicesFactory(session=session, sdk_config=build_sdk_config())

      svcs = factory.for_region("us-west-2")
      svcs2 = factory.for_region("us-west-2")  # cached, same object
    """

    def __init__(
        self,
        *,
        session: boto3.Session,
        sdk_config: Config | None = None,
        control_region: str | None = None,
    ) -> None:
        self._session = session
        self._sdk_config = sdk_config
        self._control_region = control_region
        self._by_region: dict[str, Services] = {}
        self._route53_global: Any | None = None

    def _client(self, service: str, *, region: str | None) -> Any:
        kwargs: dict[str, Any] = {}
        if region:
            kwargs["region_name"] = region
        if self._sdk_config is not None:
            kwargs["config"] = self._sdk_config
        return self._session.client(service, **kwargs)

    def global_route53(self) -> Any:
        """Route 53 is a global API; reuse one client."""
        if self._route53_global is None:
            self._route53_global = self._client("route53", region=self._control_region)
        return self._route53_global

    def for_region(self, region: str) -> Services:
        """
        Return cached Services for a given region, creating it if needed.
        """
        reg = str(region or "").strip()
        if not reg:
            raise ValueError("region must be a non-empty string")

        cached = self._by_region.get(reg)
        if cached is not None:
            return cached

        svcs = Services(
            elb=self._client("elb", region=reg),
            region=reg,
        )
        self._by_region[reg] = svcs
        return svcs
