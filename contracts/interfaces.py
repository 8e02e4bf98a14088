"""
Protocol definitions for dependency injection.

The lookup stages only depend on :class:`DirectoryProtocol`. Production code
passes :class:`services.aws_directory.AwsDirectory`; tests pass the in-memory
``FakeDirectory`` from ``tests/aws_mocks.py``.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Protocol, runtime_checkable

from contracts.models import HostedZone, InstanceHealthRecord, LoadBalancerRecord, RecordSet


@runtime_checkable
class DirectoryProtocol(Protocol):
    """The four read-only capabilities the lookup consumes.

    Listings are lazy, finite and not restartable.
    """

    def list_hosted_zones(self) -> Iterator[HostedZone]:
        """Hosted zones visible to the caller."""
        ...

    def list_resource_record_sets(self, zone_id: str) -> Iterator[RecordSet]:
        """All record sets of one hosted zone."""
        ...

    def list_load_balancers(self, region: str) -> Iterator[LoadBalancerRecord]:
        """Classic load balancers of one region."""
        ...

    def describe_instance_health(
        self,
        region: str,
        load_balancer_name: str,
        instance_ids: Sequence[str],
    ) -> list[InstanceHealthRecord]:
        """Health of the given instances behind one load balancer."""
        ...
