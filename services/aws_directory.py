"""
services/aws_directory.py

boto3-backed implementation of :class:`contracts.interfaces.DirectoryProtocol`.

Route 53 calls go through the factory's global client. ELB calls are
region-scoped: each call asks the factory for the region's Services bag, which
binds (and caches) an ``elb`` client for that region.

Minimal IAM permissions:
- route53:ListHostedZones
- route53:ListResourceRecordSets
- elasticloadbalancing:DescribeLoadBalancers
- elasticloadbalancing:DescribeInstanceHealth
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from contracts.models import HostedZone, InstanceHealthRecord, LoadBalancerRecord, RecordSet
from contracts.services import ServicesFactory
from services._common import aws_call, guarded_iter, paginate_items, strip_zone_id, text

_LOGGER = logging.getLogger(__name__)


def hosted_zone_from_api(item: Mapping[str, Any]) -> HostedZone:
    config = item.get("Config") or {}
    return HostedZone(
        name=text(item.get("Name")),
        zone_id=strip_zone_id(item.get("Id")),
        private=bool(config.get("PrivateZone", False)),
        record_count=int(item.get("ResourceRecordSetCount") or 0),
    )


def record_set_from_api(item: Mapping[str, Any]) -> RecordSet:
    alias = item.get("AliasTarget") or {}
    return RecordSet(
        name=text(item.get("Name")),
        type=text(item.get("Type")),
        alias_target=text(alias.get("DNSName")),
        set_identifier=text(item.get("SetIdentifier")),
    )


def load_balancer_from_api(item: Mapping[str, Any], *, region: str) -> LoadBalancerRecord:
    instances = tuple(
        text(i.get("InstanceId")) for i in item.get("Instances") or [] if i.get("InstanceId")
    )
    return LoadBalancerRecord(
        name=text(item.get("LoadBalancerName")),
        dns_name=text(item.get("DNSName")),
        canonical_hosted_zone_name=text(item.get("CanonicalHostedZoneName")),
        canonical_hosted_zone_id=text(item.get("CanonicalHostedZoneNameID")),
        instances=instances,
        region=region,
    )


def instance_health_from_api(item: Mapping[str, Any]) -> InstanceHealthRecord:
    return InstanceHealthRecord(
        instance_id=text(item.get("InstanceId")),
        state=text(item.get("State")),
        reason_code="" if item.get("ReasonCode") in (None, "N/A") else text(item.get("ReasonCode")),
        description="" if item.get("Description") in (None, "N/A") else text(item.get("Description")),
    )


class AwsDirectory:
    """Read-only view over Route 53 and classic ELB for one run."""

    def __init__(self, *, factory: ServicesFactory) -> None:
        self._factory = factory

    def list_hosted_zones(self) -> Iterator[HostedZone]:
        items = guarded_iter(
            "ListHostedZones",
            lambda: paginate_items(self._factory.global_route53(), "list_hosted_zones", "HostedZones"),
        )
        for item in items:
            yield hosted_zone_from_api(item)

    def list_resource_record_sets(self, zone_id: str) -> Iterator[RecordSet]:
        items = guarded_iter(
            "ListResourceRecordSets",
            lambda: paginate_items(
                self._factory.global_route53(),
                "list_resource_record_sets",
                "ResourceRecordSets",
                params={"HostedZoneId": zone_id},
                continuation_keys={
                    "NextRecordName": "StartRecordName",
                    "NextRecordType": "StartRecordType",
                    "NextRecordIdentifier": "StartRecordIdentifier",
                },
            ),
        )
        for item in items:
            yield record_set_from_api(item)

    def list_load_balancers(self, region: str) -> Iterator[LoadBalancerRecord]:
        _LOGGER.debug("Using elb client for region %s", region)
        items = guarded_iter(
            "DescribeLoadBalancers",
            lambda: paginate_items(
                self._factory.for_region(region).elb,
                "describe_load_balancers",
                "LoadBalancerDescriptions",
            ),
        )
        for item in items:
            yield load_balancer_from_api(item, region=region)

    def describe_instance_health(
        self,
        region: str,
        load_balancer_name: str,
        instance_ids: Sequence[str],
    ) -> list[InstanceHealthRecord]:
        with aws_call("DescribeInstanceHealth"):
            elb = self._factory.for_region(region).elb
            resp = elb.describe_instance_health(
                LoadBalancerName=load_balancer_name,
                Instances=[{"InstanceId": iid} for iid in instance_ids],
            )
        return [instance_health_from_api(i) for i in resp.get("InstanceStates") or []]
