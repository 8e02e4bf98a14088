"""End-to-end tests for the lookup engine over an in-memory directory."""

from __future__ import annotations

import io

import pytest

from contracts.errors import AliasFormatError, CollaboratorError, DuplicateZoneError
from contracts.models import (
    HostedZone,
    InstanceHealthRecord,
    LoadBalancerRecord,
    LookupOptions,
    LookupOutcome,
    RecordSet,
)
from lookup.engine import run_lookup
from tests.aws_mocks import FakeDirectory

FQDN = "www.example.com."
WEST_DNS = "myapp-123456789.us-west-2.elb.amazonaws.com"
EAST_DNS = "api-987.us-east-1.elb.amazonaws.com"

ZONES = [
    HostedZone(name="com.", zone_id="Z1"),
    HostedZone(name="example.com.", zone_id="Z2"),
]


def _lb(name: str, dns: str, *instances: str) -> LoadBalancerRecord:
    return LoadBalancerRecord(
        name=name,
        dns_name=dns,
        canonical_hosted_zone_name=dns,
        canonical_hosted_zone_id="Z35SXDOTRQ7X7K",
        instances=tuple(instances),
    )


def _full_directory(**overrides) -> FakeDirectory:
    kwargs = dict(
        zones=ZONES,
        records_by_zone={
            "Z2": [
                RecordSet(name=FQDN, type="A", alias_target=f"dualstack.{WEST_DNS}."),
                RecordSet(name=FQDN, type="AAAA", alias_target=f"{EAST_DNS}."),
                RecordSet(name="api.example.com.", type="A", alias_target=f"{EAST_DNS}."),
            ]
        },
        lbs_by_region={
            "us-west-2": [_lb("other", "other-1.us-west-2.elb.amazonaws.com"), _lb("myapp", WEST_DNS, "i-1", "i-2")],
            "us-east-1": [],
        },
        health_by_lb={
            "myapp": [
                InstanceHealthRecord(instance_id="i-1", state="InService"),
                InstanceHealthRecord(instance_id="i-2", state="OutOfService"),
            ]
        },
    )
    kwargs.update(overrides)
    return FakeDirectory(**kwargs)


def test_full_lookup_reports_matches_and_health() -> None:
    directory = _full_directory()
    out = io.StringIO()

    result = run_lookup(FQDN, directory=directory, options=LookupOptions(), out=out)

    assert result.outcome is LookupOutcome.COMPLETED
    assert result.zone.zone_id == "Z2"
    assert result.aliases == {"us-west-2": [f"dualstack.{WEST_DNS}."], "us-east-1": [f"{EAST_DNS}."]}
    assert [m.load_balancer.name for m in result.matches] == ["myapp"]
    assert [r.state for r in result.health[("us-west-2", "myapp")]] == ["InService", "OutOfService"]

    text = out.getvalue()
    assert "found zone Z2 for example.com.\n" in text
    assert "FQDN:      www.example.com.\n" in text
    assert f"R53 Alias: dualstack.{WEST_DNS}.\n" in text
    assert "ELB Name:  myapp\n" in text
    assert f"DNS:       {WEST_DNS}\n" in text
    assert "ZoneID:    Z35SXDOTRQ7X7K\n" in text
    assert "Instance:  i-1\tInService\n" in text
    assert "Instance:  i-2\tOutOfService\n" in text
    assert f"no load balancer in us-east-1 matches {EAST_DNS}.\n" in text


def test_health_lookup_runs_before_next_load_balancer_is_pulled() -> None:
    directory = _full_directory(
        lbs_by_region={"us-west-2": [_lb("myapp", WEST_DNS, "i-1"), _lb("later", "later-1.us-west-2.elb.amazonaws.com")]}
    )
    run_lookup(FQDN, directory=directory, options=LookupOptions(), out=io.StringIO())

    west_calls = [c for c in directory.calls if len(c) > 1 and c[1] == "us-west-2"]
    assert west_calls == [
        ("list_load_balancers", "us-west-2"),
        ("yield_load_balancer", "us-west-2", "myapp"),
        ("describe_instance_health", "us-west-2", "myapp", ("i-1",)),
        ("yield_load_balancer", "us-west-2", "later"),
    ]


def test_no_owning_zone_stops_after_zone_listing() -> None:
    directory = FakeDirectory(zones=[HostedZone(name="example.org.", zone_id="Z9")])
    out = io.StringIO()

    result = run_lookup(FQDN, directory=directory, options=LookupOptions(), out=out)

    assert result.outcome is LookupOutcome.NO_ZONE
    assert directory.call_names() == ["list_hosted_zones"]
    assert out.getvalue() == f"could not find hosted zone for {FQDN}\n"


def test_no_record_sets_stops_before_classification() -> None:
    directory = _full_directory(records_by_zone={"Z2": [RecordSet(name="api.example.com.", type="A")]})
    out = io.StringIO()

    result = run_lookup(FQDN, directory=directory, options=LookupOptions(), out=out)

    assert result.outcome is LookupOutcome.NO_RECORD_SETS
    assert directory.call_names() == ["list_hosted_zones", "list_resource_record_sets"]
    assert "No recordset found for www in zone Z2 for domain example.com.\n" in out.getvalue()


def test_no_elb_aliases_makes_no_load_balancer_calls() -> None:
    directory = _full_directory(
        records_by_zone={"Z2": [RecordSet(name=FQDN, type="A", alias_target="d111111abcdef8.cloudfront.net.")]}
    )
    out = io.StringIO()

    result = run_lookup(FQDN, directory=directory, options=LookupOptions(), out=out)

    assert result.outcome is LookupOutcome.NO_ELB_ALIASES
    assert "list_load_balancers" not in directory.call_names()
    assert "describe_instance_health" not in directory.call_names()
    assert "did not find any matching elb resource record sets\n" in out.getvalue()


def test_duplicate_zone_is_fatal_before_any_output() -> None:
    directory = FakeDirectory(zones=ZONES + [HostedZone(name="example.com.", zone_id="Z3")])
    out = io.StringIO()

    with pytest.raises(DuplicateZoneError):
        run_lookup(FQDN, directory=directory, options=LookupOptions(), out=out)

    assert out.getvalue() == ""
    assert directory.call_names() == ["list_hosted_zones"]


def test_health_failure_aborts_run() -> None:
    directory = _full_directory(fail_health_for="myapp")
    with pytest.raises(CollaboratorError):
        run_lookup(FQDN, directory=directory, options=LookupOptions(), out=io.StringIO())
    assert ("list_load_balancers", "us-east-1") not in directory.calls


def test_unexpected_elb_alias_shape_is_fatal() -> None:
    directory = _full_directory(
        records_by_zone={"Z2": [RecordSet(name=FQDN, type="A", alias_target="x.elb.amazonaws.com.")]}
    )
    with pytest.raises(AliasFormatError):
        run_lookup(FQDN, directory=directory, options=LookupOptions(), out=io.StringIO())


def test_verbose_reports_health_reason() -> None:
    directory = _full_directory(
        health_by_lb={
            "myapp": [
                InstanceHealthRecord(
                    instance_id="i-2",
                    state="OutOfService",
                    reason_code="Instance",
                    description="Instance has failed at least the UnhealthyThreshold number of health checks consecutively.",
                )
            ]
        }
    )
    out = io.StringIO()
    run_lookup(FQDN, directory=directory, options=LookupOptions(verbose=True), out=out)
    assert "           Instance: Instance has failed" in out.getvalue()
