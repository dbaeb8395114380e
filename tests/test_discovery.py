"""Tests for availability zone discovery."""

import pytest
from botocore.exceptions import ClientError

from alb_metrics.services.cloudwatch import QueryError
from alb_metrics.services.discovery import discover_zones


def entry(*dims):
    return {
        "Namespace": "AWS/ELB",
        "MetricName": "HealthyHostCount",
        "Dimensions": [{"Name": n, "Value": v} for n, v in dims],
    }


def test_only_zone_only_entries_contribute(fake_client, service):
    fake_client.pages = [
        {
            "Metrics": [
                entry(("AvailabilityZone", "ap-northeast-1a")),
                entry(("LoadBalancerName", "my-elb")),
                entry(("AvailabilityZone", "ap-northeast-1c"), ("LoadBalancerName", "my-elb")),
                entry(("AvailabilityZone", "ap-northeast-1c")),
            ]
        }
    ]
    assert discover_zones(service) == ["ap-northeast-1a", "ap-northeast-1c"]


def test_catalog_query_is_scoped_to_zone_dimension(fake_client, service):
    discover_zones(service)
    fake_client.paginator.paginate.assert_called_once_with(
        Namespace="AWS/ELB",
        MetricName="HealthyHostCount",
        Dimensions=[{"Name": "AvailabilityZone"}],
    )


def test_zero_dimension_entries_are_skipped(fake_client, service):
    fake_client.pages = [
        {"Metrics": [entry(), {"MetricName": "HealthyHostCount"}, entry(("AvailabilityZone", "a"))]}
    ]
    assert discover_zones(service) == ["a"]


def test_duplicate_zones_are_dropped_in_order(fake_client, service):
    fake_client.pages = [
        {"Metrics": [entry(("AvailabilityZone", "b")), entry(("AvailabilityZone", "a"))]},
        {"Metrics": [entry(("AvailabilityZone", "b")), entry(("AvailabilityZone", "c"))]},
    ]
    assert discover_zones(service) == ["b", "a", "c"]


def test_empty_catalog_yields_no_zones(service):
    assert discover_zones(service) == []


def test_catalog_failure_is_fatal(fake_client, service):
    fake_client.paginator.paginate.side_effect = ClientError(
        {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "ListMetrics"
    )
    with pytest.raises(QueryError) as exc:
        discover_zones(service)
    assert exc.value.operation == "ListMetrics"
