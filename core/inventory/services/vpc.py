"""
core/inventory/services/vpc.py - VPC/Network 리소스 수집

VPC, Subnet, Internet Gateway, Route Table, Network ACL, VPC Peering,
VPC Endpoint, NAT Gateway, VPN Gateway, VPN Connection을 수집합니다.

모든 수집 함수는 (client, filters) 시그니처를 가지며,
filters는 core.inventory.filters로 만든 EC2 필터 목록입니다.
"""

from __future__ import annotations

import logging
from typing import Any

from ..types import (
    InternetGateway,
    NatGateway,
    NetworkAcl,
    RouteTable,
    Subnet,
    Vpc,
    VpcEndpoint,
    VpcPeeringConnection,
    VpnConnection,
    VpnGateway,
)
from .helpers import call, filter_kwargs, paginate

logger = logging.getLogger(__name__)

Filters = list[dict[str, Any]]


def collect_vpcs(client: Any, filters: Filters) -> list[Vpc]:
    """VPC 목록을 수집합니다.

    Args:
        client: EC2 client
        filters: vpc-id / tag 필터

    Returns:
        Vpc 데이터 클래스 목록
    """
    vpcs = [Vpc.from_api(data) for data in paginate(client, "describe_vpcs", "Vpcs", **filter_kwargs(filters))]
    logger.debug(f"VPC {len(vpcs)}개 수집")
    return vpcs


def collect_subnets(client: Any, filters: Filters) -> list[Subnet]:
    """Subnet 목록을 수집합니다."""
    return [Subnet.from_api(data) for data in paginate(client, "describe_subnets", "Subnets", **filter_kwargs(filters))]


def collect_internet_gateways(client: Any, filters: Filters) -> list[InternetGateway]:
    """Internet Gateway 목록을 수집합니다.

    VPC 범위는 attachment.vpc-id 필터로 지정해야 합니다.
    """
    return [
        InternetGateway.from_api(data)
        for data in paginate(client, "describe_internet_gateways", "InternetGateways", **filter_kwargs(filters))
    ]


def collect_route_tables(client: Any, filters: Filters) -> list[RouteTable]:
    """Route Table 목록을 수집합니다."""
    return [
        RouteTable.from_api(data)
        for data in paginate(client, "describe_route_tables", "RouteTables", **filter_kwargs(filters))
    ]


def collect_network_acls(client: Any, filters: Filters) -> list[NetworkAcl]:
    """Network ACL 목록을 수집합니다."""
    return [
        NetworkAcl.from_api(data)
        for data in paginate(client, "describe_network_acls", "NetworkAcls", **filter_kwargs(filters))
    ]


def collect_vpc_peerings(client: Any, filters: Filters) -> list[VpcPeeringConnection]:
    """VPC Peering Connection 목록을 수집합니다.

    VPC 범위는 requester-vpc-info.vpc-id 필터로 지정해야 합니다.
    """
    return [
        VpcPeeringConnection.from_api(data)
        for data in paginate(
            client,
            "describe_vpc_peering_connections",
            "VpcPeeringConnections",
            **filter_kwargs(filters),
        )
    ]


def collect_vpc_endpoints(client: Any, filters: Filters) -> list[VpcEndpoint]:
    """VPC Endpoint 목록을 수집합니다."""
    return [
        VpcEndpoint.from_api(data)
        for data in paginate(client, "describe_vpc_endpoints", "VpcEndpoints", **filter_kwargs(filters))
    ]


def collect_nat_gateways(client: Any, filters: Filters) -> list[NatGateway]:
    """NAT Gateway 목록을 수집합니다.

    describe_nat_gateways는 Filters가 아닌 Filter 파라미터를 사용합니다.
    """
    return [
        NatGateway.from_api(data)
        for data in paginate(client, "describe_nat_gateways", "NatGateways", **filter_kwargs(filters, "Filter"))
    ]


def collect_vpn_gateways(client: Any, filters: Filters) -> list[VpnGateway]:
    """VPN Gateway 목록을 수집합니다.

    describe_vpn_gateways는 페이지네이션을 지원하지 않아 단건 호출합니다.
    """
    return [
        VpnGateway.from_api(data)
        for data in call(client, "describe_vpn_gateways", "VpnGateways", **filter_kwargs(filters))
    ]


def collect_vpn_connections(client: Any, filters: Filters) -> list[VpnConnection]:
    """VPN Connection 목록을 수집합니다.

    describe_vpn_connections는 vpc-id 필터가 없으므로
    VPC 범위는 vpn-gateway-id 필터로 지정해야 합니다.
    """
    return [
        VpnConnection.from_api(data)
        for data in call(client, "describe_vpn_connections", "VpnConnections", **filter_kwargs(filters))
    ]
