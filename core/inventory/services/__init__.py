"""
core/inventory/services - 리소스별 수집 함수

각 모듈은 특정 AWS 리소스의 수집 함수를 제공합니다.
EC2 수집 함수는 (client, filters), CloudFormation 수집 함수는 client 기반 시그니처입니다.
"""

from .cloudformation import collect_stack_resources, collect_stacks
from .ec2 import (
    collect_instances,
    collect_network_interfaces,
    collect_security_groups,
    collect_tag_descriptions,
)
from .vpc import (
    collect_internet_gateways,
    collect_nat_gateways,
    collect_network_acls,
    collect_route_tables,
    collect_subnets,
    collect_vpc_endpoints,
    collect_vpc_peerings,
    collect_vpcs,
    collect_vpn_connections,
    collect_vpn_gateways,
)

__all__ = [
    # VPC
    "collect_vpcs",
    "collect_subnets",
    "collect_internet_gateways",
    "collect_route_tables",
    "collect_network_acls",
    "collect_vpc_peerings",
    "collect_vpc_endpoints",
    "collect_nat_gateways",
    "collect_vpn_gateways",
    "collect_vpn_connections",
    # EC2
    "collect_instances",
    "collect_security_groups",
    "collect_network_interfaces",
    "collect_tag_descriptions",
    # CloudFormation
    "collect_stacks",
    "collect_stack_resources",
]
