"""
core/inventory - 리소스 수집 및 연관 엔진

리전 단위로 EC2/VPC, CloudFormation 리소스를 수집하고
VPC(또는 태그, Stack) 기준 트리로 재구성합니다.

Classes:
    - Ec2Inventory: VPC 범위 12종 리소스 수집 + VPC/태그 트리
    - StackInventory: CloudFormation Stack 리소스 수집 + 스택 트리
    - TreeNode: 렌더링과 무관한 트리 데이터 모델

Usage:
    from core.inventory import Ec2Inventory

    inventory = Ec2Inventory(ec2_client, vpc_ids=["vpc-1234"])
    inventory.collect_vpcs()
    inventory.collect()
    trees = inventory.trees()
"""

from .collector import Ec2Inventory, ProgressCallback, StackInventory
from .tree import TreeNode, build_stack_tree, build_tag_tree, build_vpc_tree
from .types import (
    Instance,
    InternetGateway,
    NatGateway,
    NetworkAcl,
    NetworkInterface,
    RouteTable,
    SecurityGroup,
    Stack,
    StackResource,
    Subnet,
    TagDescription,
    Vpc,
    VpcEndpoint,
    VpcPeeringConnection,
    VpnConnection,
    VpnGateway,
)

__all__ = [
    # Collector
    "Ec2Inventory",
    "StackInventory",
    "ProgressCallback",
    # Tree
    "TreeNode",
    "build_vpc_tree",
    "build_tag_tree",
    "build_stack_tree",
    # Types
    "Vpc",
    "Subnet",
    "Instance",
    "InternetGateway",
    "RouteTable",
    "NetworkAcl",
    "VpcPeeringConnection",
    "VpcEndpoint",
    "NatGateway",
    "SecurityGroup",
    "VpnConnection",
    "VpnGateway",
    "NetworkInterface",
    "TagDescription",
    "Stack",
    "StackResource",
]
