"""
core/inventory/types.py - 리소스 타입 정의

인벤토리 수집에 사용되는 데이터 클래스 정의.
각 클래스는 API 응답 dict로부터 from_api()로 생성되며,
트리 출력용 라벨(label())과 VPC 연관에 필요한 필드를 보관합니다.

카테고리:
- Network: Vpc, Subnet, InternetGateway, RouteTable, NetworkAcl,
  VpcPeeringConnection, VpcEndpoint, NatGateway, NetworkInterface
- Compute: Instance
- Security: SecurityGroup
- VPN: VpnConnection, VpnGateway
- Tag: TagDescription
- CloudFormation: Stack, StackResource
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

NAME_TAG = "Name"


def parse_tags(tags: list[dict[str, Any]] | None) -> dict[str, str]:
    """태그 리스트를 dict로 변환

    Args:
        tags: AWS 태그 리스트 [{"Key": "Name", "Value": "my-resource"}, ...]

    Returns:
        {"Name": "my-resource", ...}
    """
    if not tags:
        return {}
    return {tag.get("Key", ""): tag.get("Value", "") for tag in tags if tag.get("Key")}


class Labeled:
    """트리 라벨 공통 동작

    라벨 형식: "<id>" 또는 "<id> (<name>)".
    name은 Name 태그이며, 없으면 description으로 대체합니다.
    """

    tags: dict[str, str]

    @property
    def resource_id(self) -> str:
        raise NotImplementedError

    @property
    def name(self) -> str:
        return self.tags.get(NAME_TAG, "")

    @property
    def display_description(self) -> str:
        return ""

    def tag(self, key: str) -> str | None:
        return self.tags.get(key)

    def label(self) -> str:
        name = self.name or self.display_description
        if name:
            return f"{self.resource_id} ({name})"
        return self.resource_id


# =============================================================================
# Network
# =============================================================================


@dataclass
class Vpc(Labeled):
    """VPC 정보

    Attributes:
        vpc_id: VPC ID
        tags: 리소스 태그 딕셔너리
    """

    vpc_id: str
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def resource_id(self) -> str:
        return self.vpc_id

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Vpc:
        return cls(
            vpc_id=data.get("VpcId", ""),
            tags=parse_tags(data.get("Tags")),
        )


@dataclass
class Subnet(Labeled):
    """Subnet 정보"""

    subnet_id: str
    vpc_id: str = ""
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def resource_id(self) -> str:
        return self.subnet_id

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Subnet:
        return cls(
            subnet_id=data.get("SubnetId", ""),
            vpc_id=data.get("VpcId", ""),
            tags=parse_tags(data.get("Tags")),
        )


@dataclass
class InternetGateway(Labeled):
    """Internet Gateway 정보

    하나의 IGW는 여러 Attachment를 가질 수 있으므로 VPC ID를 목록으로 보관합니다.
    """

    internet_gateway_id: str
    attached_vpc_ids: list[str] = field(default_factory=list)
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def resource_id(self) -> str:
        return self.internet_gateway_id

    def is_attached_to(self, vpc_id: str) -> bool:
        return vpc_id in self.attached_vpc_ids

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> InternetGateway:
        return cls(
            internet_gateway_id=data.get("InternetGatewayId", ""),
            attached_vpc_ids=[a["VpcId"] for a in data.get("Attachments", []) if a.get("VpcId")],
            tags=parse_tags(data.get("Tags")),
        )


@dataclass
class RouteTable(Labeled):
    """Route Table 정보"""

    route_table_id: str
    vpc_id: str = ""
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def resource_id(self) -> str:
        return self.route_table_id

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> RouteTable:
        return cls(
            route_table_id=data.get("RouteTableId", ""),
            vpc_id=data.get("VpcId", ""),
            tags=parse_tags(data.get("Tags")),
        )


@dataclass
class NetworkAcl(Labeled):
    """Network ACL 정보"""

    network_acl_id: str
    vpc_id: str = ""
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def resource_id(self) -> str:
        return self.network_acl_id

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> NetworkAcl:
        return cls(
            network_acl_id=data.get("NetworkAclId", ""),
            vpc_id=data.get("VpcId", ""),
            tags=parse_tags(data.get("Tags")),
        )


@dataclass
class VpcPeeringConnection(Labeled):
    """VPC Peering Connection 정보

    트리에서는 요청자(requester) VPC 아래에 표시됩니다.
    """

    vpc_peering_connection_id: str
    requester_vpc_id: str = ""
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def resource_id(self) -> str:
        return self.vpc_peering_connection_id

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> VpcPeeringConnection:
        return cls(
            vpc_peering_connection_id=data.get("VpcPeeringConnectionId", ""),
            requester_vpc_id=(data.get("RequesterVpcInfo") or {}).get("VpcId", ""),
            tags=parse_tags(data.get("Tags")),
        )


@dataclass
class VpcEndpoint(Labeled):
    """VPC Endpoint 정보"""

    vpc_endpoint_id: str
    vpc_id: str = ""
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def resource_id(self) -> str:
        return self.vpc_endpoint_id

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> VpcEndpoint:
        return cls(
            vpc_endpoint_id=data.get("VpcEndpointId", ""),
            vpc_id=data.get("VpcId", ""),
            tags=parse_tags(data.get("Tags")),
        )


@dataclass
class NatGateway(Labeled):
    """NAT Gateway 정보"""

    nat_gateway_id: str
    vpc_id: str = ""
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def resource_id(self) -> str:
        return self.nat_gateway_id

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> NatGateway:
        return cls(
            nat_gateway_id=data.get("NatGatewayId", ""),
            vpc_id=data.get("VpcId", ""),
            tags=parse_tags(data.get("Tags")),
        )


@dataclass
class NetworkInterface(Labeled):
    """Elastic Network Interface (ENI) 정보

    ENI는 태그를 Tags가 아닌 TagSet 필드로 반환합니다.
    Name 태그가 없으면 description("Primary network interface" 등)을 라벨에 사용합니다.
    """

    network_interface_id: str
    vpc_id: str = ""
    description: str = ""
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def resource_id(self) -> str:
        return self.network_interface_id

    @property
    def display_description(self) -> str:
        return self.description

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> NetworkInterface:
        return cls(
            network_interface_id=data.get("NetworkInterfaceId", ""),
            vpc_id=data.get("VpcId", ""),
            description=data.get("Description", ""),
            tags=parse_tags(data.get("TagSet")),
        )


# =============================================================================
# Compute / Security
# =============================================================================


@dataclass
class Instance(Labeled):
    """EC2 인스턴스 정보"""

    instance_id: str
    vpc_id: str = ""
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def resource_id(self) -> str:
        return self.instance_id

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Instance:
        return cls(
            instance_id=data.get("InstanceId", ""),
            vpc_id=data.get("VpcId", ""),
            tags=parse_tags(data.get("Tags")),
        )


@dataclass
class SecurityGroup(Labeled):
    """Security Group 정보

    Name 태그가 없으면 그룹 description을 라벨에 사용합니다.
    """

    group_id: str
    group_name: str = ""
    vpc_id: str = ""
    description: str = ""
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def resource_id(self) -> str:
        return self.group_id

    @property
    def display_description(self) -> str:
        return self.description

    @property
    def is_default(self) -> bool:
        return self.group_name == "default"

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> SecurityGroup:
        return cls(
            group_id=data.get("GroupId", ""),
            group_name=data.get("GroupName", ""),
            vpc_id=data.get("VpcId", ""),
            description=data.get("Description", ""),
            tags=parse_tags(data.get("Tags")),
        )


# =============================================================================
# VPN
# =============================================================================


@dataclass
class VpnGateway(Labeled):
    """Virtual Private Gateway 정보"""

    vpn_gateway_id: str
    attached_vpc_ids: list[str] = field(default_factory=list)
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def resource_id(self) -> str:
        return self.vpn_gateway_id

    def is_attached_to(self, vpc_id: str) -> bool:
        return vpc_id in self.attached_vpc_ids

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> VpnGateway:
        return cls(
            vpn_gateway_id=data.get("VpnGatewayId", ""),
            attached_vpc_ids=[a["VpcId"] for a in data.get("VpcAttachments", []) if a.get("VpcId")],
            tags=parse_tags(data.get("Tags")),
        )


@dataclass
class VpnConnection(Labeled):
    """Site-to-Site VPN Connection 정보

    VPN Connection 자체에는 VPC 참조가 없으므로
    연결된 VPN Gateway를 통해 VPC와 연관됩니다.
    """

    vpn_connection_id: str
    vpn_gateway_id: str = ""
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def resource_id(self) -> str:
        return self.vpn_connection_id

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> VpnConnection:
        return cls(
            vpn_connection_id=data.get("VpnConnectionId", ""),
            vpn_gateway_id=data.get("VpnGatewayId", ""),
            tags=parse_tags(data.get("Tags")),
        )


# =============================================================================
# Tag
# =============================================================================


@dataclass
class TagDescription:
    """describe_tags 결과 항목 (리소스 하나에 붙은 태그 하나)"""

    key: str
    value: str
    resource_type: str
    resource_id: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> TagDescription:
        return cls(
            key=data.get("Key", ""),
            value=data.get("Value", ""),
            resource_type=data.get("ResourceType", ""),
            resource_id=data.get("ResourceId", ""),
        )


# =============================================================================
# CloudFormation
# =============================================================================


@dataclass
class Stack:
    """CloudFormation Stack 정보

    Attributes:
        stack_id: 스택 ID (ARN)
        stack_name: 스택 이름
        stack_status: 스택 상태 (CREATE_COMPLETE 등)
        tags: 리소스 태그 딕셔너리
    """

    stack_id: str
    stack_name: str = ""
    stack_status: str = ""
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def display_name(self) -> str:
        """진행 표시용 이름 (이름이 없으면 ID)"""
        return self.stack_name or self.stack_id

    def matches(self, requested: list[str]) -> bool:
        """요청된 이름 또는 ID와 일치하는지"""
        return any(value in (self.stack_name, self.stack_id) for value in requested if value)

    def title(self) -> str:
        if self.stack_status:
            return f"{self.stack_name} ({self.stack_status})"
        return self.stack_name

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Stack:
        return cls(
            stack_id=data.get("StackId", ""),
            stack_name=data.get("StackName", ""),
            stack_status=data.get("StackStatus", ""),
            tags=parse_tags(data.get("Tags")),
        )


@dataclass
class StackResource:
    """CloudFormation Stack에 속한 개별 리소스 정보

    Attributes:
        logical_id: 템플릿 내 논리적 리소스 ID
        physical_id: 실제 AWS 리소스 ID (생성 전이면 빈 문자열)
        resource_type: AWS 리소스 타입 (AWS::EC2::Instance 등)
        resource_status: 리소스 상태 (CREATE_COMPLETE 등)
    """

    logical_id: str = ""
    physical_id: str = ""
    resource_type: str = ""
    resource_status: str = ""

    def label(self) -> str:
        logical_id = self.logical_id or "unnamed resource"
        status = self.resource_status or "no status"
        return f"{self.resource_type}: {self.physical_id} ({logical_id}) [{status}]"

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> StackResource:
        return cls(
            logical_id=data.get("LogicalResourceId", ""),
            physical_id=data.get("PhysicalResourceId", ""),
            resource_type=data.get("ResourceType", ""),
            resource_status=data.get("ResourceStatus", ""),
        )
