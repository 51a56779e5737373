"""
core/inventory/collector.py - 리전 단위 인벤토리 수집기

한 리전의 리소스를 수집하고, 평탄한 리소스 목록을 소유 VPC(또는 Stack)에
다시 연관시켜 트리를 만듭니다.

수집 흐름 (Ec2Inventory):
    1. collect_vpcs(): 요청된 VPC ID / 태그로 VPC 집합 결정
    2. collect(): 12종 리소스를 VPC 집합과 태그로 범위를 제한하여 수집
    3. collect_tags(): (태그 그룹 모드) describe_tags 수집
    4. trees(): VPC별 트리 또는 태그 트리 생성

Example:
    inventory = Ec2Inventory(ec2_client, vpc_ids=["vpc-1234"], tags=[("Env", "prod")])
    inventory.collect_vpcs()
    inventory.collect(progress=tracker.as_callback())

    for tree in inventory.trees():
        print("\\n".join(tree.to_lines()))
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from .filters import (
    attachment_vpc_filter,
    combine,
    requester_vpc_filter,
    tag_filters,
    tag_key_filter,
    vpc_filter,
    vpn_gateway_filter,
)
from .services import (
    collect_instances,
    collect_internet_gateways,
    collect_nat_gateways,
    collect_network_acls,
    collect_network_interfaces,
    collect_route_tables,
    collect_security_groups,
    collect_stack_resources,
    collect_stacks,
    collect_subnets,
    collect_tag_descriptions,
    collect_vpc_endpoints,
    collect_vpc_peerings,
    collect_vpcs,
    collect_vpn_connections,
    collect_vpn_gateways,
)
from .tree import TreeNode, build_stack_tree, build_tag_tree, build_vpc_tree
from .types import (
    Instance,
    InternetGateway,
    Labeled,
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

logger = logging.getLogger(__name__)

# (message, done) -> None
ProgressCallback = Callable[[str, bool], None]


def _notify(progress: ProgressCallback | None, message: str, done: bool = False) -> None:
    if progress is not None:
        progress(message, done)


class Ec2Inventory:
    """리전 하나의 EC2/VPC 리소스 인벤토리

    VPC 집합(collect_vpcs 결과)이 이후 모든 수집의 범위가 됩니다.
    VPC ID나 태그를 지정하지 않으면 범위 필터 없이 리전 전체를 수집합니다.

    Attributes:
        requested_vpc_ids: 사용자가 지정한 VPC ID
        tags: 사용자가 지정한 (key, value) 태그 필터
        vpcs: 수집된 VPC 목록
    """

    STEP_COUNT = 12

    def __init__(
        self,
        client: Any,
        vpc_ids: Iterable[str] = (),
        tags: Iterable[tuple[str, str]] = (),
    ):
        """초기화

        Args:
            client: 리전이 지정된 EC2 client
            vpc_ids: 대상 VPC ID (비어 있으면 전체)
            tags: 태그 필터 (모든 태그가 일치해야 함)
        """
        self._client = client
        self.requested_vpc_ids: list[str] = list(vpc_ids)
        self.tags: list[tuple[str, str]] = list(tags)

        self.vpcs: list[Vpc] = []
        self.subnets: list[Subnet] = []
        self.instances: list[Instance] = []
        self.internet_gateways: list[InternetGateway] = []
        self.route_tables: list[RouteTable] = []
        self.network_acls: list[NetworkAcl] = []
        self.vpc_peering_connections: list[VpcPeeringConnection] = []
        self.vpc_endpoints: list[VpcEndpoint] = []
        self.nat_gateways: list[NatGateway] = []
        self.security_groups: list[SecurityGroup] = []
        self.vpn_gateways: list[VpnGateway] = []
        self.vpn_connections: list[VpnConnection] = []
        self.network_interfaces: list[NetworkInterface] = []

        self.tag_descriptions: list[TagDescription] = []
        self._tags_collected = False

    # =========================================================================
    # 범위 / 필터
    # =========================================================================

    @property
    def is_scoped(self) -> bool:
        """VPC ID 또는 태그로 범위가 제한되었는지"""
        return bool(self.requested_vpc_ids or self.tags)

    @property
    def is_out_of_scope(self) -> bool:
        """범위가 지정되었지만 일치하는 VPC가 없는지

        이 경우 VPC 범위 수집과 태그 수집은 API 호출 없이 비어 있습니다.
        """
        return self.is_scoped and not self.vpcs

    @property
    def vpc_ids(self) -> list[str]:
        """수집된 VPC ID 목록"""
        return [vpc.vpc_id for vpc in self.vpcs]

    def _scope_ids(self) -> list[str]:
        # 범위 지정이 없으면 VPC 필터 없이 리전 전체를 조회
        return self.vpc_ids if self.is_scoped else []

    def _tag_filters(self) -> list[dict[str, Any]]:
        return tag_filters(self.tags)

    # =========================================================================
    # 수집
    # =========================================================================

    def collect_vpcs(self) -> list[Vpc]:
        """VPC 집합 수집

        요청된 VPC ID(vpc-id 필터)와 태그 필터를 함께 적용합니다.
        존재하지 않는 VPC ID는 오류 없이 빈 VPC 집합이 됩니다.

        Raises:
            APICallError: describe_vpcs 실패
        """
        filters = combine(vpc_filter(self.requested_vpc_ids), self._tag_filters())
        self.vpcs = collect_vpcs(self._client, filters)
        logger.info(f"VPC {len(self.vpcs)}개: {', '.join(self.vpc_ids) or '-'}")
        return self.vpcs

    def collect(self, progress: ProgressCallback | None = None) -> None:
        """VPC 집합 범위로 12종 리소스 수집

        VPN Connection 범위 필터가 VPN Gateway 목록으로 만들어지므로
        VPN Gateway를 먼저 수집합니다.

        Args:
            progress: (message, done) 진행 콜백

        Raises:
            APICallError: 수집 중 API 호출 실패 (해당 리전 수집 중단)
        """
        skip = self.is_out_of_scope
        if skip:
            logger.info("범위에 일치하는 VPC 없음, 리소스 수집 생략")

        for title, step in self._steps():
            _notify(progress, title)
            if not skip:
                step()
            _notify(progress, title, done=True)

        logger.info(f"수집 완료: {self.summary()}")

    def _steps(self) -> list[tuple[str, Callable[[], None]]]:
        return [
            ("Subnets", self._collect_subnets),
            ("Instances", self._collect_instances),
            ("Internet Gateways", self._collect_internet_gateways),
            ("Route Tables", self._collect_route_tables),
            ("Network ACLs", self._collect_network_acls),
            ("VPC Peerings", self._collect_vpc_peerings),
            ("VPC Endpoints", self._collect_vpc_endpoints),
            ("NAT Gateways", self._collect_nat_gateways),
            ("Security Groups", self._collect_security_groups),
            ("VPN Gateways", self._collect_vpn_gateways),
            ("VPN Connections", self._collect_vpn_connections),
            ("Network Interfaces", self._collect_network_interfaces),
        ]

    def _collect_subnets(self) -> None:
        self.subnets = collect_subnets(self._client, combine(vpc_filter(self._scope_ids()), self._tag_filters()))

    def _collect_instances(self) -> None:
        self.instances = collect_instances(self._client, combine(vpc_filter(self._scope_ids()), self._tag_filters()))

    def _collect_internet_gateways(self) -> None:
        self.internet_gateways = collect_internet_gateways(
            self._client, combine(attachment_vpc_filter(self._scope_ids()), self._tag_filters())
        )

    def _collect_route_tables(self) -> None:
        self.route_tables = collect_route_tables(
            self._client, combine(vpc_filter(self._scope_ids()), self._tag_filters())
        )

    def _collect_network_acls(self) -> None:
        self.network_acls = collect_network_acls(
            self._client, combine(vpc_filter(self._scope_ids()), self._tag_filters())
        )

    def _collect_vpc_peerings(self) -> None:
        self.vpc_peering_connections = collect_vpc_peerings(
            self._client, combine(requester_vpc_filter(self._scope_ids()), self._tag_filters())
        )

    def _collect_vpc_endpoints(self) -> None:
        self.vpc_endpoints = collect_vpc_endpoints(
            self._client, combine(vpc_filter(self._scope_ids()), self._tag_filters())
        )

    def _collect_nat_gateways(self) -> None:
        self.nat_gateways = collect_nat_gateways(
            self._client, combine(vpc_filter(self._scope_ids()), self._tag_filters())
        )

    def _collect_security_groups(self) -> None:
        self.security_groups = collect_security_groups(
            self._client, combine(vpc_filter(self._scope_ids()), self._tag_filters())
        )

    def _collect_vpn_gateways(self) -> None:
        self.vpn_gateways = collect_vpn_gateways(
            self._client, combine(attachment_vpc_filter(self._scope_ids()), self._tag_filters())
        )

    def _collect_vpn_connections(self) -> None:
        scope_ids = self._scope_ids()
        gateway_ids = [gw.vpn_gateway_id for gw in self.vpn_gateways]

        if scope_ids and not gateway_ids:
            # 범위 내 VPC에 연결된 VPN Gateway가 없으면 연관될 VPN Connection도 없음
            logger.debug("범위 내 VPN Gateway 없음, VPN Connection 조회 생략")
            self.vpn_connections = []
            return

        scope = vpn_gateway_filter(gateway_ids) if scope_ids else None
        self.vpn_connections = collect_vpn_connections(self._client, combine(scope, self._tag_filters()))

    def _collect_network_interfaces(self) -> None:
        self.network_interfaces = collect_network_interfaces(
            self._client, combine(vpc_filter(self._scope_ids()), self._tag_filters())
        )

    def collect_tags(self) -> list[TagDescription]:
        """태그 그룹 모드용 describe_tags 수집

        태그 필터가 있으면 요청된 키로 조회한 뒤 (key, value)가 정확히 일치하는 항목만 남깁니다.
        VPC ID가 지정된 경우 collect()로 수집된 리소스의 태그만 남기므로
        collect() 이후에 호출해야 합니다.

        Raises:
            APICallError: describe_tags 실패
        """
        if self.is_out_of_scope:
            logger.info("범위에 일치하는 VPC 없음, 태그 수집 생략")
            self.tag_descriptions = []
            self._tags_collected = True
            return []

        descriptions = collect_tag_descriptions(self._client, combine(tag_key_filter(self.tags)))

        if self.tags:
            wanted = set(self.tags)
            descriptions = [d for d in descriptions if (d.key, d.value) in wanted]

        if self.requested_vpc_ids:
            known = self.known_resource_ids()
            descriptions = [d for d in descriptions if d.resource_id in known]

        self.tag_descriptions = descriptions
        self._tags_collected = True
        logger.info(f"태그 {len(descriptions)}개 (리소스 x 태그)")
        return descriptions

    # =========================================================================
    # VPC 연관 조회
    # =========================================================================

    def subnets_in(self, vpc_id: str) -> list[Subnet]:
        return [r for r in self.subnets if r.vpc_id == vpc_id]

    def instances_in(self, vpc_id: str) -> list[Instance]:
        return [r for r in self.instances if r.vpc_id == vpc_id]

    def internet_gateways_in(self, vpc_id: str) -> list[InternetGateway]:
        """Attachment 중 하나라도 해당 VPC이면 포함"""
        return [r for r in self.internet_gateways if r.is_attached_to(vpc_id)]

    def route_tables_in(self, vpc_id: str) -> list[RouteTable]:
        return [r for r in self.route_tables if r.vpc_id == vpc_id]

    def network_acls_in(self, vpc_id: str) -> list[NetworkAcl]:
        return [r for r in self.network_acls if r.vpc_id == vpc_id]

    def vpc_peerings_in(self, vpc_id: str) -> list[VpcPeeringConnection]:
        """요청자(requester) VPC 기준"""
        return [r for r in self.vpc_peering_connections if r.requester_vpc_id == vpc_id]

    def vpc_endpoints_in(self, vpc_id: str) -> list[VpcEndpoint]:
        return [r for r in self.vpc_endpoints if r.vpc_id == vpc_id]

    def nat_gateways_in(self, vpc_id: str) -> list[NatGateway]:
        return [r for r in self.nat_gateways if r.vpc_id == vpc_id]

    def security_groups_in(self, vpc_id: str) -> list[SecurityGroup]:
        return [r for r in self.security_groups if r.vpc_id == vpc_id]

    def vpn_gateways_in(self, vpc_id: str) -> list[VpnGateway]:
        return [r for r in self.vpn_gateways if r.is_attached_to(vpc_id)]

    def vpn_connections_in(self, vpc_id: str) -> list[VpnConnection]:
        """VPC에 연결된 VPN Gateway를 거쳐 연관"""
        gateway_ids = {gw.vpn_gateway_id for gw in self.vpn_gateways_in(vpc_id)}
        return [r for r in self.vpn_connections if r.vpn_gateway_id in gateway_ids]

    def network_interfaces_in(self, vpc_id: str) -> list[NetworkInterface]:
        return [r for r in self.network_interfaces if r.vpc_id == vpc_id]

    def sections(self, vpc_id: str) -> list[tuple[str, Sequence[Labeled]]]:
        """VPC 트리 섹션 (제목, 리소스 목록) - 출력 순서 고정"""
        return [
            ("Subnets", self.subnets_in(vpc_id)),
            ("Instances", self.instances_in(vpc_id)),
            ("Internet Gateways", self.internet_gateways_in(vpc_id)),
            ("Route Tables", self.route_tables_in(vpc_id)),
            ("Network ACLs", self.network_acls_in(vpc_id)),
            ("VPC Peering Connections", self.vpc_peerings_in(vpc_id)),
            ("VPC Endpoints", self.vpc_endpoints_in(vpc_id)),
            ("NAT Gateways", self.nat_gateways_in(vpc_id)),
            ("Security Groups", self.security_groups_in(vpc_id)),
            ("VPN Connections", self.vpn_connections_in(vpc_id)),
            ("VPN Gateways", self.vpn_gateways_in(vpc_id)),
            ("Network Interfaces", self.network_interfaces_in(vpc_id)),
        ]

    # =========================================================================
    # 결과
    # =========================================================================

    def _collections(self) -> dict[str, list[Any]]:
        return {
            "vpcs": self.vpcs,
            "subnets": self.subnets,
            "instances": self.instances,
            "internet_gateways": self.internet_gateways,
            "route_tables": self.route_tables,
            "network_acls": self.network_acls,
            "vpc_peering_connections": self.vpc_peering_connections,
            "vpc_endpoints": self.vpc_endpoints,
            "nat_gateways": self.nat_gateways,
            "security_groups": self.security_groups,
            "vpn_gateways": self.vpn_gateways,
            "vpn_connections": self.vpn_connections,
            "network_interfaces": self.network_interfaces,
        }

    def summary(self) -> dict[str, int]:
        """리소스 종류별 수집 개수"""
        return {name: len(items) for name, items in self._collections().items()}

    def known_resource_ids(self) -> set[str]:
        """수집된 모든 리소스의 ID"""
        return {item.resource_id for items in self._collections().values() for item in items}

    def vpc_tree(self, vpc: Vpc) -> TreeNode:
        return build_vpc_tree(vpc, self.sections(vpc.vpc_id))

    def tag_tree(self) -> TreeNode:
        return build_tag_tree(self.tag_descriptions)

    def trees(self) -> list[TreeNode]:
        """출력 트리 목록

        collect_tags()가 호출되었으면 태그 트리 하나 (태그가 없으면 빈 목록),
        아니면 수집된 VPC 순서대로 VPC 트리를 반환합니다.
        """
        if self._tags_collected:
            return [self.tag_tree()] if self.tag_descriptions else []
        return [self.vpc_tree(vpc) for vpc in self.vpcs]


class StackInventory:
    """리전 하나의 CloudFormation Stack 인벤토리

    Attributes:
        requested: 사용자가 지정한 Stack 이름 또는 ID
        stacks: 수집된 Stack 목록
        resources: (Stack, 리소스 목록) 순서쌍
    """

    def __init__(self, client: Any, stack_names: Iterable[str] = ()):
        self._client = client
        self.requested: list[str] = list(stack_names)
        self.stacks: list[Stack] = []
        self.resources: list[tuple[Stack, list[StackResource]]] = []

    @property
    def step_count(self) -> int:
        return len(self.stacks)

    def collect_stacks(self) -> list[Stack]:
        """Stack 목록 수집

        이름을 지정한 경우 이름 또는 Stack ID가 일치하는 Stack만 남깁니다.

        Raises:
            APICallError: describe_stacks 실패
        """
        stacks = collect_stacks(self._client)

        if self.requested:
            stacks = [stack for stack in stacks if stack.matches(self.requested)]
            found = {stack.stack_name for stack in stacks} | {stack.stack_id for stack in stacks}
            missing = [name for name in self.requested if name not in found]
            if missing:
                logger.warning(f"Stack을 찾을 수 없음: {', '.join(missing)}")

        self.stacks = stacks
        logger.info(f"Stack {len(stacks)}개")
        return stacks

    def collect_stack_resources(self, progress: ProgressCallback | None = None) -> None:
        """Stack별 리소스 수집 (Stack마다 한 단계)

        Args:
            progress: (message, done) 진행 콜백

        Raises:
            APICallError: list_stack_resources 실패
        """
        self.resources = []
        for stack in self.stacks:
            name = stack.display_name
            _notify(progress, name)
            resources = collect_stack_resources(self._client, name)
            self.resources.append((stack, resources))
            logger.debug(f"{name}: 리소스 {len(resources)}개")
            _notify(progress, name, done=True)

    def trees(self) -> list[TreeNode]:
        """Stack 수집 순서대로 스택 트리 반환"""
        return [build_stack_tree(stack, resources) for stack, resources in self.resources]
