"""
core/inventory/services/ec2.py - EC2 리소스 수집

Instance, Security Group, Network Interface, 태그 목록을 수집합니다.
"""

from __future__ import annotations

import logging
from typing import Any

from ..types import Instance, NetworkInterface, SecurityGroup, TagDescription
from .helpers import filter_kwargs, paginate

logger = logging.getLogger(__name__)

Filters = list[dict[str, Any]]


def collect_instances(client: Any, filters: Filters) -> list[Instance]:
    """EC2 인스턴스 목록을 수집합니다.

    describe_instances는 Reservation 단위로 응답하므로
    Reservations[].Instances[]를 평탄화합니다.

    Args:
        client: EC2 client
        filters: vpc-id / tag 필터

    Returns:
        Instance 데이터 클래스 목록
    """
    instances = []
    for reservation in paginate(client, "describe_instances", "Reservations", **filter_kwargs(filters)):
        for data in reservation.get("Instances", []):
            instances.append(Instance.from_api(data))
    return instances


def collect_security_groups(client: Any, filters: Filters) -> list[SecurityGroup]:
    """Security Group 목록을 수집합니다."""
    return [
        SecurityGroup.from_api(data)
        for data in paginate(client, "describe_security_groups", "SecurityGroups", **filter_kwargs(filters))
    ]


def collect_network_interfaces(client: Any, filters: Filters) -> list[NetworkInterface]:
    """Elastic Network Interface 목록을 수집합니다."""
    return [
        NetworkInterface.from_api(data)
        for data in paginate(client, "describe_network_interfaces", "NetworkInterfaces", **filter_kwargs(filters))
    ]


def collect_tag_descriptions(client: Any, filters: Filters) -> list[TagDescription]:
    """태그 목록을 수집합니다 (리소스 x 태그 단위).

    Args:
        client: EC2 client
        filters: key / value / resource-type 필터

    Returns:
        TagDescription 데이터 클래스 목록
    """
    tags = [TagDescription.from_api(data) for data in paginate(client, "describe_tags", "Tags", **filter_kwargs(filters))]
    logger.debug(f"태그 {len(tags)}개 수집")
    return tags
