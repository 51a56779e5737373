"""
core/inventory/filters.py - EC2 Describe* 필터 생성

VPC 범위 필터는 VPC 집합이 비어 있으면 None을 반환하여 범위를 제한하지 않습니다.
태그 필터는 태그마다 하나씩 생성되며, API에서 AND 조건으로 결합됩니다.

Example:
    filters = combine(vpc_filter(["vpc-1", "vpc-2"]), tag_filters([("Env", "prod")]))
    # [{"Name": "vpc-id", "Values": ["vpc-1", "vpc-2"]},
    #  {"Name": "tag:Env", "Values": ["prod"]}]
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

Filter = dict[str, Any]

VPC_ID = "vpc-id"
ATTACHMENT_VPC_ID = "attachment.vpc-id"
REQUESTER_VPC_ID = "requester-vpc-info.vpc-id"
VPN_GATEWAY_ID = "vpn-gateway-id"
TAG_KEY = "key"


def make_filter(name: str, values: Iterable[str]) -> Filter:
    """{"Name": ..., "Values": [...]} 형식의 필터 생성"""
    return {"Name": name, "Values": list(values)}


def _scope_filter(name: str, ids: Iterable[str]) -> Filter | None:
    ids = [i for i in ids if i]
    if not ids:
        return None
    return make_filter(name, ids)


def vpc_filter(vpc_ids: Iterable[str]) -> Filter | None:
    """vpc-id 필터 (Subnet, Instance, RouteTable 등)"""
    return _scope_filter(VPC_ID, vpc_ids)


def attachment_vpc_filter(vpc_ids: Iterable[str]) -> Filter | None:
    """attachment.vpc-id 필터 (Internet Gateway, VPN Gateway)"""
    return _scope_filter(ATTACHMENT_VPC_ID, vpc_ids)


def requester_vpc_filter(vpc_ids: Iterable[str]) -> Filter | None:
    """requester-vpc-info.vpc-id 필터 (VPC Peering Connection)"""
    return _scope_filter(REQUESTER_VPC_ID, vpc_ids)


def vpn_gateway_filter(vpn_gateway_ids: Iterable[str]) -> Filter | None:
    """vpn-gateway-id 필터 (VPN Connection)"""
    return _scope_filter(VPN_GATEWAY_ID, vpn_gateway_ids)


def tag_filters(tags: Iterable[tuple[str, str]]) -> list[Filter]:
    """tag:<key> 필터 목록"""
    return [make_filter(f"tag:{key}", [value]) for key, value in tags]


def tag_key_filter(tags: Iterable[tuple[str, str]]) -> Filter | None:
    """describe_tags용 key 필터 (요청된 태그 키만 조회)"""
    keys = list(dict.fromkeys(key for key, _ in tags))
    return _scope_filter(TAG_KEY, keys)


def combine(optional: Filter | None, filters: Iterable[Filter] = ()) -> list[Filter]:
    """선택적 범위 필터와 태그 필터를 API 인자 목록으로 결합"""
    combined = [optional] if optional is not None else []
    combined.extend(filters)
    return combined
