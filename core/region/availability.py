"""
core/region/availability.py - 리전 가용성 확인

EC2.describe_regions()를 사용하여 계정에서 접근 가능한 리전을 확인합니다.
리전을 지정하지 않고 실행하면 이 목록의 리전을 순서대로 수집합니다.

Usage:
    from core.region.availability import get_all_regions

    regions = get_all_regions(session, config)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from botocore.exceptions import BotoCoreError, ClientError

from core.aws import client_from_config
from core.exceptions import APICallError

if TYPE_CHECKING:
    import boto3

    from core.config import AwareConfig

logger = logging.getLogger(__name__)

# 리전 목록 조회에 사용할 기본 리전
BOOTSTRAP_REGION = "us-east-1"


@dataclass
class RegionInfo:
    """리전 정보

    Attributes:
        region_name: 리전 코드 (예: "ap-northeast-2")
        endpoint: 리전 엔드포인트
        opt_in_status: 옵트인 상태 ("opt-in-not-required", "opted-in", "not-opted-in")
    """

    region_name: str
    endpoint: str = ""
    opt_in_status: str = "opt-in-not-required"

    @property
    def is_opted_in(self) -> bool:
        """옵트인 리전 여부 (활성화됨)"""
        return self.opt_in_status in ("opt-in-not-required", "opted-in")


def describe_regions(client: Any) -> list[RegionInfo]:
    """모든 리전 정보 조회 (옵트인 상태 포함)

    Args:
        client: EC2 client

    Returns:
        RegionInfo 리스트 (활성화 여부 관계없이 모든 리전)

    Raises:
        APICallError: describe_regions 호출 실패
    """
    try:
        # AllRegions=True로 모든 리전 조회 (옵트인 상태 포함)
        response = client.describe_regions(AllRegions=True)
    except (ClientError, BotoCoreError) as e:
        raise APICallError.from_client_error("ec2", "describe_regions", e) from e

    return [
        RegionInfo(
            region_name=region.get("RegionName", ""),
            endpoint=region.get("Endpoint", ""),
            opt_in_status=region.get("OptInStatus", "opt-in-not-required"),
        )
        for region in response.get("Regions", [])
        if region.get("RegionName")
    ]


def get_all_regions(session: boto3.Session, config: AwareConfig) -> list[str]:
    """계정에서 사용 가능한 리전 코드 목록 (정렬됨)

    옵트인이 필요하지만 활성화되지 않은 리전은 제외합니다.
    해당 리전에 대한 describe 호출은 AuthFailure로 실패하기 때문입니다.

    Args:
        session: boto3 Session
        config: 클라이언트 재시도/타임아웃 설정

    Returns:
        사용 가능한 리전 코드 리스트
    """
    region = session.region_name or BOOTSTRAP_REGION
    client = client_from_config(session, "ec2", region, config)

    regions = describe_regions(client)
    available = sorted(r.region_name for r in regions if r.is_opted_in)

    skipped = len(regions) - len(available)
    if skipped:
        logger.debug(f"옵트인되지 않은 리전 {skipped}개 제외")
    logger.info(f"사용 가능한 리전 {len(available)}개")

    return available


def region_title(region: str) -> str:
    """진행 표시용 리전 라벨"""
    return f"AWS Region {region}"
