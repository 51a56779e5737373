"""
core/inventory/services/helpers.py - 공통 API 호출 헬퍼

페이지네이션 순회와 botocore 예외 변환을 담당합니다.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from core.exceptions import APICallError

logger = logging.getLogger(__name__)


def paginate(
    client: Any,
    operation: str,
    result_key: str,
    service: str = "ec2",
    **kwargs: Any,
) -> Iterator[dict[str, Any]]:
    """페이지네이터로 모든 페이지의 항목을 순회

    Args:
        client: boto3 client
        operation: API 작업 이름 (예: "describe_subnets")
        result_key: 응답에서 항목 목록이 담긴 키 (예: "Subnets")
        service: 에러 메시지용 서비스 이름
        **kwargs: paginate()에 전달할 인자 (Filters 등)

    Yields:
        API 응답 항목 dict

    Raises:
        APICallError: API 호출 실패
    """
    try:
        paginator = client.get_paginator(operation)
        for page in paginator.paginate(**kwargs):
            yield from page.get(result_key, [])
    except (ClientError, BotoCoreError) as e:
        raise APICallError.from_client_error(service, operation, e) from e


def call(
    client: Any,
    operation: str,
    result_key: str,
    service: str = "ec2",
    **kwargs: Any,
) -> list[dict[str, Any]]:
    """페이지네이션이 없는 API 단건 호출

    Raises:
        APICallError: API 호출 실패
    """
    try:
        response = getattr(client, operation)(**kwargs)
    except (ClientError, BotoCoreError) as e:
        raise APICallError.from_client_error(service, operation, e) from e
    return response.get(result_key, [])


def filter_kwargs(filters: list[dict[str, Any]], param: str = "Filters") -> dict[str, Any]:
    """필터가 있을 때만 API 인자에 포함"""
    if not filters:
        return {}
    return {param: filters}
