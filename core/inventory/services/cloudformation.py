"""
core/inventory/services/cloudformation.py - CloudFormation 리소스 수집

Stack 목록과 Stack별 리소스 요약(list_stack_resources)을 수집합니다.
describe_stack_resources는 100개까지만 반환하므로 페이지네이션되는
list_stack_resources를 사용합니다.
"""

from __future__ import annotations

from typing import Any

from ..types import Stack, StackResource
from .helpers import paginate

SERVICE = "cloudformation"


def collect_stacks(client: Any) -> list[Stack]:
    """Stack 목록을 수집합니다.

    Args:
        client: CloudFormation client

    Returns:
        Stack 데이터 클래스 목록 (API 순서)
    """
    return [Stack.from_api(data) for data in paginate(client, "describe_stacks", "Stacks", service=SERVICE)]


def collect_stack_resources(client: Any, stack_name: str) -> list[StackResource]:
    """Stack에 속한 리소스 목록을 수집합니다.

    Args:
        client: CloudFormation client
        stack_name: Stack 이름 또는 ID

    Returns:
        StackResource 데이터 클래스 목록
    """
    return [
        StackResource.from_api(data)
        for data in paginate(
            client,
            "list_stack_resources",
            "StackResourceSummaries",
            service=SERVICE,
            StackName=stack_name,
        )
    ]
