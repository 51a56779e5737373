"""
tests/conftest.py - pytest 공통 픽스처

AWS API 모킹과 테스트 헬퍼를 제공합니다.

Usage:
    def test_something(paginated_client):
        client = paginated_client({"describe_subnets": [{"Subnets": [...]}]})
        ...

    def test_with_moto(moto_ec2):
        ec2, vpc_id, subnet_id = moto_ec2
"""

import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """테스트 환경 설정"""
    # 테스트용 환경 변수 설정
    monkeypatch.setenv("AWS_DEFAULT_REGION", "ap-northeast-2")
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")

    # 로컬 AWARE_ 설정이 테스트에 섞이지 않도록 제거
    for name in list(os.environ):
        if name.startswith("AWARE_"):
            monkeypatch.delenv(name)

    yield

    # CLI 실행이 붙인 Rich 핸들러 제거 (caplog가 루트 logger에서 캡처하도록)
    for logger_name in ("core", "cli"):
        package_logger = logging.getLogger(logger_name)
        package_logger.handlers.clear()
        package_logger.propagate = True
        package_logger.setLevel(logging.NOTSET)


# =============================================================================
# AWS 모킹 픽스처
# =============================================================================


def make_paginated_client(
    pages: Optional[Dict[str, List[Dict[str, Any]]]] = None,
    responses: Optional[Dict[str, Dict[str, Any]]] = None,
) -> MagicMock:
    """작업 이름별 페이지 응답을 돌려주는 client 모킹

    Args:
        pages: {"describe_subnets": [page1, page2, ...]} (get_paginator용)
        responses: {"describe_vpn_gateways": {...}} (단건 호출용)

    등록되지 않은 작업은 빈 페이지 하나를 반환합니다.
    paginator는 작업 이름별로 같은 MagicMock을 반환하므로
    client.get_paginator("describe_subnets").paginate.call_args로 인자를 검사할 수 있습니다.
    """
    pages = pages or {}
    responses = responses or {}
    client = MagicMock()
    paginators: Dict[str, MagicMock] = {}

    def get_paginator(operation: str) -> MagicMock:
        if operation not in paginators:
            paginator = MagicMock()
            paginator.paginate.return_value = pages.get(operation, [{}])
            paginators[operation] = paginator
        return paginators[operation]

    client.get_paginator.side_effect = get_paginator

    for operation, response in responses.items():
        getattr(client, operation).return_value = response

    # 등록되지 않은 단건 호출은 빈 응답
    client.describe_vpn_gateways.return_value = responses.get("describe_vpn_gateways", {"VpnGateways": []})
    client.describe_vpn_connections.return_value = responses.get("describe_vpn_connections", {"VpnConnections": []})

    return client


@pytest.fixture
def paginated_client():
    """make_paginated_client 팩토리 픽스처"""
    return make_paginated_client


# =============================================================================
# 유틸리티 함수
# =============================================================================


def create_mock_client_error(
    error_code: str,
    error_message: str = "Test error",
    operation_name: str = "TestOperation",
) -> Exception:
    """ClientError 생성 헬퍼"""
    from botocore.exceptions import ClientError

    return ClientError(
        {
            "Error": {
                "Code": error_code,
                "Message": error_message,
            }
        },
        operation_name,
    )


@pytest.fixture
def client_error():
    """create_mock_client_error 팩토리 픽스처"""
    return create_mock_client_error


def tags(**pairs: str) -> List[Dict[str, str]]:
    """AWS 태그 리스트 생성 헬퍼: tags(Name="web") -> [{"Key": "Name", "Value": "web"}]"""
    return [{"Key": key, "Value": value} for key, value in pairs.items()]


# =============================================================================
# moto 통합 (선택적)
# =============================================================================

try:
    import moto

    @pytest.fixture
    def aws_credentials(monkeypatch):
        """moto 사용 시 AWS 자격 증명 설정"""
        monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
        monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
        monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
        monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
        monkeypatch.setenv("AWS_DEFAULT_REGION", "ap-northeast-2")

    @pytest.fixture
    def moto_ec2(aws_credentials):
        """moto를 사용한 EC2 모킹 (VPC + 서브넷 1개)"""
        with moto.mock_aws():
            import boto3

            ec2 = boto3.client("ec2", region_name="ap-northeast-2")

            # VPC 생성
            vpc = ec2.create_vpc(
                CidrBlock="10.0.0.0/16",
                TagSpecifications=[{"ResourceType": "vpc", "Tags": tags(Name="test-vpc", Env="prod")}],
            )
            vpc_id = vpc["Vpc"]["VpcId"]

            # 서브넷 생성
            subnet = ec2.create_subnet(
                VpcId=vpc_id,
                CidrBlock="10.0.1.0/24",
                TagSpecifications=[{"ResourceType": "subnet", "Tags": tags(Name="test-subnet", Env="prod")}],
            )
            subnet_id = subnet["Subnet"]["SubnetId"]

            yield ec2, vpc_id, subnet_id

    @pytest.fixture
    def moto_cloudformation(aws_credentials):
        """moto를 사용한 CloudFormation 모킹"""
        with moto.mock_aws():
            import boto3

            cf = boto3.client("cloudformation", region_name="ap-northeast-2")
            yield cf

except ImportError:
    # moto가 설치되지 않은 경우 더미 픽스처
    @pytest.fixture
    def moto_ec2():
        pytest.skip("moto not installed")

    @pytest.fixture
    def moto_cloudformation():
        pytest.skip("moto not installed")
