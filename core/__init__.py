# core/__init__.py
"""
core - AWARE 리소스 수집 인프라

CLI와 무관한 수집/연관 엔진 전체를 포함하는 최상위 패키지입니다.

아키텍처:
    core/
    ├── aws/            # boto3 session/client 생성 (retry, timeout)
    ├── region/         # 리전 가용성 조회
    ├── inventory/      # 리소스 타입, 필터, 수집기, 트리 모델
    ├── config.py       # 중앙 설정 관리
    └── exceptions.py   # 통합 예외 계층

Usage:
    # 설정 사용
    from core.config import AwareConfig
    config = AwareConfig.from_env(regions=["ap-northeast-2"])

    # 예외 처리
    from core.exceptions import APICallError, is_access_denied
    try:
        inventory.collect()
    except APICallError as e:
        if is_access_denied(e):
            print("권한이 없습니다")

    # 수집
    from core.inventory import Ec2Inventory
    inventory = Ec2Inventory(ec2_client, vpc_ids=["vpc-1234"])
"""

from core import aws, config, exceptions, inventory, region

__all__: list[str] = [
    # 서브패키지
    "aws",
    "inventory",
    "region",
    # 모듈
    "config",
    "exceptions",
]
