# core/region - 리전 가용성
"""
리전 모듈

Example:
    from core.region import get_all_regions

    for region in get_all_regions(session, config):
        ...
"""

from .availability import RegionInfo, describe_regions, get_all_regions, region_title

__all__: list[str] = [
    "RegionInfo",
    "describe_regions",
    "get_all_regions",
    "region_title",
]
