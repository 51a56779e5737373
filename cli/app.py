"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.
리전마다 인벤토리를 수집하고 VPC/태그/스택 기준 트리를 출력합니다.

명령어 구조:
    aware --version                          # 버전 표시
    aware ec2                                # 전체 리전, VPC별 트리
    aware -r ap-northeast-2 ec2 --vpc vpc-1  # 지정 리전/VPC
    aware ec2 --tag Env=prod --group-by tag  # 태그별 트리
    aware cf --stack my-stack                # CloudFormation 스택 트리

공통 옵션 (서브명령 앞에 지정):
    -r, --region    대상 리전 (여러 번 지정 가능, 생략 시 활성화된 전체 리전)
    -p, --profile   AWS 프로파일
    --plain         Rich 스타일 없는 일반 텍스트 트리
    -q, --quiet     진행 표시 생략
    --debug         디버그 로그 출력

종료 코드:
    0: 성공
    1: AWS API 오류 / 설정 오류
    2: 잘못된 인자 (click)
    130: 사용자 중단 (Ctrl+C)

Usage:
    $ aware -r us-east-1 ec2 --vpc vpc-0abc
    $ python -m cli.app cf
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import click
from click import Context

from cli.ui import get_logger, print_error, print_trees, print_warning, step_progress
from core.aws import client_from_config, create_session
from core.config import GROUP_BY_CHOICES, AwareConfig, get_version, parse_tag
from core.exceptions import AwareError, ValidationError, format_error_for_user
from core.inventory import Ec2Inventory, StackInventory
from core.region import get_all_regions, region_title

if TYPE_CHECKING:
    import boto3

    from core.inventory import TreeNode

    # 리전 하나를 수집해 출력할 트리를 반환하는 함수
    RegionCollector = Callable[[boto3.Session, str, AwareConfig], list[TreeNode]]

# WARNING 레벨로 설정하여 INFO 로그가 트리 출력에 섞이지 않도록 함
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)

VERSION = get_version()

# Rich 핸들러를 붙일 패키지 logger
LOGGER_NAMES = ("core", "cli")

EXIT_ERROR = 1
EXIT_INTERRUPTED = 130


def _configure_logging(debug: bool) -> None:
    level = logging.DEBUG if debug else logging.WARNING
    for name in LOGGER_NAMES:
        get_logger(name, level)


def _parse_tags(ctx: Context, param: click.Parameter, values: tuple[str, ...]) -> list[tuple[str, str]]:
    """--tag KEY=VALUE 옵션 변환 (click callback)"""
    try:
        return [parse_tag(value) for value in values]
    except ValidationError as e:
        raise click.BadParameter(e.message, ctx=ctx, param=param) from e


def _build_config(ctx: Context, **overrides: Any) -> AwareConfig:
    """그룹 공통 옵션 + 서브명령 옵션으로 설정 생성"""
    options = dict(ctx.obj or {})
    options.update(overrides)
    return AwareConfig.from_env(**options)


def _run(ctx: Context, collect_region: RegionCollector, **overrides: Any) -> None:
    """리전 순회 실행 및 오류 처리

    AwareError는 사용자용 메시지로 출력 후 종료 코드 1,
    KeyboardInterrupt는 종료 코드 130으로 종료합니다.
    """
    try:
        config = _build_config(ctx, **overrides)
        session = create_session(config.profile)
        regions = config.regions or get_all_regions(session, config)
        logger.debug(f"대상 리전: {', '.join(regions)}")

        for region in regions:
            trees = collect_region(session, region, config)
            if not print_trees(trees, plain=config.plain) and not config.quiet:
                print_warning(f"{region_title(region)}: 출력할 리소스가 없습니다")
    except AwareError as e:
        logger.debug("수집 실패", exc_info=True)
        print_error(format_error_for_user(e))
        raise SystemExit(EXIT_ERROR) from e
    except KeyboardInterrupt:
        print_warning("사용자에 의해 중단되었습니다")
        raise SystemExit(EXIT_INTERRUPTED) from None


# =============================================================================
# 리전별 수집
# =============================================================================


def collect_ec2_region(session: boto3.Session, region: str, config: AwareConfig) -> list[TreeNode]:
    """리전 하나의 EC2/VPC 인벤토리 수집

    단계: VPC 수집 1 + 리소스 12 (+ 태그 그룹 모드면 태그 1)
    """
    client = client_from_config(session, "ec2", region, config)
    inventory = Ec2Inventory(client, vpc_ids=config.vpc_ids, tags=config.tags)
    by_tag = config.group_by == "tag"
    total_steps = 1 + Ec2Inventory.STEP_COUNT + (1 if by_tag else 0)

    with step_progress(region_title(region), total_steps, disable=config.quiet) as steps:
        steps.step("Collecting VPCs")
        inventory.collect_vpcs()
        steps.complete_step()

        inventory.collect(progress=steps.as_callback())

        if by_tag:
            steps.step("Tags")
            inventory.collect_tags()
            steps.complete_step()

    return inventory.trees()


def collect_cf_region(session: boto3.Session, region: str, config: AwareConfig) -> list[TreeNode]:
    """리전 하나의 CloudFormation 스택 인벤토리 수집

    단계: Stack 목록 1 + Stack별 리소스 N
    """
    client = client_from_config(session, "cloudformation", region, config)
    inventory = StackInventory(client, stack_names=config.stack_names)

    with step_progress(region_title(region), 1, disable=config.quiet) as steps:
        steps.step("Collecting Stacks")
        inventory.collect_stacks()
        steps.set_total(1 + inventory.step_count)
        steps.complete_step()

        inventory.collect_stack_resources(progress=steps.as_callback())

    return inventory.trees()


# =============================================================================
# 명령어
# =============================================================================


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(VERSION, prog_name="aware")
@click.option("-r", "--region", "regions", multiple=True, help="대상 리전 (다중 가능, 생략 시 전체 활성 리전)")
@click.option("-p", "--profile", default=None, help="AWS 프로파일")
@click.option("--plain", is_flag=True, help="일반 텍스트로 트리 출력")
@click.option("-q", "--quiet", is_flag=True, help="진행 표시 생략")
@click.option("--debug", is_flag=True, help="디버그 로그 출력")
@click.pass_context
def cli(
    ctx: Context,
    regions: tuple[str, ...],
    profile: str | None,
    plain: bool,
    quiet: bool,
    debug: bool,
) -> None:
    """AWARE - AWS 리소스 트리 탐색기

    \b
    EC2/VPC 리소스를 VPC 또는 태그 기준으로,
    CloudFormation 리소스를 스택 기준으로 트리 출력합니다.
    """
    _configure_logging(debug)

    ctx.ensure_object(dict)
    ctx.obj.update(
        regions=regions,
        profile=profile,
        plain=plain,
        quiet=quiet,
        debug=debug,
    )


@cli.command("ec2")
@click.option("--vpc", "vpc_ids", multiple=True, help="대상 VPC ID (다중 가능)")
@click.option("--tag", "tags", multiple=True, callback=_parse_tags, help="태그 필터 KEY=VALUE (다중 가능, AND)")
@click.option(
    "--group-by",
    type=click.Choice(GROUP_BY_CHOICES),
    default="vpc",
    show_default=True,
    help="트리 그룹 기준",
)
@click.pass_context
def ec2_command(ctx: Context, vpc_ids: tuple[str, ...], tags: list[tuple[str, str]], group_by: str) -> None:
    """EC2/VPC 리소스 트리

    \b
    Examples:
        aware ec2                              # 전체 VPC
        aware -r us-east-1 ec2 --vpc vpc-1234  # 특정 VPC
        aware ec2 --tag Env=prod --group-by tag
    """
    _run(ctx, collect_ec2_region, vpc_ids=vpc_ids, tags=tags, group_by=group_by)


@cli.command("cf")
@click.option("--stack", "stack_names", multiple=True, help="Stack 이름 또는 ID (다중 가능)")
@click.pass_context
def cf_command(ctx: Context, stack_names: tuple[str, ...]) -> None:
    """CloudFormation 스택 리소스 트리

    \b
    Examples:
        aware cf                       # 전체 Stack
        aware cf --stack my-stack      # 특정 Stack
    """
    _run(ctx, collect_cf_region, stack_names=stack_names)


if __name__ == "__main__":
    cli()
