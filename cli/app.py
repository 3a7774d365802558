"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 azlist 명령입니다.

명령어 구조:
    azlist [OPTIONS] PREDICATE

    예시:
    azlist -s <구독 ID> "type =~ 'Microsoft.Network/virtualNetworks'"
    azlist -s <구독 ID> -r --include-resource-group "resourceGroup =~ 'my-rg'"
    azlist -s <구독 ID> --extension Microsoft.Authorization/roleAssignments -f json "name == 'vm1'"

종료 코드:
    0: 성공
    1: 설정/API 오류
    2: 사용법 오류 (click)
    130: 사용자 취소 (Ctrl+C)

Usage:
    $ azlist --version
    $ python -m cli.app --help
"""

import logging

import click
from azure.core.exceptions import AzureError

from azlist.client import build_credential, get_cloud
from azlist.client.cloud import CLOUDS
from azlist.config import get_version, settings
from azlist.exceptions import AzListError, OperationCancelledError, format_error_for_user
from azlist.lister import ListOptions, extension_from_type, new_lister
from azlist.parallel import CancelToken
from cli.output import RENDERERS
from cli.ui.console import LOG_LEVELS, print_error, print_warning, setup_logging

logger = logging.getLogger(__name__)

VERSION = get_version()


def _split_extensions(ctx: click.Context, param: click.Parameter, value: tuple[str, ...]) -> tuple[str, ...]:
    """--extension 값을 쉼표로 분리 (옵션 반복/환경변수 공백 구분과 함께 사용 가능)"""
    return tuple(rt.strip() for item in value for rt in item.split(",") if rt.strip())


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(VERSION, prog_name="azlist")
@click.argument("predicate", nargs=-1)
@click.option(
    "--env",
    type=click.Choice(list(CLOUDS), case_sensitive=False),
    default=settings.DEFAULT_ENVIRONMENT,
    show_default=True,
    envvar="AZLIST_ENV",
    help="Azure 클라우드 환경",
)
@click.option(
    "-s",
    "--subscription-id",
    required=True,
    envvar=["AZLIST_SUBSCRIPTION_ID", "ARM_SUBSCRIPTION_ID"],
    help="대상 구독 ID",
)
@click.option("-r", "--recursive", is_flag=True, envvar="AZLIST_RECURSIVE", help="하위 리소스 재귀 조회")
@click.option("-b", "--with-body", is_flag=True, envvar="AZLIST_WITH_BODY", help="리소스 본문 출력")
@click.option(
    "-m", "--include-managed", is_flag=True, envvar="AZLIST_INCLUDE_MANAGED", help="managedBy가 있는 리소스 포함"
)
@click.option(
    "--include-resource-group", is_flag=True, envvar="AZLIST_INCLUDE_RESOURCE_GROUP", help="리소스 그룹 포함"
)
@click.option(
    "-p",
    "--parallelism",
    type=click.IntRange(min=1),
    default=settings.DEFAULT_PARALLELISM,
    show_default=True,
    envvar="AZLIST_PARALLELISM",
    help="최대 동시 조회 수",
)
@click.option(
    "--extension",
    "extensions",
    multiple=True,
    envvar="AZLIST_EXTENSION",
    callback=_split_extensions,
    help="확장 리소스 타입 (반복 또는 쉼표 구분, 예: Microsoft.Authorization/roleAssignments)",
)
@click.option("-t", "--table", default="", envvar="AZLIST_TABLE", help="ARG 테이블 이름 (기본: Resources)")
@click.option(
    "--authorization-scope-filter",
    type=click.Choice(list(settings.ARG_AUTHORIZATION_SCOPE_FILTERS)),
    default=None,
    envvar="AZLIST_AUTHORIZATION_SCOPE_FILTER",
    help="ARG 권한 범위 필터",
)
@click.option("-e", "--print-error", is_flag=True, envvar="AZLIST_PRINT_ERROR", help="목록 조회 에러 출력")
@click.option(
    "-L",
    "--log-level",
    type=click.Choice(list(LOG_LEVELS), case_sensitive=False),
    default=None,
    envvar="AZLIST_LOG_LEVEL",
    help="로그 레벨 (기본: 경고 이상만)",
)
@click.option(
    "--schema-file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    envvar="AZLIST_SCHEMA_FILE",
    help="ARM 스키마 스냅샷 파일 (기본: 내장 스냅샷, 주요 타입만 포함한 부분 목록)",
)
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(list(RENDERERS)),
    default="text",
    show_default=True,
    envvar="AZLIST_FORMAT",
    help="출력 형식",
)
def cli(
    predicate: tuple[str, ...],
    env: str,
    subscription_id: str,
    recursive: bool,
    with_body: bool,
    include_managed: bool,
    include_resource_group: bool,
    parallelism: int,
    extensions: tuple[str, ...],
    table: str,
    authorization_scope_filter: str | None,
    print_error: bool,
    log_level: str | None,
    schema_file: str | None,
    output_format: str,
) -> None:
    """Azure Resource Graph where 조건(PREDICATE)으로 리소스 목록 조회"""
    if not predicate:
        raise click.UsageError("조회 조건(PREDICATE)이 지정되지 않았습니다")
    if len(predicate) > 1:
        raise click.UsageError("조회 조건(PREDICATE)은 하나만 지정할 수 있습니다")

    setup_logging(log_level)

    options = ListOptions(
        subscription_id=subscription_id,
        parallelism=parallelism,
        recursive=recursive,
        include_managed=include_managed,
        include_resource_group=include_resource_group,
        extension_resource_types=[extension_from_type(rt) for rt in extensions],
        arg_table=table,
        arg_authorization_scope_filter=authorization_scope_filter,
    )

    cancel = CancelToken()
    try:
        cloud = get_cloud(env)
        credential = build_credential(cloud)
        lister = new_lister(options, credential, cloud=cloud, schema_file=schema_file)
        result = lister.list(predicate[0], cancel=cancel)
    except (KeyboardInterrupt, OperationCancelledError):
        cancel.cancel()
        print_warning("취소되었습니다")
        raise SystemExit(130)
    except (AzListError, AzureError) as e:
        logger.debug("조회 실패", exc_info=True)
        _print_failure(e)
        raise SystemExit(1)

    output = RENDERERS[output_format](result, with_body=with_body, print_error=print_error)
    if output:
        click.echo(output)


def _print_failure(error: Exception) -> None:
    # print_error 옵션 이름과 겹치지 않도록 분리
    print_error(format_error_for_user(error))


if __name__ == "__main__":
    cli()
