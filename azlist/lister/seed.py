"""
azlist/lister/seed.py - Azure Resource Graph seed 쿼리

where 조건으로 추적(tracked) 리소스를 조회하여 크롤링의 시작 집합을 만듭니다.

    <table> | where <predicate> | order by id desc

페이지 처리:
    top=1000으로 첫 페이지를 받은 뒤, 누적 count가 total_records에 도달할 때까지
    skip(1000씩 증가)과 skip_token으로 다음 페이지를 요청합니다.
    count가 total보다 작은데 skip_token이 없거나 빈 페이지가 오면
    무한 재시도 대신 SeedQueryError로 중단합니다.

seed 집합은 이후 모든 단계의 기준이므로 실패는 모두 치명적입니다.
"""

from __future__ import annotations

import logging

from azlist.client.base import SeedPage, SeedQueryClient
from azlist.config import settings
from azlist.exceptions import APICallError, ConfigurationError, SeedQueryError
from azlist.models import Resource, sort_resources
from azlist.parallel import CancelToken, check_cancelled

module_logger = logging.getLogger(__name__)


def build_query(predicate: str, table: str = "") -> str:
    """ARG 쿼리 문자열 생성"""
    return f"{table or settings.DEFAULT_ARG_TABLE} | where {predicate} | order by id desc"


def validate_authorization_scope_filter(value: str | None) -> str | None:
    """ARG 권한 범위 필터 값 검증 (빈 값은 None)

    Raises:
        ConfigurationError: 지원하지 않는 값
    """
    if not value:
        return None
    if value not in settings.ARG_AUTHORIZATION_SCOPE_FILTERS:
        allowed = ", ".join(settings.ARG_AUTHORIZATION_SCOPE_FILTERS)
        raise ConfigurationError("authorization_scope_filter", f"지원하지 않는 값입니다: {value!r} (가능: {allowed})")
    return value


def _collect(query: str, page: SeedPage) -> list[Resource]:
    resources: list[Resource] = []
    for item in page.items:
        try:
            resources.append(Resource.from_document(item))
        except ValueError as e:
            raise SeedQueryError(query, f"seed 항목 파싱 실패: {e}", cause=e) from e
    return resources


def list_tracked_resources(
    client: SeedQueryClient,
    subscription_id: str,
    predicate: str,
    table: str = "",
    authorization_scope_filter: str | None = None,
    page_size: int = settings.ARG_PAGE_SIZE,
    cancel: CancelToken | None = None,
    logger: logging.Logger | None = None,
) -> list[Resource]:
    """조건에 맞는 추적 리소스를 모든 페이지에 걸쳐 조회

    Args:
        client: ARG 쿼리 클라이언트
        subscription_id: 대상 구독 ID
        predicate: KQL where 조건
        table: ARG 테이블 이름 (기본: Resources)
        authorization_scope_filter: ARG 권한 범위 필터
        page_size: 페이지 크기 (top, skip 증가 단위)
        cancel: 취소 토큰
        logger: 로거

    Returns:
        id 오름차순으로 정렬된 리소스 목록

    Raises:
        SeedQueryError: 쿼리 실패, 항목 파싱 실패, 페이지 불일치
        OperationCancelledError: 취소된 경우
    """
    log = logger or module_logger
    query = build_query(predicate, table)
    scope_filter = validate_authorization_scope_filter(authorization_scope_filter)
    subscriptions = [subscription_id]

    def fetch(skip: int | None = None, skip_token: str | None = None) -> SeedPage:
        check_cancelled(cancel)
        try:
            return client.query(
                query,
                subscriptions,
                top=page_size,
                skip=skip,
                skip_token=skip_token,
                authorization_scope_filter=scope_filter,
            )
        except SeedQueryError:
            raise
        except APICallError as e:
            raise SeedQueryError(query, str(e), status_code=e.status_code, cause=e) from e

    log.debug(f"ARG 쿼리 실행: {query}")
    page = fetch()
    resources = _collect(query, page)

    total = page.total_records
    count = page.count
    skip = page_size
    skip_token = page.skip_token

    while count < total:
        if not skip_token:
            raise SeedQueryError(query, f"skip_token 없이 페이지가 끝났습니다 ({count}/{total})")

        page = fetch(skip=skip, skip_token=skip_token)
        if page.count <= 0:
            raise SeedQueryError(query, f"빈 페이지가 반환되었습니다 ({count}/{total})")

        resources.extend(_collect(query, page))
        count += page.count
        skip += page_size
        skip_token = page.skip_token

    log.debug(f"ARG 쿼리 완료: {len(resources)}개 리소스 (total={total})")
    return sort_resources(resources)
