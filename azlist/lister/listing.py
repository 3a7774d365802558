"""
azlist/lister/listing.py - 부모 리소스 하위 타입 1개의 전체 페이지 조회

크롤러와 확장 리소스 조회가 공유하는 작업 단위입니다.
한 작업 안의 페이지 조회는 순차적으로 진행됩니다 (prefetch 없음).

에러 규칙:
- 404(리소스 없음): 하위 리소스 없음, 에러 아님, 페이지 조회 중단
- 그 외 API 실패: ListError 1건 기록 후 페이지 조회 중단
- 항목 파싱 실패: ListError 기록 후 해당 항목만 건너뜀
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from azlist.client.base import ListingClient
from azlist.exceptions import APICallError, is_not_found
from azlist.models import ListError, ListResult, Resource, make_endpoint
from azlist.parallel import CancelToken, check_cancelled
from azlist.types.document import Document

module_logger = logging.getLogger(__name__)

# (부모 속성, 후보 속성) -> 유지 여부
ResourceFilter = Callable[[Document, Document], bool]


def list_resource(
    client: ListingClient,
    parent: Resource,
    child_type: str,
    api_version: str,
    resource_filter: ResourceFilter | None = None,
    cancel: CancelToken | None = None,
    logger: logging.Logger | None = None,
) -> ListResult:
    """부모 리소스의 하위 타입 목록을 모든 페이지에 걸쳐 조회

    Args:
        client: 목록 조회 클라이언트
        parent: 부모 리소스
        child_type: 부모 기준 상대 타입 경로
        api_version: 사용할 API 버전
        resource_filter: 후보 필터 (False면 제외)
        cancel: 취소 토큰
        logger: 로거 (기본: 모듈 로거)

    Returns:
        발견된 리소스와 ListError

    Raises:
        OperationCancelledError: 페이지 요청 전 취소가 감지된 경우
    """
    log = logger or module_logger
    result = ListResult()
    parent_id = str(parent.id)
    endpoint = make_endpoint(parent_id, child_type)

    def add_error(message: str) -> None:
        err = ListError(endpoint=endpoint, api_version=api_version, message=message)
        log.debug(f"목록 조회 에러 기록: {err}")
        result.errors.append(err)

    log.debug(f"하위 리소스 조회: parent={parent_id}, type={child_type}, api-version={api_version}")

    next_link: str | None = None
    while True:
        check_cancelled(cancel)
        try:
            page = client.list_children(parent_id, child_type, api_version, next_link=next_link)
        except APICallError as e:
            if not is_not_found(e):
                add_error(str(e))
            break

        for item in page.items:
            try:
                res = Resource.from_document(item)
            except ValueError as e:
                add_error(str(e))
                continue

            if resource_filter is not None and not resource_filter(parent.properties, res.properties):
                continue
            result.resources.append(res)

        if not page.next_link:
            break
        next_link = page.next_link

    return result
