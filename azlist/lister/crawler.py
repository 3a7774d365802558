"""
azlist/lister/crawler.py - 하위(child) 리소스 너비 우선 크롤러

ARG에 인덱싱되지 않는 프록시/하위 리소스를 ARM 스키마 계층을 따라
단계(level)별로 확장합니다.

알고리즘:
    1. frontier = 입력 리소스 집합
    2. frontier의 각 리소스에 대해 라우팅 스코프로 스키마 엔트리를 찾고,
       선언된 하위 타입마다 작업 1개를 풀에 제출 (최신 API 버전 사용)
    3. 풀이 모두 끝나면 발견된 리소스를 전역 집합에 병합하고,
       새로 추가된 리소스만 다음 frontier로 사용
    4. frontier가 빌 때까지 반복

각 단계는 새 WorkPool을 사용하며, 이전 단계의 풀이 완전히 끝나기 전에는
다음 단계 작업을 제출하지 않습니다. 누적 상태 변경은 풀의 직렬 collector와
단계 사이에서만 일어납니다.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from functools import partial

from azlist.client.base import ListingClient
from azlist.models import ErrorSet, ListError, ListResult, Resource, ResourceSet
from azlist.parallel import CancelToken, WorkPool
from azlist.schema import SchemaTree, lookup_children

from .listing import list_resource

module_logger = logging.getLogger(__name__)


class ChildResourceCrawler:
    """스키마 기반 하위 리소스 크롤러"""

    def __init__(
        self,
        client: ListingClient,
        schema_tree: SchemaTree,
        parallelism: int,
        logger: logging.Logger | None = None,
    ):
        self._client = client
        self._schema_tree = schema_tree
        self._parallelism = parallelism
        self._logger = logger or module_logger

    def crawl(self, resources: Iterable[Resource], cancel: CancelToken | None = None) -> ListResult:
        """입력 리소스의 하위 리소스를 재귀적으로 조회

        Args:
            resources: 시작 리소스 목록
            cancel: 취소 토큰

        Returns:
            입력 + 하위 리소스(id 정렬, 중복 제거)와 ListError(endpoint 정렬, 중복 제거)

        Raises:
            OperationCancelledError: 취소된 경우
            Exception: 작업 풀 수준의 예상치 못한 오류
        """
        found = ResourceSet()
        frontier: list[Resource] = []
        for res in resources:
            if found.add(res):
                frontier.append(res)

        errors = ErrorSet()
        level = 0

        while frontier:
            level += 1
            discovered: list[Resource] = []
            level_errors: list[ListError] = []

            def collect(result: ListResult) -> None:
                discovered.extend(result.resources)
                level_errors.extend(result.errors)

            pool: WorkPool[ListResult] = WorkPool(self._parallelism, collect, cancel=cancel, name=f"crawl-{level}")
            try:
                for parent in frontier:
                    self._submit_children(pool, parent, cancel)
            except BaseException:
                pool.shutdown()
                raise
            self._logger.debug(f"크롤 단계 {level}: 부모 {len(frontier)}개, 작업 {pool.task_count}개")
            pool.wait()

            frontier = [res for res in discovered if found.add(res)]
            errors.extend(level_errors)

        self._logger.debug(f"크롤 완료: {level}단계, 리소스 {len(found)}개, 에러 {len(errors)}개")
        return ListResult(resources=found.sorted(), errors=errors.sorted())

    def _submit_children(self, pool: WorkPool[ListResult], parent: Resource, cancel: CancelToken | None) -> None:
        """부모 리소스의 선언된 하위 타입마다 작업 제출"""
        children = lookup_children(self._schema_tree, parent.id.route_scope_string())
        if not children:
            return

        self._logger.debug(f"직계 하위 리소스 조회: parent={parent.id}")
        for child_type, entry in children.items():
            pool.add_task(
                partial(
                    list_resource,
                    self._client,
                    parent,
                    child_type,
                    entry.latest_version,
                    cancel=cancel,
                    logger=self._logger,
                )
            )
