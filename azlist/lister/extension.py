"""
azlist/lister/extension.py - 확장(extension) 리소스 조회

호출자가 지정한 확장 리소스 타입을 현재 리소스 집합의 각 부모에 대해
한 단계만 조회합니다 (결과는 다시 확장하지 않음).

    GET {parent_id}/providers/{type}?api-version={latest}

스키마에 없는 타입은 설정 오류로, 작업을 제출하기 전에 전체 조회를 중단합니다.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from functools import partial

from azlist.client.base import ListingClient
from azlist.exceptions import ConfigurationError
from azlist.models import ErrorSet, ListResult, Resource, ResourceSet
from azlist.parallel import CancelToken, WorkPool
from azlist.schema import SchemaTree, normalize_type

from .listing import ResourceFilter, list_resource

module_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtensionResource:
    """조회할 확장 리소스 타입

    Attributes:
        type: 전체 리소스 타입 (예: "Microsoft.Authorization/roleAssignments")
        filter: (부모 속성, 후보 속성) -> 유지 여부. None이면 모두 유지
    """

    type: str
    filter: ResourceFilter | None = None

    @property
    def type_path(self) -> str:
        """부모 기준 상대 경로"""
        return f"providers/{self.type}"


class ExtensionResolver:
    """확장 리소스 단일 단계 조회기"""

    def __init__(
        self,
        client: ListingClient,
        schema_tree: SchemaTree,
        extensions: Iterable[ExtensionResource],
        parallelism: int,
        logger: logging.Logger | None = None,
    ):
        """초기화

        Raises:
            ConfigurationError: 스키마에 없는 확장 리소스 타입
        """
        self._client = client
        self._parallelism = parallelism
        self._logger = logger or module_logger
        self._targets = self._resolve_versions(schema_tree, list(extensions))

    @staticmethod
    def _resolve_versions(
        schema_tree: SchemaTree, extensions: list[ExtensionResource]
    ) -> list[tuple[ExtensionResource, str]]:
        targets: list[tuple[ExtensionResource, str]] = []
        for ext in extensions:
            entry = schema_tree.get(normalize_type(ext.type))
            if entry is None:
                raise ConfigurationError("extension", f"스키마에 없는 확장 리소스 타입입니다: {ext.type}")
            targets.append((ext, entry.latest_version))
        return targets

    def resolve(self, resources: Iterable[Resource], cancel: CancelToken | None = None) -> ListResult:
        """각 부모 리소스에 대해 확장 리소스 조회

        Args:
            resources: 부모 리소스 목록
            cancel: 취소 토큰

        Returns:
            입력 + 발견된 확장 리소스(정렬, 중복 제거)와 ListError(정렬)

        Raises:
            OperationCancelledError: 취소된 경우
        """
        found = ResourceSet(resources)
        errors = ErrorSet()
        if not self._targets:
            return ListResult(resources=found.sorted(), errors=[])

        discovered: list[Resource] = []

        def collect(result: ListResult) -> None:
            discovered.extend(result.resources)
            errors.extend(result.errors)

        pool: WorkPool[ListResult] = WorkPool(self._parallelism, collect, cancel=cancel, name="extension")
        try:
            for parent in found:
                self._logger.debug(f"확장 리소스 조회: parent={parent.id}")
                for ext, version in self._targets:
                    pool.add_task(
                        partial(
                            list_resource,
                            self._client,
                            parent,
                            ext.type_path,
                            version,
                            resource_filter=ext.filter,
                            cancel=cancel,
                            logger=self._logger,
                        )
                    )
        except BaseException:
            pool.shutdown()
            raise
        pool.wait()

        for res in discovered:
            found.add(res)

        return ListResult(resources=found.sorted(), errors=errors.sorted())
