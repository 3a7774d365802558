"""
azlist/lister/lister.py - 리소스 목록 조회 오케스트레이터

단계:
    a. ARG seed 쿼리 (id 정렬)
    b. recursive: 하위 리소스 크롤링, 에러 병합
    c. include_managed가 아니면 managedBy가 있는 리소스 제거
    d. include_resource_group: 남은 리소스의 리소스 그룹을 한 번씩 조회하여 앞에 추가
    e. 확장 리소스 타입이 있으면 현재 집합에 대해 확장 리소스 조회, 에러 병합
    f. 리소스(id 정렬), 에러(endpoint 정렬) 반환

Example:
    from azlist import ListOptions, new_lister

    options = ListOptions(subscription_id=sub, recursive=True, parallelism=10)
    lister = new_lister(options, credential)
    result = lister.list("resourceGroup =~ 'my-rg'")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from azure.core.credentials import TokenCredential

from azlist.client import AzureClient, CloudConfig, get_cloud
from azlist.client.base import ListerClient
from azlist.config import default_parallelism, settings
from azlist.exceptions import APICallError, ConfigurationError
from azlist.models import ErrorSet, ListResult, Resource, ResourceSet
from azlist.parallel import CancelToken, check_cancelled
from azlist.schema import SchemaTree, load_schema_tree
from azlist.types.document import managed_by

from .crawler import ChildResourceCrawler
from .extension import ExtensionResolver, ExtensionResource
from .seed import list_tracked_resources, validate_authorization_scope_filter

module_logger = logging.getLogger(__name__)


@dataclass
class ListOptions:
    """조회 옵션

    Attributes:
        subscription_id: 대상 구독 ID (필수)
        parallelism: 최대 동시 조회 수 (0이면 호스트 CPU 수)
        recursive: 하위 리소스 재귀 조회 여부
        include_managed: managedBy가 설정된 리소스 포함 여부
        include_resource_group: 리소스 그룹 포함 여부
        extension_resource_types: 추가로 조회할 확장 리소스 타입
        arg_table: ARG 테이블 이름 (빈 값이면 Resources)
        arg_authorization_scope_filter: ARG 권한 범위 필터
        logger: 로거 (None이면 라이브러리 로거, 기본 출력 없음)
    """

    subscription_id: str = ""
    parallelism: int = 0
    recursive: bool = False
    include_managed: bool = False
    include_resource_group: bool = False
    extension_resource_types: list[ExtensionResource] = field(default_factory=list)
    arg_table: str = ""
    arg_authorization_scope_filter: str | None = None
    logger: logging.Logger | None = None

    def resolved_parallelism(self) -> int:
        """실제 사용할 병렬 수

        Raises:
            ConfigurationError: 음수
        """
        if self.parallelism < 0:
            raise ConfigurationError("parallelism", f"0 이상이어야 합니다: {self.parallelism}")
        return self.parallelism or default_parallelism()


class Lister:
    """Azure 리소스 목록 조회기"""

    def __init__(self, options: ListOptions, client: ListerClient, schema_tree: SchemaTree):
        """초기화

        Args:
            options: 조회 옵션
            client: ARG + ARM 목록 조회 클라이언트
            schema_tree: ARM 스키마 트리

        Raises:
            ConfigurationError: 구독 누락, 잘못된 병렬 수/권한 범위 필터, 스키마에 없는 확장 리소스 타입
        """
        if not options.subscription_id:
            raise ConfigurationError("subscription_id", "구독 ID가 지정되지 않았습니다")

        self.options = options
        self.client = client
        self.schema_tree = schema_tree
        self.parallelism = options.resolved_parallelism()
        self.logger = options.logger or module_logger

        validate_authorization_scope_filter(options.arg_authorization_scope_filter)

        self._crawler = ChildResourceCrawler(client, schema_tree, self.parallelism, logger=self.logger)
        self._extension_resolver = ExtensionResolver(
            client,
            schema_tree,
            options.extension_resource_types,
            self.parallelism,
            logger=self.logger,
        )

    def list(self, predicate: str, cancel: CancelToken | None = None) -> ListResult:
        """조건에 맞는 리소스 목록 조회

        Args:
            predicate: ARG where 조건 (KQL)
            cancel: 취소 토큰. 취소된 조회의 부분 결과는 사용하지 마세요.

        Returns:
            ListResult (resources: id 정렬, errors: endpoint 정렬)

        Raises:
            SeedQueryError: seed 쿼리 실패
            APICallError: 리소스 그룹 조회 실패
            OperationCancelledError: 취소된 경우
        """
        opts = self.options
        self.logger.info(
            f"조회 시작: subscription={opts.subscription_id}, predicate={predicate!r}, "
            f"parallelism={self.parallelism}, recursive={opts.recursive}, include_managed={opts.include_managed}"
        )

        self.logger.debug("추적 리소스 조회")
        resources = list_tracked_resources(
            self.client,
            opts.subscription_id,
            predicate,
            table=opts.arg_table,
            authorization_scope_filter=opts.arg_authorization_scope_filter,
            page_size=settings.ARG_PAGE_SIZE,
            cancel=cancel,
            logger=self.logger,
        )

        errors = ErrorSet()
        if opts.recursive:
            self.logger.debug("하위 리소스 조회")
            crawled = self._crawler.crawl(resources, cancel=cancel)
            resources = crawled.resources
            errors.extend(crawled.errors)

        if not opts.include_managed:
            resources = self._remove_managed(resources)

        if opts.include_resource_group:
            resources = self._prepend_resource_groups(resources, cancel)

        if opts.extension_resource_types:
            self.logger.debug("확장 리소스 조회")
            extended = self._extension_resolver.resolve(resources, cancel=cancel)
            resources = extended.resources
            errors.extend(extended.errors)

        final = ResourceSet(resources).sorted()
        self.logger.info(f"조회 완료: {len(final)}개 리소스, {len(errors)}개 에러")
        return ListResult(resources=final, errors=errors.sorted())

    def _remove_managed(self, resources: list[Resource]) -> list[Resource]:
        kept: list[Resource] = []
        for res in resources:
            owner = managed_by(res.properties)
            if owner:
                self.logger.debug(f"관리되는 리소스 제외: {res.id} (managedBy={owner})")
                continue
            kept.append(res)
        return kept

    def _prepend_resource_groups(self, resources: list[Resource], cancel: CancelToken | None) -> list[Resource]:
        """리소스 그룹을 한 번씩 조회하여 목록 앞에 추가 (이미 있는 그룹은 조회하지 않음)"""
        present = {r.key for r in resources if r.id.is_resource_group}
        groups: dict[str, Resource] = {}

        for res in resources:
            root = res.id.root_scope()
            if not root.is_resource_group:
                continue
            if root.key in groups or root.key in present:
                continue

            check_cancelled(cancel)
            self.logger.debug(f"리소스 그룹 조회: {root.name}")
            doc = self.client.get_resource_group(root.name)
            try:
                group = Resource.from_document(doc)
            except ValueError as e:
                raise APICallError(f"ResourceGroups.get({root.name})", error_message=str(e), cause=e) from e
            groups[root.key] = group

        ordered = sorted(groups.values(), key=lambda r: str(r.id))
        return ordered + resources


def new_lister(
    options: ListOptions,
    credential: TokenCredential | None,
    cloud: str | CloudConfig = settings.DEFAULT_ENVIRONMENT,
    schema_file: str | Path | None = None,
) -> Lister:
    """Azure SDK 클라이언트와 내장(또는 지정) 스키마로 Lister 생성

    Args:
        options: 조회 옵션
        credential: Azure 자격 증명
        cloud: 클라우드 환경 이름 또는 CloudConfig
        schema_file: ARM 스키마 스냅샷 파일 (None이면 내장 스냅샷)

    Raises:
        ConfigurationError: 자격 증명/구독 누락, 알 수 없는 환경
        SchemaError: 스키마 스냅샷 오류
    """
    if credential is None:
        raise ConfigurationError("credential", "자격 증명이 지정되지 않았습니다")
    if not options.subscription_id:
        raise ConfigurationError("subscription_id", "구독 ID가 지정되지 않았습니다")

    cloud_config = get_cloud(cloud) if isinstance(cloud, str) else cloud
    schema_tree = load_schema_tree(schema_file)
    client = AzureClient.create(
        options.subscription_id,
        credential,
        cloud_config,
        max_pool_connections=options.resolved_parallelism(),
    )
    return Lister(options, client, schema_tree)
