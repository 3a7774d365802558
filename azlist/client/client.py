"""
azlist/client/client.py - Azure 클라이언트 묶음 생성 헬퍼

재시도 + 타임아웃 + 연결 풀이 설정된 파이프라인으로
ARG 클라이언트와 ARM 목록 조회 클라이언트를 함께 생성합니다.

Example:
    from azlist.client import AzureClient, build_credential, get_cloud

    cloud = get_cloud("public")
    client = AzureClient.create(subscription_id, build_credential(cloud), cloud, max_pool_connections=20)
    page = client.list_children(rg_id, "providers/Microsoft.Network/virtualNetworks", "2023-09-01")
"""

from __future__ import annotations

from typing import Any

import requests
from azure.core.credentials import TokenCredential
from azure.core.pipeline.transport import RequestsTransport
from requests.adapters import HTTPAdapter

from azlist.config import settings

from .base import ChildPage, SeedPage
from .cloud import CloudConfig
from .resource_graph import ResourceGraphSeedClient
from .resources import ResourceListingClient

# 기본 파이프라인 설정
DEFAULT_RETRY_TOTAL = 5
DEFAULT_CONNECT_TIMEOUT = 10  # 초
DEFAULT_READ_TIMEOUT = 30  # 초
DEFAULT_MAX_POOL_CONNECTIONS = 10  # 병렬 수 이상 권장


def get_client_kwargs(
    cloud: CloudConfig,
    retry_total: int = DEFAULT_RETRY_TOTAL,
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT,
    read_timeout: int = DEFAULT_READ_TIMEOUT,
    max_pool_connections: int = DEFAULT_MAX_POOL_CONNECTIONS,
) -> dict[str, Any]:
    """azure-mgmt 클라이언트 공통 파이프라인 인자 생성

    Args:
        cloud: 클라우드 환경 (토큰 스코프 결정)
        retry_total: 최대 재시도 횟수
        connect_timeout: 연결 타임아웃 (초)
        read_timeout: 읽기 타임아웃 (초)
        max_pool_connections: HTTP 연결 풀 크기

    Returns:
        클라이언트 생성자에 전달할 kwargs
    """
    session = requests.Session()
    adapter = HTTPAdapter(pool_connections=max_pool_connections, pool_maxsize=max_pool_connections)
    session.mount("https://", adapter)
    session.mount("http://", adapter)

    # 명시적 transport를 넘기면 클라이언트 생성자의 타임아웃 인자는 무시됨
    transport = RequestsTransport(
        session=session,
        session_owner=False,
        connection_timeout=connect_timeout,
        read_timeout=read_timeout,
    )

    return {
        "credential_scopes": [cloud.scope],
        "user_agent": settings.APPLICATION_ID,
        "retry_total": retry_total,
        "transport": transport,
    }


class AzureClient:
    """SeedQueryClient + ListingClient 구현 묶음"""

    def __init__(self, seed: ResourceGraphSeedClient, listing: ResourceListingClient):
        self.seed = seed
        self.listing = listing

    @classmethod
    def create(
        cls,
        subscription_id: str,
        credential: TokenCredential,
        cloud: CloudConfig,
        max_pool_connections: int = DEFAULT_MAX_POOL_CONNECTIONS,
    ) -> AzureClient:
        """구독 대상 클라이언트 생성

        Args:
            subscription_id: 대상 구독 ID
            credential: Azure 자격 증명
            cloud: 클라우드 환경
            max_pool_connections: HTTP 연결 풀 크기 (병렬 수 이상 권장)
        """
        pool_size = max(max_pool_connections, DEFAULT_MAX_POOL_CONNECTIONS)
        seed = ResourceGraphSeedClient(
            credential,
            base_url=cloud.resource_manager,
            **get_client_kwargs(cloud, max_pool_connections=pool_size),
        )
        listing = ResourceListingClient(
            credential,
            subscription_id,
            base_url=cloud.resource_manager,
            **get_client_kwargs(cloud, max_pool_connections=pool_size),
        )
        return cls(seed, listing)

    def query(
        self,
        query: str,
        subscriptions: list[str],
        top: int,
        skip: int | None = None,
        skip_token: str | None = None,
        authorization_scope_filter: str | None = None,
    ) -> SeedPage:
        return self.seed.query(
            query,
            subscriptions,
            top,
            skip=skip,
            skip_token=skip_token,
            authorization_scope_filter=authorization_scope_filter,
        )

    def list_children(
        self,
        parent_id: str,
        type_path: str,
        api_version: str,
        next_link: str | None = None,
    ) -> ChildPage:
        return self.listing.list_children(parent_id, type_path, api_version, next_link=next_link)

    def get_resource_group(self, name: str) -> dict[str, Any]:
        return self.listing.get_resource_group(name)
