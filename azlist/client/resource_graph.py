"""
azlist/client/resource_graph.py - Azure Resource Graph seed 쿼리 어댑터

azure-mgmt-resourcegraph의 ResourceGraphClient.resources()를 호출하여
objectArray 형식의 결과 한 페이지를 SeedPage로 반환합니다.
"""

from __future__ import annotations

import logging
from typing import Any

from azure.core.credentials import TokenCredential
from azure.core.exceptions import AzureError, HttpResponseError
from azure.mgmt.resourcegraph import ResourceGraphClient
from azure.mgmt.resourcegraph.models import QueryRequest, QueryRequestOptions

from azlist.exceptions import SeedQueryError

from .base import SeedPage

logger = logging.getLogger(__name__)

RESULT_FORMAT_OBJECT_ARRAY = "objectArray"


class ResourceGraphSeedClient:
    """ARG 쿼리 클라이언트 (SeedQueryClient 구현)"""

    def __init__(self, credential: TokenCredential, base_url: str, **client_kwargs: Any):
        """초기화

        Args:
            credential: Azure 자격 증명
            base_url: ARM 엔드포인트
            **client_kwargs: ResourceGraphClient에 전달할 파이프라인 설정
        """
        self._client = ResourceGraphClient(credential, base_url=base_url, **client_kwargs)

    def query(
        self,
        query: str,
        subscriptions: list[str],
        top: int,
        skip: int | None = None,
        skip_token: str | None = None,
        authorization_scope_filter: str | None = None,
    ) -> SeedPage:
        """쿼리 한 페이지 실행

        Raises:
            SeedQueryError: 호출 실패 또는 응답 형식 오류
        """
        options = QueryRequestOptions(
            result_format=RESULT_FORMAT_OBJECT_ARRAY,
            top=top,
            skip=skip,
            skip_token=skip_token,
            authorization_scope_filter=authorization_scope_filter,
        )
        request = QueryRequest(subscriptions=subscriptions, query=query, options=options)

        logger.debug(f"ARG 쿼리: skip={skip}, skip_token={'있음' if skip_token else '없음'}")
        try:
            response = self._client.resources(request)
        except HttpResponseError as e:
            raise SeedQueryError(query, e.message or str(e), status_code=e.status_code, cause=e) from e
        except AzureError as e:
            raise SeedQueryError(query, str(e), cause=e) from e

        data = response.data if response.data is not None else []
        if not isinstance(data, list):
            raise SeedQueryError(query, f"objectArray 형식이 아닌 응답입니다: {type(data).__name__}")

        return SeedPage(
            items=data,
            total_records=response.total_records or 0,
            count=response.count or 0,
            skip_token=response.skip_token,
        )
