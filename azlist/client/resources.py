"""
azlist/client/resources.py - ARM 하위 리소스 목록 조회 어댑터

azure-mgmt-resource의 ResourceManagementClient 파이프라인(인증, 재시도,
User-Agent)을 재사용하여 임의의 부모 리소스 하위 타입 목록을 조회합니다.

    GET {parent_id}/{type_path}?api-version={api_version}

다음 페이지는 응답의 nextLink(절대 URL)를 그대로 요청합니다.
"""

from __future__ import annotations

import logging
from typing import Any

from azure.core.credentials import TokenCredential
from azure.core.exceptions import AzureError, HttpResponseError
from azure.core.rest import HttpRequest
from azure.mgmt.resource import ResourceManagementClient

from azlist.exceptions import APICallError

from .base import ChildPage

logger = logging.getLogger(__name__)

_JSON_HEADERS = {"Accept": "application/json"}


class ResourceListingClient:
    """ARM 목록 조회 클라이언트 (ListingClient 구현)"""

    def __init__(
        self,
        credential: TokenCredential,
        subscription_id: str,
        base_url: str,
        **client_kwargs: Any,
    ):
        self._client = ResourceManagementClient(credential, subscription_id, base_url=base_url, **client_kwargs)

    def list_children(
        self,
        parent_id: str,
        type_path: str,
        api_version: str,
        next_link: str | None = None,
    ) -> ChildPage:
        """하위 리소스 한 페이지 조회

        Args:
            parent_id: 부모 리소스 ID
            type_path: 부모 기준 상대 타입 경로 (예: "subnets", "providers/Microsoft.Authorization/roleAssignments")
            api_version: API 버전
            next_link: 이전 페이지의 nextLink (첫 페이지는 None)

        Raises:
            APICallError: HTTP 실패 또는 응답 본문 파싱 실패
        """
        operation = f"GET {parent_id}/{type_path}"
        if next_link:
            request = HttpRequest("GET", next_link, headers=_JSON_HEADERS)
        else:
            request = HttpRequest(
                "GET",
                f"{parent_id}/{type_path}",
                params={"api-version": api_version},
                headers=_JSON_HEADERS,
            )

        try:
            response = self._client.send_request(request)
            response.raise_for_status()
        except HttpResponseError as e:
            raise APICallError.from_http_error(operation, e) from e
        except AzureError as e:
            raise APICallError(operation, error_message=str(e), cause=e) from e

        try:
            body = response.json()
        except ValueError as e:
            raise APICallError(
                operation, status_code=response.status_code, error_message="응답 본문 파싱 실패", cause=e
            ) from e

        if not isinstance(body, dict):
            raise APICallError(operation, status_code=response.status_code, error_message="응답 본문이 객체가 아닙니다")

        items = body.get("value") or []
        if not isinstance(items, list):
            raise APICallError(operation, status_code=response.status_code, error_message="value 필드가 배열이 아닙니다")

        return ChildPage(items=items, next_link=body.get("nextLink") or None)

    def get_resource_group(self, name: str) -> dict[str, Any]:
        """리소스 그룹 조회 (ARM 응답 형식의 dict)

        Raises:
            APICallError: 조회 실패
        """
        operation = f"ResourceGroups.get({name})"
        try:
            group = self._client.resource_groups.get(name)
        except HttpResponseError as e:
            raise APICallError.from_http_error(operation, e) from e
        except AzureError as e:
            raise APICallError(operation, error_message=str(e), cause=e) from e
        return group.serialize(keep_readonly=True)
