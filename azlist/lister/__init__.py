"""
azlist/lister - 리소스 목록 조회 코어

주요 구성 요소:
- list_tracked_resources: ARG seed 쿼리 (페이지 처리)
- ChildResourceCrawler: 스키마 기반 너비 우선 하위 리소스 크롤러
- ExtensionResolver: 확장 리소스 단일 단계 조회
- Lister: 전체 단계 오케스트레이터
"""

from .crawler import ChildResourceCrawler
from .extension import ExtensionResolver, ExtensionResource
from .filters import BUILTIN_FILTERS, ROLE_ASSIGNMENT_TYPE, extension_from_type, role_assignment_scope_filter
from .lister import Lister, ListOptions, new_lister
from .listing import ResourceFilter, list_resource
from .seed import build_query, list_tracked_resources, validate_authorization_scope_filter

__all__: list[str] = [
    # 오케스트레이터
    "Lister",
    "ListOptions",
    "new_lister",
    # 단계
    "list_tracked_resources",
    "build_query",
    "validate_authorization_scope_filter",
    "ChildResourceCrawler",
    "ExtensionResolver",
    "ExtensionResource",
    "list_resource",
    # 필터
    "ResourceFilter",
    "BUILTIN_FILTERS",
    "ROLE_ASSIGNMENT_TYPE",
    "extension_from_type",
    "role_assignment_scope_filter",
]
