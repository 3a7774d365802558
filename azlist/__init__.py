# azlist/__init__.py
"""
azlist - Azure 리소스 목록 조회 라이브러리

Azure Resource Graph(ARG) where 조건으로 리소스를 조회한 뒤,
ARM 스키마 계층을 따라 ARG에 인덱싱되지 않는 하위(child) 리소스까지
재귀적으로 확장하여 중복 제거된 리소스 목록과 부분 실패 목록을 반환합니다.

아키텍처:
    azlist/
    ├── schema/         # ARM 스키마 스냅샷 로드 및 계층 트리 구성
    ├── parallel/       # 동시 실행 수 제한 작업 풀, 취소 토큰
    ├── client/         # Azure 네트워크 어댑터 (ARG, ARM, 인증)
    ├── lister/         # seed 쿼리, 하위 리소스 크롤러, 확장 리소스, 오케스트레이터
    ├── types/          # 속성 문서(JSON) 타입과 접근 헬퍼
    ├── resource_id.py  # ARM 리소스 ID 파싱
    ├── models.py       # Resource, ListError, ListResult
    ├── config.py       # 중앙 설정 관리
    └── exceptions.py   # 통합 예외 계층

Usage:
    from azlist import ListOptions, new_lister

    lister = new_lister(ListOptions(subscription_id=sub, recursive=True), credential)
    result = lister.list("type =~ 'Microsoft.Network/virtualNetworks'")

    for res in result.resources:
        print(res.id)
    for err in result.errors:
        print(err)
"""

import logging

from azlist.exceptions import (
    APICallError,
    AzListError,
    ConfigurationError,
    OperationCancelledError,
    SchemaError,
    SeedQueryError,
    TaskPoolError,
)
from azlist.lister import (
    ExtensionResource,
    Lister,
    ListOptions,
    new_lister,
)
from azlist.models import ListError, ListResult, Resource
from azlist.parallel import CancelToken
from azlist.resource_id import ResourceId, parse_resource_id

# 라이브러리는 애플리케이션이 핸들러를 설정하기 전까지 아무것도 출력하지 않음
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__: list[str] = [
    # 조회
    "Lister",
    "ListOptions",
    "ExtensionResource",
    "new_lister",
    # 모델
    "Resource",
    "ResourceId",
    "ListError",
    "ListResult",
    "parse_resource_id",
    # 취소
    "CancelToken",
    # 예외
    "AzListError",
    "ConfigurationError",
    "SchemaError",
    "APICallError",
    "SeedQueryError",
    "TaskPoolError",
    "OperationCancelledError",
]
