"""
azlist/schema/loader.py - ARM 스키마 스냅샷 로드

스냅샷은 "리소스 타입 경로 -> 정렬된 API 버전 목록" 형태의 JSON 객체입니다.
경로를 지정하지 않으면 패키지에 포함된 armschema.json을 사용합니다.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from azlist.config import DEFAULT_SCHEMA_FILE
from azlist.exceptions import SchemaError

from .tree import SchemaTree, build_schema_tree

logger = logging.getLogger(__name__)


def load_schema_snapshot(path: str | Path | None = None) -> dict[str, list[str]]:
    """스냅샷 JSON 파일 로드 및 형식 검증

    Args:
        path: 스냅샷 파일 경로 (None이면 내장 스냅샷)

    Returns:
        리소스 타입 경로 -> API 버전 목록

    Raises:
        SchemaError: 파일을 읽을 수 없거나 형식이 잘못된 경우
    """
    schema_path = Path(path) if path is not None else DEFAULT_SCHEMA_FILE

    try:
        raw = json.loads(schema_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise SchemaError(f"스키마 파일을 읽을 수 없습니다: {schema_path}", cause=e) from e
    except json.JSONDecodeError as e:
        raise SchemaError(f"스키마 파일이 올바른 JSON이 아닙니다: {schema_path}", cause=e) from e

    if not isinstance(raw, dict):
        raise SchemaError(f"스키마 최상위 값은 객체여야 합니다: {schema_path}")

    for rt, versions in raw.items():
        if not isinstance(versions, list) or not all(isinstance(v, str) for v in versions):
            raise SchemaError(f"API 버전 목록은 문자열 배열이어야 합니다: {rt}", resource_type=rt)
        if not versions:
            raise SchemaError(f"API 버전 목록이 비어 있습니다: {rt}", resource_type=rt)

    logger.debug(f"스키마 스냅샷 로드: {schema_path} ({len(raw)}개 타입)")
    return raw


def load_schema_tree(path: str | Path | None = None) -> SchemaTree:
    """스냅샷 로드 후 스키마 트리 구성"""
    return build_schema_tree(load_schema_snapshot(path))
