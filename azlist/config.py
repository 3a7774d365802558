"""
azlist/config.py - 중앙 설정 관리

애플리케이션 전체에서 사용하는 기본값과 로깅 설정을 정의합니다.

Usage:
    from azlist.config import settings, default_parallelism

    page_size = settings.ARG_PAGE_SIZE  # 1000
    parallelism = options.parallelism or default_parallelism()
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

# =============================================================================
# 경로
# =============================================================================

PACKAGE_ROOT = Path(__file__).resolve().parent
VERSION_FILE = PACKAGE_ROOT / "version.txt"
DEFAULT_SCHEMA_FILE = PACKAGE_ROOT / "schema" / "armschema.json"


@dataclass(frozen=True)
class Settings:
    """애플리케이션 기본 설정 (불변)"""

    # CLI 기본 병렬 수 (라이브러리 기본값은 호스트 CPU 수)
    DEFAULT_PARALLELISM: int = 10

    # Azure Resource Graph
    ARG_PAGE_SIZE: int = 1000
    DEFAULT_ARG_TABLE: str = "Resources"
    ARG_AUTHORIZATION_SCOPE_FILTERS: tuple[str, ...] = (
        "AtScopeAndBelow",
        "AtScopeAndAbove",
        "AtScopeAboveAndBelow",
        "AtScopeExact",
    )

    # 클라우드 환경
    DEFAULT_ENVIRONMENT: str = "public"
    APPLICATION_ID: str = "azlist"

    # ARM_* -> AZURE_* 인증 환경변수 매핑
    ARM_ENV_ALIASES: dict[str, str] = field(
        default_factory=lambda: {
            "ARM_TENANT_ID": "AZURE_TENANT_ID",
            "ARM_CLIENT_ID": "AZURE_CLIENT_ID",
            "ARM_CLIENT_SECRET": "AZURE_CLIENT_SECRET",
            "ARM_CLIENT_CERTIFICATE_PATH": "AZURE_CLIENT_CERTIFICATE_PATH",
        }
    )


settings = Settings()


@dataclass
class LogConfig:
    """로깅 설정

    Attributes:
        level: 로그 레벨 이름
        format: 메시지 포맷 문자열 (시간/레벨 컬럼은 RichHandler가 출력)
        date_format: 시간 컬럼 포맷 문자열
    """

    level: str = "INFO"
    format: str = "%(message)s"
    date_format: str = "[%X]"

    @classmethod
    def from_env(cls) -> LogConfig:
        """LOG_LEVEL / LOG_FORMAT / LOG_DATE_FORMAT 환경변수에서 로드"""
        default = cls()
        return cls(
            level=os.environ.get("LOG_LEVEL", default.level).upper(),
            format=os.environ.get("LOG_FORMAT", default.format),
            date_format=os.environ.get("LOG_DATE_FORMAT", default.date_format),
        )


# =============================================================================
# 실행 환경
# =============================================================================


def default_parallelism() -> int:
    """호스트의 사용 가능한 병렬 수 (최소 1)"""
    return os.cpu_count() or 1


@lru_cache(maxsize=1)
def get_version() -> str:
    """version.txt에서 버전 문자열을 읽어옴"""
    try:
        return VERSION_FILE.read_text(encoding="utf-8").strip() or "0.0.0"
    except OSError:
        return "0.0.0"
