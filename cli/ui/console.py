"""
cli/ui/console.py - Rich 콘솔 유틸리티

진단 메시지(로그, 에러)는 stderr 콘솔로 출력하여
stdout의 리소스 목록과 섞이지 않도록 합니다.
"""

import logging
import os
import platform

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from azlist.config import LogConfig

# azure-core/azure-identity 노이즈 로그 제한
NOISY_LOGGERS = (
    "azure.core.pipeline.policies.http_logging_policy",
    "azure.identity",
    "urllib3.connectionpool",
)

# CLI --log-level 값 -> logging 레벨
LOG_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def get_console() -> Console:
    """stderr용 Rich Console 인스턴스를 생성하고 반환합니다."""
    is_windows = platform.system().lower() == "windows"

    return Console(
        stderr=True,
        color_system="auto",
        highlight=False,
        soft_wrap=True,
        markup=True,
        emoji=not is_windows,
    )


# 전역 콘솔 인스턴스
console = get_console()


def setup_logging(level: str | None = None) -> logging.Logger:
    """루트 logger에 Rich 핸들러 설정

    level이 없으면 LOG_LEVEL 환경변수(LogConfig), 그것도 없으면 WARNING만 출력합니다.
    메시지/시간 포맷은 LOG_FORMAT, LOG_DATE_FORMAT 환경변수를 따릅니다.
    여러 번 호출해도 핸들러는 하나만 유지됩니다.

    Args:
        level: "error" | "warn" | "info" | "debug"

    Returns:
        설정된 루트 logger
    """
    config = LogConfig.from_env()
    if level:
        numeric_level = LOG_LEVELS[level.lower()]
    elif os.environ.get("LOG_LEVEL"):
        numeric_level = logging.getLevelName(config.level)
        if not isinstance(numeric_level, int):
            numeric_level = logging.WARNING
    else:
        numeric_level = logging.WARNING

    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_azlist_handler", False):
            root.removeHandler(handler)

    handler = RichHandler(
        console=console,
        rich_tracebacks=True,
        show_path=False,
        log_time_format=config.date_format,
    )
    handler.setFormatter(logging.Formatter(config.format, datefmt=config.date_format))
    handler._azlist_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(numeric_level)

    noisy_level = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)

    return root


# =============================================================================
# 표준 출력 스타일
# =============================================================================

SYMBOL_ERROR = "✗"  # 에러
SYMBOL_WARNING = "!"  # 경고


def print_error(message: str) -> None:
    """에러 메시지 출력 (빨간색 X)

    Args:
        message: 출력할 메시지
    """
    console.print(f"[red]{SYMBOL_ERROR} {escape(message)}[/red]")


def print_warning(message: str) -> None:
    """경고 메시지 출력 (노란색 경고)"""
    console.print(f"[yellow]{SYMBOL_WARNING} {escape(message)}[/yellow]")
