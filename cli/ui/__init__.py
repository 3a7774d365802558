# cli/ui - 콘솔 출력 컴포넌트 (rich)
"""
콘솔 출력 모듈

CLI 전용 UI 컴포넌트 (stderr 콘솔, 로깅 설정)
"""

from .console import (
    LOG_LEVELS,
    SYMBOL_ERROR,
    SYMBOL_WARNING,
    console,
    get_console,
    print_error,
    print_warning,
    setup_logging,
)

__all__ = [
    "LOG_LEVELS",
    "SYMBOL_ERROR",
    "SYMBOL_WARNING",
    "console",
    "get_console",
    "print_error",
    "print_warning",
    "setup_logging",
]
