"""
tests/cli/test_console.py - Rich 콘솔/로깅 설정 테스트
"""

import importlib
import logging

import pytest
from rich.console import Console
from rich.logging import RichHandler

from cli.ui.console import NOISY_LOGGERS, print_error, print_warning, setup_logging

# cli.ui 패키지의 "console" 속성은 Console 인스턴스이므로 모듈은 직접 가져옴
console_module = importlib.import_module("cli.ui.console")


@pytest.fixture
def restore_root_logger():
    """루트 logger 핸들러/레벨 복원"""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    noisy_levels = {name: logging.getLogger(name).level for name in NOISY_LOGGERS}
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, noisy_level in noisy_levels.items():
        logging.getLogger(name).setLevel(noisy_level)


def _azlist_handlers(root):
    return [h for h in root.handlers if getattr(h, "_azlist_handler", False)]


class TestSetupLogging:
    """setup_logging"""

    def test_cli_level(self, restore_root_logger):
        root = setup_logging("debug")

        assert root.level == logging.DEBUG
        assert isinstance(_azlist_handlers(root)[0], RichHandler)

    def test_default_warning(self, restore_root_logger, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        assert setup_logging().level == logging.WARNING

    def test_env_level(self, restore_root_logger, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "INFO")

        assert setup_logging().level == logging.INFO

    def test_idempotent(self, restore_root_logger):
        setup_logging("info")
        root = setup_logging("warn")

        assert len(_azlist_handlers(root)) == 1
        assert root.level == logging.WARNING

    def test_env_format(self, restore_root_logger, monkeypatch):
        monkeypatch.setenv("LOG_FORMAT", "%(name)s: %(message)s")
        monkeypatch.setenv("LOG_DATE_FORMAT", "%H:%M")

        handler = _azlist_handlers(setup_logging("info"))[0]

        assert handler.formatter._fmt == "%(name)s: %(message)s"
        assert handler.formatter.datefmt == "%H:%M"

    def test_default_format(self, restore_root_logger, monkeypatch):
        monkeypatch.delenv("LOG_FORMAT", raising=False)
        monkeypatch.delenv("LOG_DATE_FORMAT", raising=False)

        handler = _azlist_handlers(setup_logging("info"))[0]

        assert handler.formatter._fmt == "%(message)s"

    def test_noisy_loggers_quiet(self, restore_root_logger):
        setup_logging("info")

        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING


class TestPrintHelpers:
    """print_error / print_warning"""

    @pytest.fixture
    def recording_console(self, monkeypatch):
        recorder = Console(record=True, width=200, color_system=None)
        monkeypatch.setattr(console_module, "console", recorder)
        return recorder

    def test_error_markup_escaped(self, recording_console):
        print_error("설정 오류 [subscription_id]: 누락")

        assert "[subscription_id]" in recording_console.export_text()

    def test_warning(self, recording_console):
        print_warning("취소되었습니다")

        assert "! 취소되었습니다" in recording_console.export_text()
