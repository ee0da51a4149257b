import logging

import pytest

from apicula.logger import TRACE, BracketFormatter, init_logger


@pytest.fixture
def restore_root():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(level, msg, args=()):
    return logging.LogRecord("apicula", level, __file__, 1, msg, args, None)


def test_warning_uses_warn_label():
    text = BracketFormatter().format(_record(logging.WARNING, "hello %s", ("world",)))
    assert text == "[WARN] hello world"


def test_info_label_and_message():
    text = BracketFormatter().format(_record(logging.INFO, "abc"))
    assert text.startswith("[INFO] ")
    assert text.endswith("abc")


def test_color_wraps_text():
    plain = BracketFormatter(use_color=False).format(_record(logging.ERROR, "x"))
    colored = BracketFormatter(use_color=True).format(_record(logging.ERROR, "x"))
    assert plain in colored
    assert colored.startswith("\x1b[32m")
    assert colored.endswith("\x1b[0m")


@pytest.mark.parametrize(
    "verbosity, level",
    [(0, logging.INFO), (1, logging.DEBUG), (2, TRACE), (7, TRACE)],
)
def test_init_logger_levels(restore_root, verbosity, level):
    init_logger(verbosity)
    assert restore_root.level == level


def test_init_logger_replaces_own_handler(restore_root):
    first = init_logger(0)
    second = init_logger(0)
    assert second in restore_root.handlers
    assert first not in restore_root.handlers
    assert isinstance(second.formatter, BracketFormatter)