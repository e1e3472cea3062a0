import logging

import numpy as np
import pytest

from drawing_ir.logging_utils import _safe_repr, apply_debug_logging, debug_log_call
from drawing_ir.model import PathCommand

logger = logging.getLogger("drawing_ir.tests.logging")


def test_debug_log_call_logs_entry_and_exit(caplog):
    @debug_log_call(logger)
    def add(a, b=0):
        return a + b

    with caplog.at_level(logging.DEBUG, logger=logger.name):
        assert add(1, b=2) == 3

    assert "Entering" in caplog.text and "add" in caplog.text
    assert "args=[1]" in caplog.text
    assert "kwargs={b=2}" in caplog.text
    assert "Exiting" in caplog.text and "-> 3" in caplog.text


def test_debug_log_call_is_silent_above_debug(caplog):
    @debug_log_call(logger)
    def noop():
        return None

    with caplog.at_level(logging.INFO, logger=logger.name):
        noop()

    assert caplog.records == []


def test_debug_log_call_logs_and_reraises(caplog):
    @debug_log_call(logger)
    def boom():
        raise ValueError("bad path")

    with caplog.at_level(logging.DEBUG, logger=logger.name):
        with pytest.raises(ValueError):
            boom()

    assert "Exception in" in caplog.text


def public_helper():
    return "public"


def _private_helper():
    return "private"


def test_apply_debug_logging_wraps_public_module_functions():
    namespace = {
        "__name__": __name__,
        "public_helper": public_helper,
        "_private_helper": _private_helper,
        "len": len,
    }

    apply_debug_logging(namespace, logger=logger)

    assert getattr(namespace["public_helper"], "_debug_logging_wrapped", False)
    assert namespace["public_helper"]() == "public"
    assert namespace["_private_helper"] is _private_helper
    assert namespace["len"] is len


def test_safe_repr_summaries():
    assert _safe_repr(np.zeros((3, 2))).startswith("ndarray(shape=(3, 2)")
    assert _safe_repr(PathCommand('M', [1.0, 2.0])) == "M[1.0, 2.0]"
    assert _safe_repr(list(range(10))).endswith("... (10 items)]")
