import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import json
import logging
from decimal import Decimal
import pytest
from checkout.observability import JSONFormatter, setup_logging


def make_record(**extra):
    record = logging.LogRecord(
        name="checkout.cart",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="unknown coupon ignored",
        args=(),
        exc_info=None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_basic_fields():
    data = json.loads(JSONFormatter().format(make_record()))
    assert data["level"] == "WARNING"
    assert data["logger"] == "checkout.cart"
    assert data["message"] == "unknown coupon ignored"
    assert "timestamp" in data


def test_json_formatter_extra_fields():
    """Поля product/coupon/quantity/error попадают в JSON, если заданы"""
    data = json.loads(
        JSONFormatter().format(
            make_record(coupon="WINTER", quantity=3, error=Decimal("1.5"))
        )
    )
    assert data["coupon"] == "WINTER"
    assert data["quantity"] == 3
    assert data["error"] == "1.5"
    assert "product" not in data


@pytest.fixture
def restore_root():
    handlers, level = list(logging.root.handlers), logging.root.level
    yield
    logging.root.handlers[:] = handlers
    logging.root.setLevel(level)


@pytest.mark.parametrize("fmt, formatter", [("json", JSONFormatter), ("text", logging.Formatter)])
def test_setup_logging(restore_root, fmt, formatter):
    handler = setup_logging("debug", fmt)
    assert handler in logging.root.handlers
    assert isinstance(handler.formatter, formatter)
    assert logging.root.level == logging.DEBUG
