# src/refdata/tests/test_logging/test_filters.py
import logging

from refdata.core.logging.filters import (
    REDACTED,
    RedactFilter,
    RequestIdFilter,
    get_request_id,
    reset_request_id,
    set_request_id,
)


def make_record(**extra):
    # name, level, pathname, lineno, msg, args, exc_info
    record = logging.LogRecord("test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    record.__dict__.update(extra)
    return record


def test_request_id_filter_defaults_to_dash():
    token = set_request_id(None)
    try:
        rec = make_record()
        assert RequestIdFilter().filter(rec) is True
        assert rec.request_id == "-"  # fallback sentinel
    finally:
        reset_request_id(token)


def test_request_id_filter_uses_contextvar():
    token = set_request_id("abc-123")
    try:
        rec = make_record()
        RequestIdFilter().filter(rec)
        assert rec.request_id == "abc-123"
    finally:
        reset_request_id(token)
    assert get_request_id() is None


def test_explicit_extra_request_id_wins():
    token = set_request_id("from-context")
    try:
        rec = make_record(request_id="explicit")
        RequestIdFilter().filter(rec)
        assert rec.request_id == "explicit"
    finally:
        reset_request_id(token)


def test_redact_top_level_sensitive_extra():
    rec = make_record(password="hunter2", model="User")
    assert RedactFilter().filter(rec) is True
    assert rec.password == REDACTED
    assert rec.model == "User"


def test_redact_one_level_inside_dict_extras():
    rec = make_record(payload={"email": "a@b.test", "Password": "hunter2", "token": "t"})
    RedactFilter().filter(rec)
    assert rec.payload == {"email": "a@b.test", "Password": REDACTED, "token": REDACTED}


def test_redact_leaves_message_args_alone():
    rec = logging.LogRecord("test", logging.INFO, __file__, 1, "%(password)s", ({"password": "x"},), None)
    RedactFilter().filter(rec)
    assert rec.getMessage() == "x"
