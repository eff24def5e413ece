import logging

import pytest
from registry_auth.utils.logging import (
    CustomJSONFormatter,
    ctx_var_request_id,
    make_logger,
)


@pytest.mark.unit
@pytest.mark.parametrize("name", [None, "", 42])
def test_make_logger_requires_a_name(name):
    with pytest.raises(ValueError):
        make_logger(name)


@pytest.mark.unit
def test_make_logger_does_not_stack_handlers():
    first = make_logger("registry_auth.tests.logging")
    second = make_logger("registry_auth.tests.logging")

    assert first is second
    assert len(second.handlers) == 1
    assert second.level == logging.INFO


@pytest.mark.unit
def test_json_records_carry_request_id():
    record = logging.LogRecord(
        name="registry_auth.gate",
        level=logging.INFO,
        pathname="gate_service.py",
        lineno=10,
        msg="credential accepted",
        args=None,
        exc_info=None,
    )
    token = ctx_var_request_id.set("abc123")
    try:
        payload = CustomJSONFormatter().json_record(record.getMessage(), {}, record)
    finally:
        ctx_var_request_id.reset(token)

    assert payload["request_id"] == "abc123"
    assert payload["level"] == "INFO"
    assert payload["name"] == "registry_auth.gate"
    assert payload["message"] == "credential accepted"
