import json

from dockhand.utils.exceptions import (
    ConfigurationError,
    DecodeError,
    ErrorCategory,
    InvocationError,
    InvocationTimeoutError,
    ValidationError,
    classify_exception,
    format_tool_error,
    sanitize_error_message,
)


def test_messages_are_prefixed_with_operation():
    assert InvocationError("docker_run", "boom").message == "[docker_run] boom"
    assert ValidationError("image is required", field="image", operation="op").details == {
        "field": "image",
        "operation": "op",
    }
    assert ConfigurationError("missing").message == "missing"


def test_timeout_is_an_invocation_error():
    err = InvocationTimeoutError("sandbox.execute", 60)
    assert isinstance(err, InvocationError)
    assert err.code == "TIMEOUT"
    assert err.category is ErrorCategory.TIMEOUT
    assert err.details["timeout_seconds"] == 60


def test_to_dict_and_str():
    err = DecodeError("docker_list_images", "Expecting value")
    assert str(err) == "[DECODE_ERROR] [docker_list_images] Error parsing JSON output: Expecting value"
    assert err.to_dict()["category"] == "decode"


def test_classify_exception():
    assert classify_exception(ValidationError("x")) == ("VALIDATION_ERROR", ErrorCategory.VALIDATION)
    assert classify_exception(json.JSONDecodeError("bad", "x", 0))[0] == "JSON_PARSE_ERROR"
    assert classify_exception(ValueError("x"))[1] is ErrorCategory.VALIDATION
    assert classify_exception(RuntimeError("x")) == ("INTERNAL_ERROR", ErrorCategory.FATAL)


def test_sanitize_error_message():
    assert "hunter2" not in sanitize_error_message("docker login r -u bob -p hunter2 --email e")
    assert "abc123" not in sanitize_error_message("password=abc123 rejected")
    assert sanitize_error_message("plain failure") == "plain failure"


def test_format_tool_error():
    assert format_tool_error("docker_run", InvocationError("docker_run", "boom")) == "Error: [docker_run] boom"
    assert format_tool_error("docker_run", RuntimeError("odd")) == "Error: [docker_run] odd"
    detailed = format_tool_error("docker_run", InvocationTimeoutError("docker_run", 5), include_details=True)
    assert detailed.startswith("Error [TIMEOUT] (timeout):")
