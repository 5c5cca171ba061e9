from __future__ import annotations

import pytest

from flavorwheel.utils.error_sanitizer import GENERIC_MESSAGES, sanitize_error_message


def test_safe_client_message_passes_through():
    message = "scope 'personal' requires scope filter 'user_id'"

    assert sanitize_error_message(message, 400) == message


@pytest.mark.parametrize(
    "message",
    [
        "failed in /srv/app/flavorwheel/wheel/layout.py",
        'File "service.py", line 88, in get_or_generate',
        "Traceback (most recent call last): boom",
        "flavorwheel.wheel.aggregator raised",
        "pydantic_core error",
        "C:\\app\\layout.py exploded",
    ],
)
def test_sensitive_messages_replaced(message):
    assert sanitize_error_message(message, 400) == GENERIC_MESSAGES[400]


def test_server_errors_always_generic():
    assert sanitize_error_message("harmless", 500) == GENERIC_MESSAGES[500]
    assert sanitize_error_message("harmless", 503) == GENERIC_MESSAGES[503]


def test_long_messages_replaced():
    assert sanitize_error_message("x" * 500, 400) == GENERIC_MESSAGES[400]


def test_empty_message_and_unknown_status():
    assert sanitize_error_message("", 404) == GENERIC_MESSAGES[404]
    assert sanitize_error_message("", 418) == "An error occurred."
