"""Tool catalog exercised against a fake backend through the registry."""

import json

import pytest

from airtop_mcp.backend import ApiResponse

EXPECTED_TOOLS = {
    "createSession",
    "createSessionWithOptions",
    "createWindow",
    "pageQuery",
    "terminateSession",
    "getWindowInfo",
    "paginatedExtraction",
    "click",
    "scroll",
    "type",
    "scrape",
    "fileInput",
    "monitorForCondition",
}


def _invoke(event_loop, context, name, arguments=None):
    return event_loop.run_until_complete(context.tools.invoke(name, arguments))


def test_catalog_is_complete(gateway_context):
    assert set(gateway_context.tools.names()) == EXPECTED_TOOLS


def test_session_window_lifecycle(event_loop, gateway_context, fake_backend):
    created = _invoke(event_loop, gateway_context, "createSession", {})
    assert created.is_error is False
    assert json.loads(created.text)["id"] == "sess-1"
    assert fake_backend.called("sessions.create") == [((None,), {})]

    window = _invoke(event_loop, gateway_context, "createWindow", {"sessionId": "sess-1", "url": "https://example.com"})
    assert json.loads(window.text) == {"windowId": "win-1"}
    assert fake_backend.called("windows.create") == [(("sess-1", "https://example.com"), {})]

    terminated = _invoke(event_loop, gateway_context, "terminateSession", {"sessionId": "sess-1"})
    assert terminated.is_error is False
    assert terminated.text == "Session terminated successfully"
    assert fake_backend.called("sessions.terminate") == [(("sess-1",), {})]


def test_profile_session_is_tracked_and_saved(event_loop, gateway_context, fake_backend):
    args = {"configuration": {"profileName": "work", "solveCaptcha": True}}
    created = _invoke(event_loop, gateway_context, "createSession", args)

    assert created.is_error is False
    assert fake_backend.called("sessions.create") == [(({"profileName": "work", "solveCaptcha": True},), {})]
    assert fake_backend.called("sessions.save_profile_on_termination") == [(("sess-1", "work"), {})]
    assert gateway_context.sessions.lookup("sess-1").profile_name == "work"

    terminated = _invoke(event_loop, gateway_context, "terminateSession", {"sessionId": "sess-1"})
    assert terminated.text == "Session terminated successfully. Profile 'work' will be saved."
    assert "sess-1" not in gateway_context.sessions


def test_profile_save_failure_does_not_fail_creation(event_loop, gateway_context, fake_backend):
    fake_backend.responses["sessions.save_profile_on_termination"] = RuntimeError("save unavailable")

    created = _invoke(event_loop, gateway_context, "createSession", {"configuration": {"profileName": "work"}})
    assert created.is_error is False
    assert "sess-1" in gateway_context.sessions


def test_backend_error_on_create_is_normalized(event_loop, gateway_context, fake_backend):
    fake_backend.responses["sessions.create"] = ApiResponse(errors=[{"message": "insufficient credits"}])

    created = _invoke(event_loop, gateway_context, "createSession", {"configuration": {"profileName": "work"}})
    assert created.is_error is True
    assert created.text == "Errors from the API:\ninsufficient credits"
    assert len(gateway_context.sessions) == 0
    assert fake_backend.called("sessions.save_profile_on_termination") == []


def test_terminate_releases_entry_even_when_backend_fails(event_loop, gateway_context, fake_backend):
    gateway_context.sessions.track("sess-9", "work")
    fake_backend.responses["sessions.terminate"] = RuntimeError("network down")

    result = _invoke(event_loop, gateway_context, "terminateSession", {"sessionId": "sess-9"})
    assert result.is_error is True
    assert result.text.startswith("Internal error during terminateSession: network down")
    assert "sess-9" not in gateway_context.sessions


def test_missing_required_argument_skips_backend(event_loop, gateway_context, fake_backend):
    result = _invoke(event_loop, gateway_context, "pageQuery", {"sessionId": "s", "windowId": "w"})
    assert result.is_error is True
    assert "prompt" in result.text
    assert fake_backend.calls == []


@pytest.mark.parametrize(
    "name, arguments, key, expected_args, expected_kwargs",
    [
        ("getWindowInfo", {"sessionId": "s", "windowId": "w"}, "windows.get_window_info", ("s", "w"), {}),
        ("pageQuery", {"sessionId": "s", "windowId": "w", "prompt": "p"}, "windows.page_query", ("s", "w", "p"), {}),
        (
            "paginatedExtraction",
            {"sessionId": "s", "windowId": "w", "prompt": "p", "outputSchema": "{}"},
            "windows.paginated_extraction",
            ("s", "w", "p"),
            {"output_schema": "{}"},
        ),
        (
            "click",
            {"sessionId": "s", "windowId": "w", "elementDescription": "the login button"},
            "windows.click",
            ("s", "w", "the login button"),
            {"coordinate": None},
        ),
        (
            "click",
            {"sessionId": "s", "windowId": "w", "elementDescription": "pixel", "coordinate": {"x": 1, "y": 2}},
            "windows.click",
            ("s", "w", "pixel"),
            {"coordinate": {"x": 1.0, "y": 2.0}},
        ),
        ("scroll", {"sessionId": "s", "windowId": "w"}, "windows.scroll", ("s", "w"), {"scroll_to_element": None}),
        (
            "type",
            {"sessionId": "s", "windowId": "w", "text": "hello", "elementDescription": "search box"},
            "windows.type",
            ("s", "w", "hello"),
            {"element_description": "search box"},
        ),
        ("scrape", {"sessionId": "s", "windowId": "w"}, "windows.scrape_content", ("s", "w"), {}),
        (
            "monitorForCondition",
            {"sessionId": "s", "windowId": "w", "condition": "page loaded"},
            "windows.monitor",
            ("s", "w", "page loaded"),
            {"time_threshold_seconds": 30},
        ),
        (
            "monitorForCondition",
            {"sessionId": "s", "windowId": "w", "condition": "page loaded", "timeoutSeconds": 5},
            "windows.monitor",
            ("s", "w", "page loaded"),
            {"time_threshold_seconds": 5},
        ),
    ],
)
def test_window_tools_forward_to_backend(
    event_loop, gateway_context, fake_backend, name, arguments, key, expected_args, expected_kwargs
):
    result = _invoke(event_loop, gateway_context, name, arguments)
    assert result.is_error is False
    assert result.text == '{"ok": true}'
    assert fake_backend.called(key) == [(expected_args, expected_kwargs)]


def test_file_input_success(event_loop, gateway_context, fake_backend):
    fake_backend.responses["windows.upload_file_and_select_input"] = ApiResponse(data={"fileId": "file-7"})
    arguments = {"sessionId": "s", "windowId": "w", "elementDescription": "upload button", "filePath": "/tmp/cv.pdf"}

    result = _invoke(event_loop, gateway_context, "fileInput", arguments)
    assert result.is_error is False
    assert json.loads(result.text) == {"fileId": "file-7", "success": True, "message": "File uploaded successfully"}
    assert fake_backend.called("windows.upload_file_and_select_input") == [
        (("s", "w", "upload button", "/tmp/cv.pdf"), {})
    ]


def test_file_input_failure_is_reported(event_loop, gateway_context, fake_backend):
    fake_backend.responses["windows.upload_file_and_select_input"] = FileNotFoundError("no such file: /tmp/missing")
    arguments = {"sessionId": "s", "windowId": "w", "elementDescription": "upload", "filePath": "/tmp/missing"}

    result = _invoke(event_loop, gateway_context, "fileInput", arguments)
    assert result.is_error is True
    assert result.text == "File upload failed: no such file: /tmp/missing"


def test_fractional_timeouts_are_accepted(event_loop, gateway_context, fake_backend):
    monitored = _invoke(
        event_loop,
        gateway_context,
        "monitorForCondition",
        {"sessionId": "s", "windowId": "w", "condition": "page loaded", "timeoutSeconds": 2.5},
    )
    assert monitored.is_error is False
    assert fake_backend.called("windows.monitor") == [(("s", "w", "page loaded"), {"time_threshold_seconds": 2.5})]

    created = _invoke(event_loop, gateway_context, "createSession", {"configuration": {"timeoutMinutes": 1.5}})
    assert created.is_error is False
    assert fake_backend.called("sessions.create") == [(({"timeoutMinutes": 1.5},), {})]
