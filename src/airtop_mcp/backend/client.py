"""
Async client for the Airtop REST API.

Only the calls the tool catalog needs are implemented. Every call returns an
ApiResponse mirroring Airtop's ``{data, errors, warnings, meta}`` envelope, so
backend-reported failures travel as data and are normalized by the gateway.
Transport failures and non-success statuses without an error collection raise.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import anyio
import httpx

from ..constants import DEFAULT_API_BASE_URL, DEFAULT_API_TIMEOUT_SECS, SERVER_NAME, SERVER_VERSION
from ..exceptions import BackendError

import logging
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApiResponse:
    data: Any = None
    errors: Optional[List[Any]] = None
    warnings: Optional[List[Any]] = None
    meta: Optional[Dict[str, Any]] = None

    @classmethod
    def from_body(cls, body: Any) -> "ApiResponse":
        if isinstance(body, dict) and ({"data", "errors", "warnings", "meta"} & body.keys()):
            return cls(
                data=body.get("data"),
                errors=body.get("errors"),
                warnings=body.get("warnings"),
                meta=body.get("meta"),
            )
        return cls(data=body)


def _segment(value: str) -> str:
    return quote(str(value), safe="")


def _window_path(session_id: str, window_id: str, action: str = "") -> str:
    path = f"/sessions/{_segment(session_id)}/windows/{_segment(window_id)}"
    return f"{path}/{action}" if action else path


def _error_message(response: httpx.Response, body: Any) -> str:
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return response.reason_phrase or "request failed"


class SessionsResource:
    def __init__(self, client: "AirtopClient"):
        self._client = client

    async def create(self, configuration: Optional[Dict[str, Any]] = None) -> ApiResponse:
        payload = {"configuration": configuration} if configuration else {}
        return await self._client.request("POST", "/sessions", json=payload)

    async def terminate(self, session_id: str) -> ApiResponse:
        return await self._client.request("DELETE", f"/sessions/{_segment(session_id)}")

    async def save_profile_on_termination(self, session_id: str, profile_name: str) -> ApiResponse:
        return await self._client.request(
            "PUT",
            f"/sessions/{_segment(session_id)}/save-profile-on-termination/{_segment(profile_name)}",
        )


class WindowsResource:
    def __init__(self, client: "AirtopClient"):
        self._client = client

    async def create(self, session_id: str, url: str) -> ApiResponse:
        return await self._client.request(
            "POST", f"/sessions/{_segment(session_id)}/windows", json={"url": url}
        )

    async def get_window_info(self, session_id: str, window_id: str) -> ApiResponse:
        return await self._client.request("GET", _window_path(session_id, window_id))

    async def page_query(self, session_id: str, window_id: str, prompt: str) -> ApiResponse:
        return await self._client.request(
            "POST", _window_path(session_id, window_id, "page-query"), json={"prompt": prompt}
        )

    async def paginated_extraction(
        self,
        session_id: str,
        window_id: str,
        prompt: str,
        output_schema: Optional[str] = None,
    ) -> ApiResponse:
        payload: Dict[str, Any] = {"prompt": prompt}
        if output_schema is not None:
            payload["configuration"] = {"outputSchema": output_schema}
        return await self._client.request(
            "POST", _window_path(session_id, window_id, "paginated-extraction"), json=payload
        )

    async def click(
        self,
        session_id: str,
        window_id: str,
        element_description: str,
        coordinate: Optional[Dict[str, float]] = None,
    ) -> ApiResponse:
        payload: Dict[str, Any] = {"elementDescription": element_description}
        if coordinate is not None:
            payload["coordinate"] = coordinate
        return await self._client.request(
            "POST", _window_path(session_id, window_id, "click"), json=payload
        )

    async def scroll(
        self,
        session_id: str,
        window_id: str,
        scroll_to_element: Optional[str] = None,
    ) -> ApiResponse:
        payload = {"scrollToElement": scroll_to_element} if scroll_to_element else {}
        return await self._client.request(
            "POST", _window_path(session_id, window_id, "scroll"), json=payload
        )

    async def type(
        self,
        session_id: str,
        window_id: str,
        text: str,
        element_description: Optional[str] = None,
    ) -> ApiResponse:
        payload: Dict[str, Any] = {"text": text}
        if element_description:
            payload["elementDescription"] = element_description
        return await self._client.request(
            "POST", _window_path(session_id, window_id, "type"), json=payload
        )

    async def scrape_content(self, session_id: str, window_id: str) -> ApiResponse:
        return await self._client.request(
            "POST", _window_path(session_id, window_id, "scrape-content"), json={}
        )

    async def monitor(
        self,
        session_id: str,
        window_id: str,
        condition: str,
        time_threshold_seconds: float,
    ) -> ApiResponse:
        payload = {"condition": condition, "timeThresholdSeconds": time_threshold_seconds}
        return await self._client.request(
            "POST", _window_path(session_id, window_id, "monitor"), json=payload
        )

    async def upload_file_and_select_input(
        self,
        session_id: str,
        window_id: str,
        element_description: str,
        upload_file_path: str,
    ) -> ApiResponse:
        """
        Upload a local file to Airtop and select it in a file input.

        Three steps: register the file with the session, PUT the bytes to the
        pre-signed upload URL, then ask the window to select it. The first
        response carrying errors is returned as-is. On success ``data`` holds
        the ``fileId`` merged with the selection result.
        """
        path = Path(upload_file_path)
        content = await anyio.Path(path).read_bytes()

        created = await self._client.request(
            "POST",
            "/files",
            json={"fileName": path.name, "fileType": "customer_upload", "sessionIds": [session_id]},
        )
        if created.errors:
            return created
        file_id = (created.data or {}).get("id")
        upload_url = (created.data or {}).get("uploadUrl")
        if not file_id or not upload_url:
            raise BackendError(200, "file registration did not return an id and upload URL", created.data)

        await self._client.upload(upload_url, content)

        selected = await self._client.request(
            "POST",
            _window_path(session_id, window_id, "file-input"),
            json={"fileId": file_id, "elementDescription": element_description},
        )
        if selected.errors:
            return selected
        data = selected.data if isinstance(selected.data, dict) else {}
        return ApiResponse(data={"fileId": file_id, **data}, warnings=selected.warnings, meta=selected.meta)


class AirtopClient:
    """
    Thin httpx wrapper exposing ``sessions`` and ``windows`` namespaces.

    Args:
        api_key: Airtop API key, sent as a bearer token
        base_url: API root, defaults to DEFAULT_API_BASE_URL
        timeout: Per-request timeout in seconds
        transport: Optional httpx transport (tests pass httpx.MockTransport)
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = DEFAULT_API_TIMEOUT_SECS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._http = httpx.AsyncClient(
            base_url=base_url,
            headers={
                "Authorization": f"Bearer {api_key}",
                "User-Agent": f"{SERVER_NAME}/{SERVER_VERSION}",
            },
            timeout=timeout,
            transport=transport,
        )
        # Pre-signed upload URLs reject extra auth headers
        self._upload_http = httpx.AsyncClient(timeout=timeout, transport=transport)
        self.sessions = SessionsResource(self)
        self.windows = WindowsResource(self)

    async def request(self, method: str, path: str, *, json: Optional[Any] = None) -> ApiResponse:
        response = await self._http.request(method, path, json=json)
        body: Any = None
        if response.content:
            try:
                body = response.json()
            except ValueError:
                body = response.text

        if response.is_success:
            return ApiResponse.from_body(body)
        if isinstance(body, dict) and body.get("errors"):
            return ApiResponse.from_body(body)
        raise BackendError(response.status_code, _error_message(response, body), body)

    async def upload(self, url: str, content: bytes) -> None:
        response = await self._upload_http.put(url, content=content)
        if not response.is_success:
            raise BackendError(response.status_code, "file upload was rejected", response.text)

    async def aclose(self) -> None:
        await self._http.aclose()
        await self._upload_http.aclose()

    async def __aenter__(self) -> "AirtopClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


__all__ = [
    "ApiResponse",
    "AirtopClient",
    "SessionsResource",
    "WindowsResource",
]
