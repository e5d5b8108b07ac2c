"""Input models for the tool catalog. Field aliases are the wire (camelCase) names."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from ..constants import DEFAULT_MONITOR_TIMEOUT_SECS


class SessionConfiguration(BaseModel):
    profile_name: Optional[str] = Field(
        None,
        alias="profileName",
        description="Name of profile to load/save - profile will be saved on termination",
    )
    proxy: Optional[Union[bool, Dict[str, Any]]] = Field(
        None,
        description="Proxy configuration: true to use the Airtop-provided proxy, or a custom proxy object",
    )
    solve_captcha: Optional[bool] = Field(
        None, alias="solveCaptcha", description="Automatically solve captcha challenges"
    )
    timeout_minutes: Optional[Union[int, float]] = Field(
        None, alias="timeoutMinutes", description="Session timeout in minutes (default: 10)"
    )
    extension_ids: Optional[List[str]] = Field(
        None, alias="extensionIds", description="Google Web Store extension IDs to load"
    )
    base_profile_id: Optional[str] = Field(
        None, alias="baseProfileId", description="Deprecated: Use profileName instead"
    )

    def to_backend(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

    def loggable(self) -> Dict[str, Any]:
        """Fields that are safe to log. Proxy settings can carry credentials."""
        return {
            "profileName": self.profile_name,
            "solveCaptcha": self.solve_captcha,
            "timeoutMinutes": self.timeout_minutes,
            "extensionIds": self.extension_ids,
        }


class CreateSessionInput(BaseModel):
    configuration: Optional[SessionConfiguration] = Field(
        None, description="Session configuration options"
    )


class SessionInput(BaseModel):
    session_id: str = Field(alias="sessionId", description="The session ID")


class CreateWindowInput(SessionInput):
    url: str = Field(description="URL to open in the new window")


class WindowInput(SessionInput):
    window_id: str = Field(alias="windowId", description="The window ID")


class PageQueryInput(WindowInput):
    prompt: str = Field(description="The AI prompt to use")


class PaginatedExtractionInput(WindowInput):
    prompt: str = Field(description="The AI prompt to use")
    output_schema: Optional[str] = Field(
        None, alias="outputSchema", description="JSONSchema for the output"
    )


class Coordinate(BaseModel):
    x: float
    y: float


class ClickInput(WindowInput):
    element_description: str = Field(
        alias="elementDescription",
        description="Natural language description of the element to click (e.g., 'the login button', 'submit button')",
    )
    coordinate: Optional[Coordinate] = Field(None, description="Optional exact coordinates to click")


class ScrollInput(WindowInput):
    element_description: Optional[str] = Field(
        None,
        alias="elementDescription",
        description="Element to scroll to (natural language description)",
    )


class TypeInput(WindowInput):
    text: str = Field(description="Text to type")
    element_description: Optional[str] = Field(
        None,
        alias="elementDescription",
        description="Natural language description of the element to type into (e.g., 'the search box', 'email input field')",
    )


class FileInputInput(WindowInput):
    element_description: str = Field(
        alias="elementDescription",
        description="Natural language description of the file input element (e.g., 'file upload button', 'browse files input')",
    )
    file_path: str = Field(alias="filePath", description="Local path to the file to upload")


class MonitorInput(WindowInput):
    condition: str = Field(
        description="Natural language description of the condition to monitor for (e.g., 'wait for page to load', 'wait for login to complete')",
    )
    timeout_seconds: Union[int, float] = Field(
        DEFAULT_MONITOR_TIMEOUT_SECS,
        alias="timeoutSeconds",
        description="Timeout in seconds (default: 30)",
    )


__all__ = [
    "SessionConfiguration",
    "CreateSessionInput",
    "SessionInput",
    "CreateWindowInput",
    "WindowInput",
    "PageQueryInput",
    "PaginatedExtractionInput",
    "Coordinate",
    "ClickInput",
    "ScrollInput",
    "TypeInput",
    "FileInputInput",
    "MonitorInput",
]
