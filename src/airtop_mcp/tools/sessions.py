"""Session lifecycle tool implementations."""

from typing import TYPE_CHECKING, Any, Optional

from ..registry import ToolRegistry
from .schemas import CreateSessionInput, SessionInput

if TYPE_CHECKING:
    from ..context import GatewayContext

import logging
logger = logging.getLogger(__name__)


def _session_id_of(data: Any) -> Optional[str]:
    if isinstance(data, dict):
        session_id = data.get("id")
        return str(session_id) if session_id else None
    return None


def register(registry: ToolRegistry, context: "GatewayContext") -> None:
    backend = context.backend
    sessions = context.sessions

    async def create_session(args: CreateSessionInput):
        """
        Create a session, optionally configured.

        When a profile name is given and the backend confirmed the session, the
        session is tracked and the backend is asked to save the profile on
        termination. A failure to schedule the save is logged, not reported.
        """
        configuration = args.configuration
        logger.info(f"createSession request {configuration.loggable() if configuration else {}}")
        if configuration is not None and configuration.base_profile_id and not configuration.profile_name:
            logger.warning("baseProfileId is deprecated; use profileName instead")

        response = await backend.sessions.create(configuration.to_backend() if configuration else None)
        if response.errors:
            return response

        session_id = _session_id_of(response.data)
        profile_name = configuration.profile_name if configuration else None
        if session_id and profile_name:
            sessions.track(session_id, profile_name)
            try:
                saved = await backend.sessions.save_profile_on_termination(session_id, profile_name)
                if saved.errors:
                    logger.warning(f"Failed to configure profile saving: {saved.errors!r}")
                else:
                    logger.info(f"Profile saving configured for session {session_id} with profile {profile_name}")
            except Exception as e:
                # Don't fail the session creation, just log the warning
                logger.warning(f"Failed to configure profile saving: {e}")

        return response

    async def terminate_session(args: SessionInput):
        # Released before the backend call so the entry is gone even if it fails
        entry = sessions.release(args.session_id)
        logger.info(f"terminateSession request {args.session_id}")

        response = await backend.sessions.terminate(args.session_id)
        if response is not None and response.errors:
            return response

        message = "Session terminated successfully"
        if entry is not None and entry.profile_name:
            message = f"{message}. Profile '{entry.profile_name}' will be saved."
        return message

    registry.register(
        "createSession",
        "Create a new Airtop browser session, optionally with configuration "
        "(profileName, proxy, solveCaptcha, timeoutMinutes, extensionIds)",
        create_session,
        CreateSessionInput,
    )
    registry.register(
        "createSessionWithOptions",
        "Create a new Airtop browser session with custom configuration options",
        create_session,
        CreateSessionInput,
    )
    registry.register(
        "terminateSession",
        "Terminate an Airtop browser session",
        terminate_session,
        SessionInput,
    )


__all__ = ["register"]
