"""Element interaction tool implementations (click, scroll, type, file input)."""

from typing import TYPE_CHECKING

from ..envelope import error_result
from ..registry import ToolRegistry
from .schemas import ClickInput, FileInputInput, ScrollInput, TypeInput

if TYPE_CHECKING:
    from ..context import GatewayContext

import logging
logger = logging.getLogger(__name__)


def register(registry: ToolRegistry, context: "GatewayContext") -> None:
    backend = context.backend

    @registry.tool("click", "Click on an element in the browser window using AI description", ClickInput)
    async def click(args: ClickInput):
        coordinate = args.coordinate.model_dump() if args.coordinate else None
        logger.info(f"click request {args.element_description!r} {coordinate}")
        return await backend.windows.click(
            args.session_id,
            args.window_id,
            args.element_description,
            coordinate=coordinate,
        )

    @registry.tool("scroll", "Scroll in the browser window", ScrollInput)
    async def scroll(args: ScrollInput):
        logger.info(f"scroll request {args.element_description!r}")
        return await backend.windows.scroll(
            args.session_id,
            args.window_id,
            scroll_to_element=args.element_description,
        )

    @registry.tool("type", "Type text into an element in the browser window", TypeInput)
    async def type_text(args: TypeInput):
        # Typed text can be a password; only its length is logged
        logger.info(f"type request ({len(args.text)} chars) {args.element_description!r}")
        return await backend.windows.type(
            args.session_id,
            args.window_id,
            args.text,
            element_description=args.element_description,
        )

    @registry.tool("fileInput", "Upload a file to a file input element in the browser window", FileInputInput)
    async def file_input(args: FileInputInput):
        logger.info(f"fileInput request {args.file_path} -> {args.element_description!r}")
        try:
            response = await backend.windows.upload_file_and_select_input(
                args.session_id,
                args.window_id,
                args.element_description,
                args.file_path,
            )
        except Exception as e:
            logger.warning(f"fileInput failed: {e!r}")
            return error_result(f"File upload failed: {e}")

        if response.errors:
            return response
        data = response.data if isinstance(response.data, dict) else {}
        return {
            "fileId": data.get("fileId"),
            "success": True,
            "message": "File uploaded successfully",
        }


__all__ = ["register"]
