"""Page query and content extraction tool implementations."""

from typing import TYPE_CHECKING

from ..registry import ToolRegistry
from .schemas import PageQueryInput, PaginatedExtractionInput, WindowInput

if TYPE_CHECKING:
    from ..context import GatewayContext

import logging
logger = logging.getLogger(__name__)


def register(registry: ToolRegistry, context: "GatewayContext") -> None:
    backend = context.backend

    @registry.tool("pageQuery", "Query the current page content using AI", PageQueryInput)
    async def page_query(args: PageQueryInput):
        logger.info(f"pageQuery request {args.prompt!r}")
        response = await backend.windows.page_query(args.session_id, args.window_id, args.prompt)
        logger.debug(f"pageQuery response {response!r}")
        return response

    @registry.tool("paginatedExtraction", "Extract data from a paginated list", PaginatedExtractionInput)
    async def paginated_extraction(args: PaginatedExtractionInput):
        logger.info(f"paginatedExtraction request {args.prompt!r}")
        return await backend.windows.paginated_extraction(
            args.session_id,
            args.window_id,
            args.prompt,
            output_schema=args.output_schema,
        )

    @registry.tool("scrape", "Scrape/extract content from the browser window", WindowInput)
    async def scrape(args: WindowInput):
        logger.info(f"scrape request {args.session_id} {args.window_id}")
        return await backend.windows.scrape_content(args.session_id, args.window_id)


__all__ = ["register"]
