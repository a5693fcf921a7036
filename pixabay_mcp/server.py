import os
import sys
import asyncio
import logging

from dotenv import load_dotenv
from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from pixabay_mcp import __version__
from pixabay_mcp.config import PixabaySettings
from pixabay_mcp.errors import PixabayToolError
from pixabay_mcp.tools import PixabayToolService, tool_definitions

logger = logging.getLogger(__name__)

SERVER_NAME = "pixabay-mcp"
BANNER = "Pixabay MCP server running on stdio"


def create_server(service: PixabayToolService) -> Server:
    """Wires the tool service into an MCP server."""
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [types.Tool(**definition) for definition in tool_definitions()]

    async def call_tool(req: types.CallToolRequest) -> types.ServerResult:
        name = req.params.name
        logger.info(f"{name} called")
        try:
            # requests is blocking; the HTTP call is this invocation's only wait.
            result = await asyncio.to_thread(service.call_tool, name, req.params.arguments)
        except PixabayToolError as e:
            raise McpError(types.ErrorData(code=e.code, message=e.message)) from e
        return types.ServerResult(
            types.CallToolResult(
                content=[types.TextContent(type="text", text=result.text)],
                isError=result.is_error,
            )
        )

    # Registered directly so tool faults reach the client as JSON-RPC errors
    # rather than being folded into an error-flagged result.
    server.request_handlers[types.CallToolRequest] = call_tool
    return server


async def serve(settings: PixabaySettings) -> None:
    server = create_server(PixabayToolService(settings))
    async with stdio_server() as (read_stream, write_stream):
        # Banner goes to stderr whatever LOG_LEVEL is.
        print(BANNER, file=sys.stderr, flush=True)
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> None:
    load_dotenv()
    # stdout carries the protocol; logging.basicConfig writes to stderr.
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper(),
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    try:
        settings = PixabaySettings.from_env(load_dotenv_file=False)
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down Pixabay MCP server.")
    except Exception as e:
        logger.error(f"Server failed to start: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
