import asyncio
import logging
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, patch

import pytest
from mcp import types
from mcp.shared.exceptions import McpError

from pixabay_mcp.config import PixabaySettings
from pixabay_mcp.server import BANNER, create_server, main, serve
from pixabay_mcp.tools import PixabayToolService, SEARCH_IMAGES, SEARCH_VIDEOS
from pixabay_mcp.tests.helpers import TEST_API_KEY, make_response, image_hit, search_payload


def _server(api_key=TEST_API_KEY):
    return create_server(PixabayToolService(PixabaySettings(api_key=api_key)))


def _call(server, name, arguments):
    handler = server.request_handlers[types.CallToolRequest]
    request = types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name=name, arguments=arguments),
    )
    return asyncio.run(handler(request)).root


def test_list_tools_advertises_both_searches():
    handler = _server().request_handlers[types.ListToolsRequest]
    result = asyncio.run(handler(types.ListToolsRequest(method="tools/list"))).root
    tools = {tool.name: tool for tool in result.tools}
    assert set(tools) == {SEARCH_IMAGES, SEARCH_VIDEOS}
    assert tools[SEARCH_IMAGES].inputSchema["properties"]["image_type"]["enum"] == ["all", "photo", "illustration", "vector"]
    assert tools[SEARCH_VIDEOS].inputSchema["properties"]["video_type"]["enum"] == ["all", "film", "animation"]


@patch("pixabay_mcp.pixabay_client.requests.get")
def test_call_tool_returns_text_content(mock_get):
    mock_get.return_value = make_response(search_payload([image_hit()]))
    result = _call(_server(), SEARCH_IMAGES, {"query": "cats"})
    assert result.isError is False
    assert result.content[0].type == "text"
    assert result.content[0].text.startswith('Found 1 images for "cats":')


@patch("pixabay_mcp.pixabay_client.requests.get")
def test_upstream_failure_is_error_flagged_result(mock_get):
    mock_get.return_value = make_response(status_code=400, reason="Bad Request", text="[ERROR 400] Invalid or missing API key")
    result = _call(_server(), SEARCH_VIDEOS, {"query": "cats"})
    assert result.isError is True
    assert "Please check if the API key is valid" in result.content[0].text


@pytest.mark.parametrize("api_key, name, arguments, code", [
    (TEST_API_KEY, "search_pixabay_music", {"query": "jazz"}, types.METHOD_NOT_FOUND),
    (None, SEARCH_IMAGES, {"query": "cats"}, types.INTERNAL_ERROR),
    (TEST_API_KEY, SEARCH_IMAGES, {"query": "cats", "per_page": 500}, types.INVALID_PARAMS),
    (TEST_API_KEY, SEARCH_VIDEOS, {"query": "cats", "min_duration": 9, "max_duration": 3}, types.INVALID_PARAMS),
])
@patch("pixabay_mcp.pixabay_client.requests.get")
def test_rejections_are_protocol_errors(mock_get, api_key, name, arguments, code):
    with pytest.raises(McpError) as exc_info:
        _call(_server(api_key), name, arguments)
    assert exc_info.value.error.code == code
    mock_get.assert_not_called()


@patch("pixabay_mcp.server.asyncio.run", side_effect=KeyboardInterrupt)
@patch("pixabay_mcp.server.load_dotenv")
def test_main_exits_cleanly_on_interrupt(mock_load_dotenv, mock_run):
    main()
    mock_run.assert_called_once()
    mock_run.call_args[0][0].close()


@patch.dict("os.environ", {"PIXABAY_TIMEOUT": "not-a-number"}, clear=True)
@patch("pixabay_mcp.server.asyncio.run")
@patch("pixabay_mcp.server.load_dotenv")
def test_main_exits_non_zero_on_startup_failure(mock_load_dotenv, mock_run):
    with pytest.raises(SystemExit) as exc_info:
        main()
    assert exc_info.value.code == 1
    mock_run.assert_not_called()


@asynccontextmanager
async def _fake_stdio():
    yield (None, None)


@patch("pixabay_mcp.server.Server.run", new_callable=AsyncMock)
@patch("pixabay_mcp.server.stdio_server", _fake_stdio)
def test_banner_printed_to_stderr_even_when_logging_is_quiet(mock_run, capsys, caplog):
    caplog.set_level(logging.WARNING)
    asyncio.run(serve(PixabaySettings(api_key=TEST_API_KEY)))
    captured = capsys.readouterr()
    assert BANNER in captured.err
    assert BANNER not in captured.out
    mock_run.assert_awaited_once()
