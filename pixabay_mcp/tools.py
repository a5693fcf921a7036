"""
The two Pixabay search tools and the service that runs them.

An invocation goes: tool lookup -> API key check -> argument validation ->
upstream request -> summary text. Everything before the upstream request
raises a ``PixabayToolError``; anything that goes wrong talking to Pixabay
comes back as a ``ToolResult`` with ``is_error`` set.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Type

import requests
from pydantic import BaseModel

from pixabay_mcp.config import PixabaySettings
from pixabay_mcp.errors import (
    ConfigurationError, FaultKind, MethodNotFoundError, PixabayToolError,
    classify_error, describe_upstream_error, log_upstream_error, redact
)
from pixabay_mcp.formatting import format_image_results, format_video_results
from pixabay_mcp.models.tool_models import (
    SearchRequest, ImageSearchRequest, VideoSearchRequest, validate_arguments
)
from pixabay_mcp.pixabay_client import (
    build_image_search_params, build_video_search_params,
    search_pixabay_images, search_pixabay_videos
)

logger = logging.getLogger(__name__)

SEARCH_IMAGES = "search_pixabay_images"
SEARCH_VIDEOS = "search_pixabay_videos"


class ToolResult(BaseModel):
    text: str
    is_error: bool = False


@dataclass(frozen=True)
class PixabayTool:
    name: str
    description: str
    media: str # "images" or "videos", used in messages
    request_model: Type[SearchRequest]
    run: Callable[[PixabaySettings, Any, Optional[requests.Session]], str]

    def input_schema(self) -> Dict[str, Any]:
        return self.request_model.model_json_schema()


def _run_image_search(settings: PixabaySettings, request: ImageSearchRequest,
                      session: Optional[requests.Session]) -> str:
    params = build_image_search_params(settings.api_key, request)
    response = search_pixabay_images(settings.api_key, params, timeout=settings.timeout,
                                     session=session, url=settings.image_url)
    return format_image_results(response, request.query)


def _run_video_search(settings: PixabaySettings, request: VideoSearchRequest,
                      session: Optional[requests.Session]) -> str:
    params = build_video_search_params(settings.api_key, request)
    response = search_pixabay_videos(settings.api_key, params, timeout=settings.timeout,
                                     session=session, url=settings.video_url)
    return format_video_results(response, request.query)


TOOLS: Dict[str, PixabayTool] = {
    SEARCH_IMAGES: PixabayTool(
        name=SEARCH_IMAGES,
        description="Search for images on Pixabay",
        media="images",
        request_model=ImageSearchRequest,
        run=_run_image_search,
    ),
    SEARCH_VIDEOS: PixabayTool(
        name=SEARCH_VIDEOS,
        description="Search for videos on Pixabay",
        media="videos",
        request_model=VideoSearchRequest,
        run=_run_video_search,
    ),
}


def tool_definitions() -> List[Dict[str, Any]]:
    """Name, description and JSON schema of every tool, for tool discovery."""
    return [
        {"name": tool.name, "description": tool.description, "inputSchema": tool.input_schema()}
        for tool in TOOLS.values()
    ]


class PixabayToolService:
    def __init__(self, settings: PixabaySettings, session: Optional[requests.Session] = None):
        self.settings = settings
        self.session = session

    def call_tool(self, name: str, arguments: Any) -> ToolResult:
        """
        Runs one tool invocation.

        Raises:
            MethodNotFoundError: unknown tool name.
            ConfigurationError: no API key configured.
            InvalidParamsError: arguments failed validation.
        """
        try:
            tool = TOOLS.get(name)
            if tool is None:
                raise MethodNotFoundError(name)
            if not self.settings.has_api_key:
                raise ConfigurationError("Pixabay API key (PIXABAY_API_KEY) is not configured in the environment.")
            request = validate_arguments(tool.request_model, arguments)
        except PixabayToolError as e:
            logger.warning(f"{name} rejected [{classify_error(e).value}]: {e.message}")
            raise

        try:
            text = tool.run(self.settings, request, self.session)
        except Exception as e:
            kind = classify_error(e)
            if kind is FaultKind.UPSTREAM:
                log_upstream_error(e, tool.name)
                return ToolResult(text=describe_upstream_error(e), is_error=True)
            if kind is not FaultKind.UNKNOWN:
                logger.warning(f"{tool.name} rejected [{kind.value}]: {e}")
                raise
            message = redact(str(e), self.settings.api_key)
            logger.error(f"{tool.name} failed [{kind.value}]: {message}")
            return ToolResult(text=f"Failed to fetch {tool.media} from Pixabay: {message}", is_error=True)
        return ToolResult(text=text)
