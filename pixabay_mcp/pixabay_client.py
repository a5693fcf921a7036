import requests
import logging
from typing import Optional, Dict, Any

from pydantic import ValidationError

from pixabay_mcp.config import BASE_URL, VIDEO_URL, DEFAULT_TIMEOUT
from pixabay_mcp.errors import ConfigurationError, PixabayAPIError, redact, REDACTED
from pixabay_mcp.models.pixabay_models import (
    PixabayImageSearchParams, PixabayImageSearchResponse,
    PixabayVideoSearchParams, PixabayVideoSearchResponse
)
from pixabay_mcp.models.tool_models import ImageSearchRequest, VideoSearchRequest

logger = logging.getLogger(__name__)
# urllib3 logs full request lines, API key included, at DEBUG.
logging.getLogger("urllib3").setLevel(logging.INFO)


def build_image_search_params(api_key: str, request: ImageSearchRequest) -> PixabayImageSearchParams:
    return PixabayImageSearchParams(
        key=api_key,
        q=request.query,
        image_type=request.image_type,
        orientation=request.orientation,
        per_page=request.per_page,
        safesearch=True,
    )

def build_video_search_params(api_key: str, request: VideoSearchRequest) -> PixabayVideoSearchParams:
    # Duration bounds stay None (and are omitted) unless the caller set them.
    return PixabayVideoSearchParams(
        key=api_key,
        q=request.query,
        video_type=request.video_type,
        orientation=request.orientation,
        per_page=request.per_page,
        min_duration=request.min_duration,
        max_duration=request.max_duration,
        safesearch=True,
    )

def _loggable(params: Dict[str, Any]) -> Dict[str, Any]:
    return {k: (REDACTED if k == "key" else v) for k, v in params.items()}

def _make_api_request(url: str, params: Dict[str, Any], timeout: float = DEFAULT_TIMEOUT,
                      session: Optional[requests.Session] = None) -> Dict[str, Any]:
    """
    Makes a request to the Pixabay API and returns the JSON response.

    Raises:
        PixabayAPIError: on timeouts, connection failures, non-2xx statuses and bodies that are not JSON.
    """
    api_key = params.get("key")
    http = session or requests
    try:
        response = http.get(url, params=params, timeout=timeout)
        response.raise_for_status() # Raise an exception for bad status codes (4xx or 5xx)
    except requests.exceptions.Timeout as timeout_err:
        raise PixabayAPIError(f"Request timed out after {timeout}s") from timeout_err
    except requests.exceptions.HTTPError as http_err:
        raise PixabayAPIError.from_response(http_err.response, api_key) from http_err
    except requests.exceptions.RequestException as req_err:
        raise PixabayAPIError(f"Request failed: {redact(str(req_err), api_key)}") from req_err

    # Log rate limit headers
    logger.debug(f"X-RateLimit-Limit: {response.headers.get('X-RateLimit-Limit')}")
    logger.debug(f"X-RateLimit-Remaining: {response.headers.get('X-RateLimit-Remaining')}")
    logger.debug(f"X-RateLimit-Reset: {response.headers.get('X-RateLimit-Reset')}")
    try:
        return response.json()
    except ValueError as json_err:
        raise PixabayAPIError("Malformed response: body is not valid JSON",
                              status_code=None, status_text=getattr(response, "reason", None)) from json_err

def _parse_response(model, json_response: Dict[str, Any], api_key: str):
    try:
        return model.model_validate(json_response)
    except ValidationError as e:
        logger.debug(f"Unparseable Pixabay payload: {redact(str(json_response), api_key)}")
        raise PixabayAPIError(f"Malformed response: {e.error_count()} field error(s) in {model.__name__}") from e

def search_pixabay_images(api_key: str, search_params: PixabayImageSearchParams, timeout: float = DEFAULT_TIMEOUT,
                          session: Optional[requests.Session] = None, url: str = BASE_URL) -> PixabayImageSearchResponse:
    """
    Search Pixabay for images.

    Args:
        api_key: Your Pixabay API key.
        search_params: Parameters for the image search.
        timeout: Seconds to wait for Pixabay before giving up.
        session: Optional requests session to send the request through.
        url: Image search endpoint.

    Returns:
        The parsed PixabayImageSearchResponse.

    Raises:
        ConfigurationError: if no API key is given.
        PixabayAPIError: if the request or response parsing fails.
    """
    if not api_key:
        logger.error("Pixabay API key is missing.")
        raise ConfigurationError("Pixabay API key (PIXABAY_API_KEY) is not configured in the environment.")

    params_dict = search_params.to_query_params()
    params_dict['key'] = api_key

    logger.info(f"Searching Pixabay images with params: {_loggable(params_dict)}")
    json_response = _make_api_request(url, params_dict, timeout=timeout, session=session)
    return _parse_response(PixabayImageSearchResponse, json_response, api_key)

def search_pixabay_videos(api_key: str, search_params: PixabayVideoSearchParams, timeout: float = DEFAULT_TIMEOUT,
                          session: Optional[requests.Session] = None, url: str = VIDEO_URL) -> PixabayVideoSearchResponse:
    """
    Search Pixabay for videos.

    Args:
        api_key: Your Pixabay API key.
        search_params: Parameters for the video search.
        timeout: Seconds to wait for Pixabay before giving up.
        session: Optional requests session to send the request through.
        url: Video search endpoint.

    Returns:
        The parsed PixabayVideoSearchResponse.

    Raises:
        ConfigurationError: if no API key is given.
        PixabayAPIError: if the request or response parsing fails.
    """
    if not api_key:
        logger.error("Pixabay API key is missing.")
        raise ConfigurationError("Pixabay API key (PIXABAY_API_KEY) is not configured in the environment.")

    params_dict = search_params.to_query_params()
    params_dict['key'] = api_key

    logger.info(f"Searching Pixabay videos with params: {_loggable(params_dict)}")
    json_response = _make_api_request(url, params_dict, timeout=timeout, session=session)
    return _parse_response(PixabayVideoSearchResponse, json_response, api_key)
