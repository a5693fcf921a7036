import math
from typing import Optional

from pixabay_mcp.models.pixabay_models import (
    PixabayImageSearchResponse, PixabayImageHit,
    PixabayVideoSearchResponse, PixabayVideoHit
)

NO_IMAGE_URL = "no image URL available"
NO_VIDEO_URL = "no video URL available"

# Large renditions are left out of the summaries on purpose.
VIDEO_URL_PREFERENCE = ("medium", "small", "tiny")


def select_video_url(hit: PixabayVideoHit) -> Optional[str]:
    """First populated URL among the medium, small and tiny renditions."""
    if hit.videos is None:
        return None
    for size in VIDEO_URL_PREFERENCE:
        detail = getattr(hit.videos, size)
        if detail is not None and detail.url:
            return detail.url
    return None


def format_image_hit(hit: PixabayImageHit) -> str:
    return f"- {hit.tags} (User: {hit.user}): {hit.webformatURL or NO_IMAGE_URL}"


def format_video_hit(hit: PixabayVideoHit) -> str:
    duration = math.floor(hit.duration)
    return f"- {hit.tags} (User: {hit.user}, Duration: {duration}s): {select_video_url(hit) or NO_VIDEO_URL}"


def format_image_results(response: PixabayImageSearchResponse, query: str) -> str:
    if not response.hits:
        return f'No images found for query: "{query}"'
    lines = [format_image_hit(hit) for hit in response.hits]
    return f'Found {response.totalHits} images for "{query}":\n' + "\n".join(lines)


def format_video_results(response: PixabayVideoSearchResponse, query: str) -> str:
    if not response.hits:
        return f'No videos found for query: "{query}"'
    lines = [format_video_hit(hit) for hit in response.hits]
    return f'Found {response.totalHits} videos for "{query}":\n' + "\n".join(lines)
