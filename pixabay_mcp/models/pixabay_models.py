from typing import List, Optional, Dict, Any
from pydantic import BaseModel, field_validator

# Outbound query parameters
class PixabayBaseSearchParams(BaseModel):
    key: str
    q: str
    orientation: Optional[str] = None # all, horizontal, vertical. Default: all
    safesearch: bool = True
    per_page: Optional[int] = None # 3-200. Default: 20

    def to_query_params(self) -> Dict[str, Any]:
        """Query string values as Pixabay expects them (lowercase booleans, unset fields omitted)."""
        params = {}
        for name, value in self.model_dump(exclude_none=True).items():
            params[name] = str(value).lower() if isinstance(value, bool) else value
        return params

class PixabayImageSearchParams(PixabayBaseSearchParams):
    image_type: Optional[str] = None # all, photo, illustration, vector. Default: all

class PixabayVideoSearchParams(PixabayBaseSearchParams):
    video_type: Optional[str] = None # all, film, animation. Default: all
    min_duration: Optional[int] = None # seconds
    max_duration: Optional[int] = None # seconds


def _empty_str_to_none(v):
    if v == "":
        return None
    return v

def _none_to_empty_str(v):
    if v is None:
        return ""
    return v


# Response Models for Images
class PixabayImageHit(BaseModel):
    id: int
    tags: str = ""
    user: str = ""
    pageURL: Optional[str] = None
    previewURL: Optional[str] = None
    webformatURL: Optional[str] = None
    largeImageURL: Optional[str] = None
    views: int = 0
    downloads: int = 0
    likes: int = 0

    @field_validator("tags", "user", mode='before')
    @classmethod
    def null_text_to_empty(cls, v):
        return _none_to_empty_str(v)

    @field_validator("pageURL", "previewURL", "webformatURL", "largeImageURL", mode='before')
    @classmethod
    def empty_str_to_none(cls, v):
        return _empty_str_to_none(v)


class PixabayImageSearchResponse(BaseModel):
    total: int = 0
    totalHits: int = 0
    hits: List[PixabayImageHit]


# Response Models for Videos
class PixabayVideoFileDetail(BaseModel):
    url: Optional[str] = None
    width: int = 0
    height: int = 0
    size: int = 0
    thumbnail: Optional[str] = None

    @field_validator("url", "thumbnail", mode='before')
    @classmethod
    def empty_str_to_none(cls, v):
        return _empty_str_to_none(v)

class PixabayVideoVersions(BaseModel):
    large: Optional[PixabayVideoFileDetail] = None
    medium: Optional[PixabayVideoFileDetail] = None
    small: Optional[PixabayVideoFileDetail] = None
    tiny: Optional[PixabayVideoFileDetail] = None

class PixabayVideoHit(BaseModel):
    id: int
    tags: str = ""
    user: str = ""
    pageURL: Optional[str] = None
    duration: float = 0 # in seconds, may be fractional
    videos: Optional[PixabayVideoVersions] = None
    views: int = 0
    downloads: int = 0
    likes: int = 0

    @field_validator("tags", "user", mode='before')
    @classmethod
    def null_text_to_empty(cls, v):
        return _none_to_empty_str(v)

class PixabayVideoSearchResponse(BaseModel):
    total: int = 0
    totalHits: int = 0
    hits: List[PixabayVideoHit]
