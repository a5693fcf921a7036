import logging
from typing import Any, Dict, Literal, Optional, Type, TypeVar

from pydantic import BaseModel, Field, StrictInt, StrictStr, ValidationError, model_validator
from pydantic_core import PydanticCustomError

from pixabay_mcp.errors import InvalidParamsError

logger = logging.getLogger(__name__)

ImageType = Literal["all", "photo", "illustration", "vector"]
VideoType = Literal["all", "film", "animation"]
Orientation = Literal["all", "horizontal", "vertical"]

MIN_PER_PAGE = 3
MAX_PER_PAGE = 200
DEFAULT_PER_PAGE = 20


# Tool arguments. These models are also the source of the advertised input schemas.
class SearchRequest(BaseModel):
    query: StrictStr = Field(description="Search query terms")
    orientation: Orientation = Field(default="all", description="Filter results by orientation")
    per_page: StrictInt = Field(
        default=DEFAULT_PER_PAGE,
        ge=MIN_PER_PAGE,
        le=MAX_PER_PAGE,
        description=f"Number of results per page ({MIN_PER_PAGE}-{MAX_PER_PAGE})",
    )


class ImageSearchRequest(SearchRequest):
    image_type: ImageType = Field(default="all", description="Filter results by image type")


class VideoSearchRequest(SearchRequest):
    video_type: VideoType = Field(default="all", description="Filter results by video type")
    min_duration: Optional[StrictInt] = Field(default=None, ge=0, description="Minimum video duration in seconds")
    max_duration: Optional[StrictInt] = Field(default=None, ge=0, description="Maximum video duration in seconds")

    @model_validator(mode='after')
    def check_duration_bounds(self):
        if self.min_duration is not None and self.max_duration is not None and self.max_duration < self.min_duration:
            raise PydanticCustomError(
                "duration_order",
                "max_duration ({max_duration}) must be greater than or equal to min_duration ({min_duration})",
                {"min_duration": self.min_duration, "max_duration": self.max_duration},
            )
        return self


# Order in which fields are checked; the first failing one is reported.
FIELD_ORDER = ("query", "image_type", "video_type", "orientation", "per_page", "min_duration", "max_duration")

RequestT = TypeVar("RequestT", bound=SearchRequest)


def _error_field(error: Dict[str, Any]) -> Optional[str]:
    if error["loc"]:
        return str(error["loc"][0])
    if error["type"] == "duration_order":
        return "max_duration"
    return None


def _error_rank(error: Dict[str, Any]) -> int:
    field = _error_field(error)
    return FIELD_ORDER.index(field) if field in FIELD_ORDER else len(FIELD_ORDER)


def validate_arguments(model: Type[RequestT], arguments: Any) -> RequestT:
    """
    Turns a loosely-typed argument bag into a validated request.

    Raises:
        InvalidParamsError: naming the first offending field and the rule it broke.
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, dict):
        raise InvalidParamsError("Invalid search arguments: expected an object of named fields.")

    try:
        return model.model_validate(arguments)
    except ValidationError as e:
        errors = sorted(e.errors(), key=_error_rank)
        logger.warning(f"Rejected {model.__name__} arguments: {[(_error_field(err), err['msg']) for err in errors]}")
        first = errors[0]
        field = _error_field(first)
        if field:
            message = f'Invalid parameter "{field}": {first["msg"]}'
        else:
            message = f"Invalid search arguments: {first['msg']}"
        raise InvalidParamsError(message, field=field) from None
