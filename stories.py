"""Hacker News item models and the mapping from raw items to stories."""

import logging
from datetime import datetime, timezone
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, TypeAdapter, ValidationError

from errors import UpstreamParseError

logger = logging.getLogger(__name__)

STORY_TYPE = "story"


class RawItem(BaseModel):
    """An item as returned by ``/item/{id}.json``."""

    model_config = ConfigDict(extra="ignore", strict=True)

    id: int = 0
    type: Optional[str] = None
    title: Optional[str] = None
    url: Optional[str] = None
    by: Optional[str] = None
    time: int = 0
    score: int = 0
    descendants: int = 0
    kids: list[int] = Field(default_factory=list)


class Story(BaseModel):
    # Declaration order is the serialized key order.
    model_config = ConfigDict(populate_by_name=True)

    title: str = "No Title"
    id: int = 0
    uri: str = "#"
    posted_by: str = Field("Unknown", alias="postedBy")
    time: str = ""
    score: int = 0
    comment_count: int = Field(0, alias="commentCount")

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True)


_story_ids_adapter = TypeAdapter(Optional[list[StrictInt]])
_item_adapter = TypeAdapter(Optional[RawItem])


def parse_story_ids(text: str) -> Optional[list[int]]:
    try:
        return _story_ids_adapter.validate_json(text)
    except ValidationError as e:
        raise UpstreamParseError(f"Invalid story id list: {e}") from e


def parse_item(text: str) -> Optional[RawItem]:
    """Decode an item body; JSON ``null`` (unknown or deleted item) gives None."""
    try:
        return _item_adapter.validate_json(text)
    except ValidationError as e:
        raise UpstreamParseError(f"Invalid item: {e}") from e


def format_time(unix_seconds: int) -> str:
    return datetime.fromtimestamp(unix_seconds, tz=timezone.utc).isoformat(timespec="seconds")


def normalize(item: RawItem) -> Optional[Story]:
    if item.type != STORY_TYPE:
        logger.warning(f"Item {item.id} is not a story. Type: {item.type}")
        return None

    return Story(
        id=item.id,
        title=item.title if item.title is not None else "No Title",
        uri=item.url if item.url is not None else "#",
        posted_by=item.by if item.by is not None else "Unknown",
        time=format_time(item.time),
        score=item.score,
        comment_count=item.descendants,
    )


def sort_by_score(stories: Iterable[Story]) -> list[Story]:
    # sorted() keeps equal scores in collection order, reverse included
    return sorted(stories, key=lambda story: story.score, reverse=True)
