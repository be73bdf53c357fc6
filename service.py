import json
import logging
from dataclasses import dataclass, field
from typing import Optional

from cache import ExpiringCache
from config import MAX_BEST_STORIES, RAW_STORY_LIMIT, Settings
from errors import InvalidCountError, UpstreamUnavailableError
from hn_client import HackerNewsClient
from stories import Story, normalize, parse_item, parse_story_ids, sort_by_score

logger = logging.getLogger(__name__)

BEST_STORY_IDS_KEY = "best_story_ids"
INVALID_COUNT_MESSAGE = f"Count must be between 1 and {MAX_BEST_STORIES}"


def story_key(story_id: int) -> str:
    return f"story:{story_id}"


def parse_count(raw: str) -> int:
    try:
        return int(raw)
    except ValueError as e:
        raise InvalidCountError(INVALID_COUNT_MESSAGE) from e


@dataclass
class BestStories:
    stories: list[Story] = field(default_factory=list)
    story_ids: list[int] = field(default_factory=list)


class StoryService:
    """Fetches best stories through the shared cache and orders them by score."""

    def __init__(self, client: HackerNewsClient, cache: ExpiringCache, settings: Settings):
        self.client = client
        self.cache = cache
        self.settings = settings

    async def best_story_ids(self) -> Optional[list[int]]:
        return await self.cache.get_or_create(
            BEST_STORY_IDS_KEY, self.settings.best_ids_ttl_seconds, self._fetch_best_story_ids
        )

    async def _fetch_best_story_ids(self) -> Optional[list[int]]:
        text = await self.client.best_stories_text()
        logger.debug(f"Received best story IDs: {text}")
        return parse_story_ids(text)

    async def story(self, story_id: int) -> Optional[Story]:
        async def produce() -> Optional[Story]:
            return await self._fetch_story(story_id)

        return await self.cache.get_or_create(story_key(story_id), self.settings.story_ttl_seconds, produce)

    async def _fetch_story(self, story_id: int) -> Optional[Story]:
        text = await self.client.item_text(story_id)
        logger.debug(f"Received story {story_id} details: {text}")
        item = parse_item(text)
        if item is None:
            logger.warning(f"Item {story_id} is not a story. Type: None")
            return None
        return normalize(item)

    async def best_stories(self, count: int) -> BestStories:
        if count <= 0 or count > MAX_BEST_STORIES:
            raise InvalidCountError(INVALID_COUNT_MESSAGE)

        ids = await self.best_story_ids()
        logger.info(f"Retrieved {len(ids) if ids else 0} story IDs")
        if not ids:
            raise UpstreamUnavailableError("Unable to retrieve story IDs from Hacker News API")

        story_ids = ids[:count]
        stories = []
        for story_id in story_ids:
            story = await self.story(story_id)
            if story is not None:
                stories.append(story)

        logger.info(f"Retrieved {len(stories)} stories")
        return BestStories(stories=sort_by_score(stories), story_ids=story_ids)

    async def raw_best_stories(self) -> Optional[list[dict]]:
        """Top items as the upstream returns them, minus ``kids``, best score first.

        Nothing here is cached and nothing is recovered: network, JSON and
        missing or non-integer ``score`` failures reach the caller as is.
        """
        story_ids = json.loads(await self.client.best_stories_text())
        if not story_ids:
            return None

        scored = []
        for story_id in story_ids[:RAW_STORY_LIMIT]:
            item = json.loads(await self.client.item_text(story_id))
            if item is None:
                continue
            item.pop("kids", None)
            score = item["score"]
            if not isinstance(score, int) or isinstance(score, bool):
                raise TypeError(f"Item {story_id} score is not an integer: {score!r}")
            scored.append((item, score))

        scored.sort(key=lambda pair: pair[1], reverse=True)
        return [item for item, _ in scored]
