import logging
import time
from contextlib import asynccontextmanager
from typing import Annotated, Callable, Optional

import httpx
from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request

from cache import ExpiringCache
from config import Settings, get_settings
from errors import InvalidCountError, UpstreamNetworkError, UpstreamParseError, UpstreamUnavailableError
from hn_client import HackerNewsClient
from service import StoryService, parse_count

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/hackernews", tags=["hackernews"])


def get_story_service(request: Request) -> StoryService:
    return request.app.state.story_service


StoryServiceDep = Annotated[StoryService, Depends(get_story_service)]


@router.get("/best/{count}")
async def get_best_stories(count: str, service: StoryServiceDep):
    logger.info(f"Received request for {count} best stories")
    try:
        result = await service.best_stories(parse_count(count))
    except InvalidCountError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except UpstreamUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e)) from e
    except UpstreamNetworkError as e:
        logger.exception("Error communicating with Hacker News API")
        raise HTTPException(status_code=503, detail="Error communicating with Hacker News API") from e
    except UpstreamParseError as e:
        logger.exception("Error parsing JSON response from Hacker News API")
        raise HTTPException(status_code=500, detail="Error parsing response from Hacker News API") from e
    except Exception as e:
        logger.exception("An unexpected error occurred while processing the request")
        raise HTTPException(status_code=500, detail=f"An unexpected error occurred: {e}") from e

    if not result.stories:
        return {"message": "No stories found", "debug_info": {"story_ids": result.story_ids}}
    return [story.to_json() for story in result.stories]


@router.get("/bestStorie")
async def get_raw_best_stories(service: StoryServiceDep):
    best_stories = await service.raw_best_stories()
    if best_stories is None:
        raise HTTPException(status_code=404, detail="No stories found")
    return {"best_stories": best_stories}


def create_app(
    settings: Optional[Settings] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    timer: Callable[[], float] = time.monotonic,
) -> FastAPI:
    settings = settings or get_settings()

    cache = ExpiringCache(timer=timer)
    client = HackerNewsClient(settings.base_url, transport=transport)
    story_service = StoryService(client, cache, settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await client.aclose()

    app = FastAPI(title="Hacker News Best Stories", lifespan=lifespan)
    app.state.settings = settings
    app.state.story_service = story_service
    app.include_router(router)
    return app


logging.basicConfig(level=get_settings().log_level)

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
