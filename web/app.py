import logging
import os

from fastapi import FastAPI, HTTPException

from ovrstat.api_client import BlizzardAPIClient
from ovrstat.errors import (
    InvalidPlatformError,
    MalformedDocumentError,
    PlayerNotFoundError,
    UpstreamUnavailableError,
)
from ovrstat.scraper import BrowserDocumentFetcher, OverwatchScraper
from ovrstat.selectors import PLATFORM_PC

logger = logging.getLogger(__name__)


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


def create_scraper() -> OverwatchScraper:
    """Build the scraper from OVRSTAT_* environment settings."""
    timeout = float(os.environ.get("OVRSTAT_TIMEOUT_SECONDS", "20"))
    client = BlizzardAPIClient(timeout_seconds=timeout)
    if _env_flag("OVRSTAT_USE_BROWSER"):
        logger.info("Fetching career pages with Playwright")
        return OverwatchScraper(
            client=client,
            document_fetcher=BrowserDocumentFetcher(timeout_ms=int(timeout * 1000)),
        )
    return OverwatchScraper(client=client)


app = FastAPI(title="ovrstat")
scraper = create_scraper()


@app.get("/healthz")
def healthz():
    return {"status": "ok"}


@app.get("/stats/{platform}/{tag}")
def player_stats(platform: str, tag: str):
    """Full stats lookup for one player; tags use '-' in place of '#'."""
    try:
        ps = scraper.stats(tag, platform)
    except PlayerNotFoundError:
        raise HTTPException(status_code=404, detail="Player not found")
    except InvalidPlatformError as e:
        raise HTTPException(status_code=400, detail=f"Invalid platform: {str(e)}")
    except UpstreamUnavailableError as e:
        raise HTTPException(status_code=502, detail=f"Failed to retrieve player stats: {str(e)}")
    except MalformedDocumentError as e:
        raise HTTPException(status_code=500, detail=f"Failed to parse player stats: {str(e)}")
    return ps.to_dict()


@app.get("/stats/{tag}")
def player_stats_default_platform(tag: str):
    return player_stats(PLATFORM_PC, tag)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=os.environ.get("OVRSTAT_HOST", "127.0.0.1"),
        port=int(os.environ.get("OVRSTAT_PORT", "5000")),
    )
