"""HTTP entry point: ``GET /catalogProducts?startUrl=<absolute URL>``.

Run with ``uvicorn catalog_scraper.api:app``.
"""

import logging
from typing import Iterator

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from .config import settings
from .errors import BAD_REQUEST_MESSAGE, INTERNAL_ERROR_MESSAGE, BadRequest
from .fetch import Fetcher, create_session, make_fetcher
from .service import handle

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Catalog Scraper")


def get_fetcher() -> Iterator[Fetcher]:
    """One session per request; nothing is shared between requests."""
    session = create_session(total_retries=settings.RETRIES)
    try:
        yield make_fetcher(session=session, timeout_seconds=settings.REQUEST_TIMEOUT)
    finally:
        session.close()


@app.get("/catalogProducts")
def catalog_products(request: Request, fetch: Fetcher = Depends(get_fetcher)):
    # A repeated parameter arrives as a list, which is not a usable URL
    values = request.query_params.getlist("startUrl")
    if len(values) != 1 or not values[0]:
        return JSONResponse(status_code=400, content={"error": BAD_REQUEST_MESSAGE})

    try:
        result = handle(values[0], fetch=fetch, logger=logger)
    except BadRequest as exc:
        logger.warning("Rejected startUrl %r: %s", values[0], exc.detail)
        return JSONResponse(status_code=400, content={"error": BAD_REQUEST_MESSAGE})
    except Exception:
        logger.exception("Error in catalogProducts")
        return JSONResponse(
            status_code=500,
            content={"error": INTERNAL_ERROR_MESSAGE},
        )
    return result.to_dict()
