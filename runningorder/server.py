"""
HTTP API serving the running order as a JSend document.

    GET /                    -> JSend document
    GET /runningorder.json   -> same

The page is fetched and parsed on every request. Status codes follow the
envelope: 200 on success, 502 when the festival site answered with an error,
500 for everything else.
"""

from __future__ import annotations

from datetime import tzinfo
from http import HTTPStatus
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from runningorder.errors import ParseError
from runningorder.logging_utils import get_logger
from runningorder.scrape import FetchError, envelope, jsend_error
from runningorder.settings import current_year


logger = get_logger(__name__)


def create_app(
    url: Optional[str] = None,
    year: Optional[int] = None,
    tz: Optional[tzinfo] = None,
    cors: bool = False,
) -> FastAPI:
    """
    Build the API. `year` defaults to the current year at request time.
    With `cors` every origin may read the document.
    """
    app = FastAPI(
        title="runningorder API",
        description="Festival running order as JSend JSON",
    )

    if cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["GET"],
            allow_headers=["*"],
        )

    def running_order() -> JSONResponse:
        try:
            payload = envelope(year or current_year(), url, tz)
        except FetchError as exc:
            logger.warning("fetch failed: %s", exc)
            code = int(exc.code)
            return JSONResponse(jsend_error(str(exc), code), status_code=code)
        except ParseError as exc:
            logger.warning("parse failed: %s", exc)
            code = int(HTTPStatus.INTERNAL_SERVER_ERROR)
            return JSONResponse(jsend_error(str(exc), code), status_code=code)

        return JSONResponse(payload)

    app.add_api_route("/", running_order, methods=["GET"])
    app.add_api_route("/runningorder.json", running_order, methods=["GET"])

    return app
