from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Optional

import httpx
from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, Field

from app.ui.routes import TEMPLATES_DIR, router as ui_router
from config.settings import Settings, get_settings
from forecaster.client import CompletionClient
from forecaster.core.cache import ResponseCache
from forecaster.core.errors import InvalidLocation, WeatherGptError
from forecaster.core.location import Location, parse_location
from forecaster.tools import LocationSuggester, WeatherReporter


logging.basicConfig(
    level=get_settings().logging_level,
    format="[%(asctime)s] %(levelname)s - %(message)s",
)
logger = logging.getLogger("weathergpt")


class WeatherRequest(BaseModel):
    city: Optional[str] = Field(None, description="City name, e.g. 'Denver'")
    state: Optional[str] = Field(None, description="2-letter US state code")
    zip: Optional[str] = Field(None, description="5-digit US zip code")
    query: Optional[str] = Field(
        None, description="Free text such as 'Denver, CO', 'Denver, CO 80202' or '80202'"
    )

    def to_location(self) -> Location:
        if self.query and not (self.city or self.state or self.zip):
            return parse_location(self.query)
        return Location.from_fields(city=self.city, state=self.state, zip=self.zip)


def create_app(
    settings: Optional[Settings] = None,
    clock: Callable[[], float] = time.monotonic,
    transport: Optional[httpx.BaseTransport] = None,
) -> FastAPI:
    """Build the API with its own client and caches.

    ``clock`` and ``transport`` exist so tests can control cache expiry and
    fake the upstream completion API.
    """
    settings = settings or get_settings()
    app = FastAPI(title="Weather GPT", version="1.0.0")

    # CORS: allow local frontend during development
    if settings.app_env.lower() in {"dev", "development", "local"}:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    client = CompletionClient(settings=settings, transport=transport)
    app.state.settings = settings
    app.state.templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    app.state.weather_reporter = WeatherReporter(
        client, ResponseCache(ttl=settings.weather_cache_ttl, clock=clock)
    )
    app.state.suggester = LocationSuggester(
        client, ResponseCache(ttl=settings.suggest_cache_ttl, clock=clock)
    )
    logger.info(
        "Config: env=%s weather_model=%s suggest_model=%s key_set=%s",
        settings.app_env,
        settings.weather_model,
        settings.suggest_model,
        settings.has_api_key,
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Rejected request body on %s: %s", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"error": InvalidLocation.default_message})

    @app.exception_handler(WeatherGptError)
    async def weather_gpt_error(request: Request, exc: WeatherGptError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.post("/api/weather")
    def weather(req: WeatherRequest, request: Request) -> Dict[str, Any]:
        location = req.to_location()
        logger.info("Incoming weather request: %s", location.display)
        reporter: WeatherReporter = request.app.state.weather_reporter
        try:
            return reporter.report(location).model_dump()
        except WeatherGptError:
            raise
        except Exception as e:
            logger.exception("Weather API error: %s", e)
            return JSONResponse(
                status_code=500, content={"error": WeatherGptError.default_message}
            )

    @app.get("/api/suggest")
    def suggest(request: Request, q: Optional[str] = Query(None)) -> Dict[str, List[str]]:
        suggester: LocationSuggester = request.app.state.suggester
        return {"suggestions": suggester.suggest(q)}

    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.include_router(ui_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=False)
