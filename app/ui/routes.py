from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

logger = logging.getLogger("weathergpt.ui")

router = APIRouter()

TEMPLATES_DIR = Path(__file__).parent / "templates"


def get_templates(request: Request) -> Jinja2Templates:
    """Shared templates from app state, or a fresh instance when the app did not set one."""
    templates = getattr(request.app.state, "templates", None)
    if isinstance(templates, Jinja2Templates):
        return templates
    logger.warning("Jinja2Templates not found in app.state; using %s", TEMPLATES_DIR)
    return Jinja2Templates(directory=str(TEMPLATES_DIR))


@router.get("/", response_class=HTMLResponse)
def index(request: Request) -> Any:
    templates = get_templates(request)
    return templates.TemplateResponse(
        request,
        "index.html",
        {"app_name": "Weather GPT", "tagline": "AI-generated weather for any US city or zip"},
    )
