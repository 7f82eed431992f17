# orderdesk/main.py
from __future__ import annotations

import logging
from typing import Dict, List

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field

from .config import Settings, get_settings, setup_logging
from .voice.brain import confirm, review, search_catalog
from .voice.cart import build_summary
from .voice.menu_store import load_catalog, normalize_slug
from .voice.models import CartLine, CatalogItem, ParsedPhrase

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Order Desk Voice API",
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)


# -------------------
# Schemas
# -------------------
class ReviewIn(BaseModel):
    utterance: str


class SearchIn(BaseModel):
    query: str


class ConfirmIn(BaseModel):
    phrases: List[ParsedPhrase]
    # phrase index -> catalog item id picked by the user
    overrides: Dict[int, str] = Field(default_factory=dict)
    cart: List[CartLine] = Field(default_factory=list)


# -------------------
# Helpers
# -------------------
def _catalog_or_404(slug: str, settings: Settings) -> List[CatalogItem]:
    catalog = load_catalog(settings.menus_dir, normalize_slug(slug))
    if catalog is None:
        raise HTTPException(status_code=404, detail="Restaurant not found")
    return catalog


def _resolve_override_ids(overrides: Dict[int, str], catalog: List[CatalogItem]) -> Dict[int, CatalogItem]:
    by_id = {it.id: it for it in catalog}
    picked: Dict[int, CatalogItem] = {}
    for idx, item_id in overrides.items():
        item = by_id.get(item_id)
        if item is None:
            raise HTTPException(status_code=422, detail=f"Unknown menu item: {item_id}")
        picked[idx] = item
    return picked


# -------------------
# Health
# -------------------
@app.get("/")
def root():
    return {"ok": True, "service": "orderdesk-voice"}


@app.get("/r/{slug}/catalog")
def restaurant_catalog(slug: str, settings: Settings = Depends(get_settings)):
    return {"items": _catalog_or_404(slug, settings)}


# -------------------
# Voice entry
# -------------------
@app.post("/r/{slug}/voice/review")
def voice_review(slug: str, payload: ReviewIn, settings: Settings = Depends(get_settings)):
    catalog = _catalog_or_404(slug, settings)
    rows = review(
        payload.utterance,
        catalog,
        suggestion_count=settings.suggestion_count,
        threshold=settings.match_threshold,
    )
    return {"phrases": rows}


@app.post("/r/{slug}/voice/search")
def voice_search(slug: str, payload: SearchIn, settings: Settings = Depends(get_settings)):
    catalog = _catalog_or_404(slug, settings)
    return {"items": search_catalog(payload.query, catalog, settings.search_count)}


@app.post("/r/{slug}/voice/confirm")
def voice_confirm(slug: str, payload: ConfirmIn, settings: Settings = Depends(get_settings)):
    catalog = _catalog_or_404(slug, settings)
    overrides = _resolve_override_ids(payload.overrides, catalog)

    result = confirm(
        payload.phrases,
        catalog,
        overrides,
        payload.cart,
        threshold=settings.match_threshold,
    )
    summary, subtotal = build_summary(result.cart, currency_symbol=settings.currency_symbol)

    return {
        "cart": result.cart,
        "added": result.added,
        "dropped": result.dropped,
        "subtotal": str(subtotal),
        "summary": summary,
    }
