from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import ValidationError

from .models import CatalogItem

logger = logging.getLogger(__name__)

_MENU_CACHE: Dict[Tuple[str, str], Dict[str, Any]] = {}


def clear_cache() -> None:
    _MENU_CACHE.clear()


def normalize_slug(slug: str) -> str:
    return (slug or "").strip().lower()


def load_menu_by_slug(menus_dir: Path, slug: str) -> Optional[Dict[str, Any]]:
    slug = normalize_slug(slug)
    if not slug:
        return None

    # 1) cache hit
    key = (str(menus_dir), slug)
    if key in _MENU_CACHE:
        return _MENU_CACHE[key]

    # 2) scan menus on disk
    if not menus_dir.exists():
        logger.warning("menus dir does not exist: %s", menus_dir)
        return None

    for path in sorted(menus_dir.rglob("menu.json")):
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("skipping unreadable menu %s: %s", path, e)
            continue
        if not isinstance(data, dict):
            continue

        mslug = normalize_slug(str((data.get("meta") or {}).get("slug") or ""))
        if mslug == slug:
            _MENU_CACHE[key] = data
            return data

    return None


def _iter_items(menu: Dict[str, Any]) -> Iterator[Dict[str, Any]]:
    """Supports both schemas:
    - top-level menu["items"]
    - nested categories[*]["items"]
    """
    for it in (menu.get("items") or []):
        if isinstance(it, dict):
            yield it
    for cat in (menu.get("categories") or []):
        if not isinstance(cat, dict):
            continue
        for it in (cat.get("items") or []):
            if isinstance(it, dict):
                yield it


def catalog_from_menu(menu: Dict[str, Any]) -> List[CatalogItem]:
    """Active items only, in menu order. Items missing an id or name are skipped."""
    out: List[CatalogItem] = []
    for it in _iter_items(menu):
        if it.get("is_active") is False:
            continue
        iid = str(it.get("id") or "").strip()
        nm = str(it.get("name") or "").strip()
        if not iid or not nm:
            continue
        try:
            out.append(CatalogItem(id=iid, name=nm, price=it.get("price", 0) or 0))
        except ValidationError as e:
            logger.warning("skipping menu item %s: %s", iid, e)
    return out


def load_catalog(menus_dir: Path, slug: str) -> Optional[List[CatalogItem]]:
    menu = load_menu_by_slug(menus_dir, slug)
    if menu is None:
        return None
    return catalog_from_menu(menu)
