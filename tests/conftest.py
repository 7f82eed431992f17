"""Shared fixtures for the voice pipeline tests."""

import json
from decimal import Decimal
from pathlib import Path
from typing import List

import pytest
from fastapi.testclient import TestClient

from orderdesk.config import Settings, get_settings
from orderdesk.voice import menu_store
from orderdesk.voice.models import CatalogItem


def _item(iid: str, name: str, price: str) -> CatalogItem:
    return CatalogItem(id=iid, name=name, unit_price=Decimal(price))


@pytest.fixture
def catalog() -> List[CatalogItem]:
    return [
        _item("idli", "Idli", "40"),
        _item("masala-idli", "Masala Idli", "60"),
        _item("vada", "Vada", "35"),
        _item("plain-dosa", "Plain Dosa", "70"),
        _item("masala-dosa", "Masala Dosa", "90"),
    ]


@pytest.fixture(autouse=True)
def _fresh_menu_cache():
    menu_store.clear_cache()
    yield
    menu_store.clear_cache()


@pytest.fixture
def menus_dir(tmp_path: Path) -> Path:
    root = tmp_path / "menus"
    (root / "tiffin").mkdir(parents=True)
    menu = {
        "meta": {"slug": "tiffin", "currency": "INR"},
        "categories": [
            {
                "id": "breakfast",
                "name": "Breakfast",
                "items": [
                    {"id": "idli", "name": "Idli", "price": 40},
                    {"id": "masala-idli", "name": "Masala Idli", "price": 60},
                    {"id": "vada", "name": "Vada", "price": 35},
                    {"id": "plain-dosa", "name": "Plain Dosa", "price": 70},
                    {"id": "pongal", "name": "Pongal", "price": 65, "is_active": False},
                ],
            }
        ],
    }
    (root / "tiffin" / "menu.json").write_text(json.dumps(menu), encoding="utf-8")
    return root


@pytest.fixture
def client(menus_dir: Path):
    from orderdesk.main import app

    app.dependency_overrides[get_settings] = lambda: Settings(menus_dir=menus_dir)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
