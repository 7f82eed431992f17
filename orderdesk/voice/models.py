# orderdesk/voice/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class LineSource(str, Enum):
    AUTO_MATCHED = "auto-matched"
    USER_SELECTED = "user-selected"
    UNMATCHED = "unmatched"


class CatalogItem(BaseModel):
    """Snapshot of an active menu item. Menus store the price as `price`."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    unit_price: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        validation_alias=AliasChoices("unit_price", "price"),
    )


class ParsedPhrase(BaseModel):
    model_config = ConfigDict(frozen=True)

    raw_text: str
    quantity: int = Field(default=1, ge=1)
    name: str


class MatchCandidate(BaseModel):
    model_config = ConfigDict(frozen=True)

    item: CatalogItem
    score: float = Field(ge=0.0, le=1.0)


class ResolvedLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    catalog_item_id: Optional[str] = None
    display_name: str
    unit_price: Decimal = Field(default=Decimal("0"), ge=0)
    quantity: int = Field(default=1, ge=1)
    source: LineSource


class CartLine(BaseModel):
    # mutable: merge bumps quantity in place
    model_config = ConfigDict(validate_assignment=True)

    catalog_item_id: Optional[str] = None
    name: str
    unit_price: Decimal = Field(default=Decimal("0"), ge=0)
    quantity: int = Field(default=1, ge=1)


class PhraseReview(BaseModel):
    """One row of the confirmation batch shown before anything touches the cart."""

    index: int
    phrase: ParsedPhrase
    match: Optional[CatalogItem] = None
    suggestions: List[MatchCandidate] = Field(default_factory=list)

    @property
    def matched(self) -> bool:
        return self.match is not None


@dataclass
class ConfirmResult:
    # cart is the caller's own list, not a copy
    cart: List[CartLine]
    added: List[ResolvedLine] = field(default_factory=list)
    dropped: List[ResolvedLine] = field(default_factory=list)
