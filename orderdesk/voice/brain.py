# orderdesk/voice/brain.py
from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Mapping, Optional, Sequence, Tuple

from .cart import merge
from .matcher import DEFAULT_THRESHOLD, best_match, top_matches
from .models import (
    CartLine,
    CatalogItem,
    ConfirmResult,
    LineSource,
    ParsedPhrase,
    PhraseReview,
    ResolvedLine,
)
from .nlp import tokenize

logger = logging.getLogger(__name__)


def review(
    utterance: str,
    catalog: Sequence[CatalogItem],
    suggestion_count: int = 3,
    threshold: float = DEFAULT_THRESHOLD,
) -> List[PhraseReview]:
    """
    First half of the voice flow: parse the utterance and match every phrase,
    attaching "did you mean" suggestions to the ones that did not match.
    Nothing is resolved or merged here; the caller collects overrides first.
    """
    rows: List[PhraseReview] = []
    for i, phrase in enumerate(tokenize(utterance)):
        match = best_match(phrase.name, catalog, threshold)
        suggestions = [] if match else top_matches(phrase.name, catalog, suggestion_count)
        rows.append(PhraseReview(index=i, phrase=phrase, match=match, suggestions=suggestions))
    return rows


def search_catalog(query: str, catalog: Sequence[CatalogItem], n: int = 5) -> List[CatalogItem]:
    """Manual "search menu" fallback for a phrase nothing resembled."""
    return [c.item for c in top_matches(query, catalog, n)]


def _line_for_item(item: CatalogItem, phrase: ParsedPhrase, source: LineSource) -> ResolvedLine:
    return ResolvedLine(
        catalog_item_id=item.id,
        display_name=item.name,
        unit_price=item.unit_price,
        quantity=phrase.quantity,
        source=source,
    )


def resolve(
    phrases: Sequence[ParsedPhrase],
    catalog: Sequence[CatalogItem],
    overrides: Optional[Mapping[int, CatalogItem]] = None,
    threshold: float = DEFAULT_THRESHOLD,
) -> List[ResolvedLine]:
    overrides = overrides or {}

    stray = [i for i in overrides if not 0 <= i < len(phrases)]
    if stray:
        logger.debug("ignoring overrides for unknown phrase indexes: %s", stray)

    lines: List[ResolvedLine] = []
    for i, phrase in enumerate(phrases):
        chosen = overrides.get(i)
        if chosen is not None:
            lines.append(_line_for_item(chosen, phrase, LineSource.USER_SELECTED))
            continue

        match = best_match(phrase.name, catalog, threshold)
        if match is not None:
            lines.append(_line_for_item(match, phrase, LineSource.AUTO_MATCHED))
            continue

        lines.append(
            ResolvedLine(
                catalog_item_id=None,
                display_name=phrase.name,
                unit_price=Decimal("0"),
                quantity=phrase.quantity,
                source=LineSource.UNMATCHED,
            )
        )
    return lines


def drop_unmatched(lines: Sequence[ResolvedLine]) -> Tuple[List[ResolvedLine], List[ResolvedLine]]:
    kept: List[ResolvedLine] = []
    dropped: List[ResolvedLine] = []
    for line in lines:
        (dropped if line.source == LineSource.UNMATCHED else kept).append(line)
    return kept, dropped


def confirm(
    phrases: Sequence[ParsedPhrase],
    catalog: Sequence[CatalogItem],
    overrides: Optional[Mapping[int, CatalogItem]],
    cart: List[CartLine],
    threshold: float = DEFAULT_THRESHOLD,
) -> ConfirmResult:
    """
    Second half of the voice flow: resolve with the user's picks and commit in
    one merge. Unmatched phrases never reach the cart; they come back in
    `dropped` so the caller can tell the user.
    """
    lines = resolve(phrases, catalog, overrides, threshold)
    added, dropped = drop_unmatched(lines)

    if dropped:
        logger.info(
            "%d voice item(s) could not be added: %s",
            len(dropped),
            ", ".join(d.display_name for d in dropped),
        )

    if added:
        merge(added, cart)

    return ConfirmResult(cart=cart, added=added, dropped=dropped)
