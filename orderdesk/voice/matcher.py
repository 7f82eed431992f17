# orderdesk/voice/matcher.py
from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from rapidfuzz.distance import Levenshtein

from .models import CatalogItem, MatchCandidate
from .nlp import normalize_name

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.7

EXACT_SCORE = 1.0
CONTAINS_SCORE = 0.9


def similarity(a: str, b: str) -> float:
    """1 - edit distance / longer length. Two empty strings are identical."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - Levenshtein.distance(a, b) / longest


def _contains(outer: str, inner: str) -> bool:
    # whole words only: "idli" is inside "masala idli", "idl" is not inside "idli".
    # Unspaced names lose the credit: "dosa" vs "masaladosa" falls through to edit distance.
    return f" {inner} " in f" {outer} "


def score(a: str, b: str) -> float:
    """
    Score two already-normalized names:
      exact     -> 1.0
      contains  -> 0.9 (either direction, on word boundaries)
      otherwise -> edit-distance similarity
    """
    if a == b:
        return EXACT_SCORE
    if a and b and (_contains(b, a) or _contains(a, b)):
        return CONTAINS_SCORE
    return similarity(a, b)


def _scored(name: str, catalog: Sequence[CatalogItem]) -> List[Tuple[CatalogItem, float]]:
    q = normalize_name(name)
    if not q or not catalog:
        return []
    return [(it, score(q, normalize_name(it.name))) for it in catalog]


def best_match(
    name: str,
    catalog: Sequence[CatalogItem],
    threshold: float = DEFAULT_THRESHOLD,
) -> Optional[CatalogItem]:
    best: Optional[CatalogItem] = None
    best_score = -1.0
    for it, s in _scored(name, catalog):
        # strict ">" keeps the first item seen on ties
        if s > best_score:
            best, best_score = it, s

    if best is None or best_score < threshold:
        logger.debug("no match for %r (best=%.3f, threshold=%.2f)", name, max(best_score, 0.0), threshold)
        return None

    logger.debug("matched %r -> %r (%.3f)", name, best.name, best_score)
    return best


def top_matches(name: str, catalog: Sequence[CatalogItem], n: int = 3) -> List[MatchCandidate]:
    if n < 1:
        return []
    ranked = [(it, s) for it, s in _scored(name, catalog) if s > 0]
    # sorted() is stable, so equal scores keep catalog order
    ranked = sorted(ranked, key=lambda pair: pair[1], reverse=True)
    return [MatchCandidate(item=it, score=s) for it, s in ranked[:n]]
