# orderdesk/voice/nlp.py
from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Tuple

from .models import ParsedPhrase

logger = logging.getLogger(__name__)

# ----------------------------
# Number words
# Fixed table; compound forms ("twenty one") are read word by word.
# ----------------------------
_NUMBER_WORDS: Dict[str, int] = {
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
    "eleven": 11,
    "twelve": 12,
    "thirteen": 13,
    "fourteen": 14,
    "fifteen": 15,
    "sixteen": 16,
    "seventeen": 17,
    "eighteen": 18,
    "nineteen": 19,
    "twenty": 20,
    "thirty": 30,
    "forty": 40,
    "fifty": 50,
}

# ----------------------------
# Regex helpers
# ----------------------------
# Phrase separators: "idli two, vada one", "idli; vada", "idli and vada", "idli then vada"
_SPLIT_RE = re.compile(r"[,;]|\b(?:and|then)\b", re.IGNORECASE)

_WS_RE = re.compile(r"\s+")

# Anything that is not a letter, digit or whitespace (underscore counts as punctuation)
_PUNCT_RE = re.compile(r"[^\w\s]|_")

# Sentence punctuation left on a spoken number: "idli 2."
_TRAILING_PUNCT_RE = re.compile(r"[.!?]+$")


def normalize_name(s: str) -> str:
    """
    Normalization shared by every comparison:
    - lower
    - collapse whitespace
    - strip punctuation
    - trim
    """
    s = (s or "").lower()
    s = _WS_RE.sub(" ", s)
    s = _PUNCT_RE.sub("", s)
    return s.strip()


# ----------------------------
# Quantity parsing
# ----------------------------
def parse_number(word: str) -> Optional[int]:
    """
    "4" -> 4, "Four" -> 4, "2." -> 2, "0" / "4x" / "fourty" -> None.
    """
    w = _TRAILING_PUNCT_RE.sub("", (word or "").strip())
    if not w:
        return None
    if w.isdecimal():
        n = int(w)
        return n if n > 0 else None
    return _NUMBER_WORDS.get(w.lower())


def extract_quantity(segment: str) -> Tuple[int, str]:
    """
    Pull one quantity out of a phrase, trying positions in order:
      first word  ("2 idli")
      last word   ("idli two")
      interior    ("masala 4 idli" -> "masala idli")
    Falls back to (1, segment).
    """
    text = (segment or "").strip()
    words = text.split()
    if not words:
        return 1, ""

    qty = parse_number(words[0])
    if qty is not None:
        return qty, " ".join(words[1:])

    if len(words) > 1:
        qty = parse_number(words[-1])
        if qty is not None:
            return qty, " ".join(words[:-1])

    for i in range(1, len(words) - 1):
        qty = parse_number(words[i])
        if qty is not None:
            return qty, " ".join(words[:i] + words[i + 1:])

    return 1, text


def split_phrases(utterance: str) -> List[str]:
    """
    Split by commas, semicolons, "and", "then".
    Empty segments are discarded; returns [] for blank input.
    """
    return [p.strip() for p in _SPLIT_RE.split(utterance or "") if p and p.strip()]


def tokenize(utterance: str) -> List[ParsedPhrase]:
    phrases: List[ParsedPhrase] = []
    for part in split_phrases(utterance):
        qty, name = extract_quantity(part)
        name = name.strip()
        if not name:
            # bare quantity ("two") names nothing
            logger.debug("dropping phrase without item name: %r", part)
            continue
        phrases.append(ParsedPhrase(raw_text=part, quantity=qty, name=name))

    logger.debug("tokenized %d phrase(s) from %r", len(phrases), utterance)
    return phrases
