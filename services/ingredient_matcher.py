"""
Ingredient matcher - token overlap between recipe ingredients and inventory names.

Names are compared as sets of tokens rather than substrings, so "egg" does not
match "eggplant" and "ham" does not match "shampoo".
"""

import logging
import re
from typing import Iterable, List, NamedTuple, Optional, Sequence

from domain.schemas.arbiter_schemas import InventoryItemRow

logger = logging.getLogger("mealarbiter.matcher")

MATCH_THRESHOLD = 0.66
EXACT_MATCH_SCORE = 1.0
PREFIX_MATCH_SCORE = 0.80
MAX_PREFIX_EXTRA_CHARS = 3
MIN_PREFIX_LENGTH_RATIO = 0.70
SCORE_TOLERANCE = 0.0001

MIN_TOKEN_LENGTH = 3
MAX_TOKENS = 10

# Descriptors, packaging words and units that say nothing about the ingredient
STOPWORDS = frozenset(
    {
        "fresh", "organic", "natural", "raw", "cooked", "frozen", "canned",
        "large", "small", "medium", "mini", "jumbo",
        "pack", "pkg", "package", "family", "value", "brand", "store", "bulk",
        "oz", "lb", "lbs", "ct", "each", "count", "gal", "qt", "pt",
        "the", "and", "for", "with",
    }
)


class IngredientMatch(NamedTuple):
    item: InventoryItemRow
    score: float


def tokenize(name: Optional[str]) -> List[str]:
    """Lowercase word tokens, stopwords and short tokens removed, order kept.

    >>> tokenize("2 lb Chicken Breast (Family Pack)")
    ['chicken', 'breast']
    """
    text = re.sub(r"[^a-z0-9]+", " ", (name or "").lower())
    tokens: List[str] = []
    for token in text.split():
        if len(token) < MIN_TOKEN_LENGTH or token in STOPWORDS:
            continue
        if token in tokens:
            continue
        tokens.append(token)
        if len(tokens) >= MAX_TOKENS:
            break
    return tokens


def _is_prefix_match(a: str, b: str) -> bool:
    short, long_ = (a, b) if len(a) <= len(b) else (b, a)
    if not long_.startswith(short):
        return False
    if len(long_) - len(short) > MAX_PREFIX_EXTRA_CHARS:
        return False
    return len(short) / len(long_) >= MIN_PREFIX_LENGTH_RATIO


def compute_overlap_score(
    ingredient_tokens: Sequence[str], item_tokens: Sequence[str]
) -> float:
    """Share of ingredient tokens found among the item tokens.

    An exact token counts 1.0; a close plural/singular prefix ("tomato" vs
    "tomatoes") counts PREFIX_MATCH_SCORE. Capped at 1.0.
    """
    if not ingredient_tokens or not item_tokens:
        return 0.0

    item_set = set(item_tokens)
    total = 0.0
    for token in ingredient_tokens:
        if token in item_set:
            total += EXACT_MATCH_SCORE
            continue
        for candidate in item_tokens:
            if _is_prefix_match(token, candidate):
                total += PREFIX_MATCH_SCORE
                break

    return min(1.0, total / len(ingredient_tokens))


def rank_inventory_matches(
    ingredient_name: str, inventory: Iterable[InventoryItemRow]
) -> List[IngredientMatch]:
    """Inventory rows at or above MATCH_THRESHOLD, best first.

    Equal scores are ordered by item name so the ranking does not depend on
    the order rows were loaded in.
    """
    ingredient_tokens = tokenize(ingredient_name)
    if not ingredient_tokens:
        return []

    matches = []
    for item in inventory:
        score = compute_overlap_score(ingredient_tokens, tokenize(item.item_name))
        if score >= MATCH_THRESHOLD:
            matches.append(IngredientMatch(item, score))

    # Scores within tolerance sort as equal
    matches.sort(key=lambda m: (-round(m.score / SCORE_TOLERANCE), m.item.item_name))
    return matches


def match_inventory_item(
    ingredient_name: str, inventory: Iterable[InventoryItemRow]
) -> Optional[IngredientMatch]:
    """Best inventory row for an ingredient, or None below MATCH_THRESHOLD."""
    matches = rank_inventory_matches(ingredient_name, inventory)
    if not matches:
        return None
    best = matches[0]
    logger.debug(
        f"Matched ingredient '{ingredient_name}' to '{best.item.item_name}' "
        f"(score={best.score:.2f})"
    )
    return best
