#!/usr/bin/env python3
"""
Seed the meal catalog.

Idempotent: meals whose canonical key already exists are left untouched.
Every safe core meal key must be present here.
"""

import sys
import logging
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy.orm import Session

from domain.models import Meal, MealIngredient
from repositories.meal_repository import MealRepository

logger = logging.getLogger("mealarbiter.seed")

# (canonical_key, name, est_minutes, instructions_short, [(ingredient, is_pantry_staple)])
SEED_MEALS = [
    (
        "spaghetti-aglio-olio",
        "Spaghetti Aglio e Olio",
        15,
        "Cook spaghetti. Saute garlic in olive oil until golden, add red pepper "
        "flakes. Toss with pasta and parsley.",
        [
            ("spaghetti", True),
            ("garlic", False),
            ("olive oil", True),
            ("red pepper flakes", True),
            ("parsley", False),
        ],
    ),
    (
        "egg-fried-rice",
        "Egg Fried Rice",
        12,
        "Scramble eggs, set aside. Stir-fry cold rice with soy sauce, add peas and "
        "eggs. Season with sesame oil.",
        [
            ("cooked rice", True),
            ("eggs", False),
            ("frozen peas", True),
            ("soy sauce", True),
            ("sesame oil", True),
            ("green onions", False),
        ],
    ),
    (
        "quick-grilled-cheese",
        "Quick Grilled Cheese",
        10,
        "Butter bread, add cheese slices, grill in pan until golden on both sides. "
        "Serve with tomato soup if desired.",
        [("bread", False), ("cheese slices", False), ("butter", True)],
    ),
    (
        "scrambled-eggs-toast",
        "Scrambled Eggs on Toast",
        8,
        "Whisk eggs with salt and pepper, scramble in butter until just set. Serve "
        "on buttered toast.",
        [("eggs", False), ("bread", False), ("butter", True), ("salt", True)],
    ),
    (
        "pasta-marinara",
        "Pasta Marinara",
        20,
        "Cook pasta al dente. Heat marinara sauce with garlic. Toss pasta with "
        "sauce, top with parmesan and basil.",
        [
            ("pasta", True),
            ("marinara sauce", True),
            ("garlic", False),
            ("parmesan cheese", False),
            ("fresh basil", False),
        ],
    ),
    (
        "quesadilla-cheese",
        "Cheese Quesadilla",
        8,
        "Fill tortilla with shredded cheese, fold in half, cook in dry pan until "
        "cheese melts and tortilla is crispy.",
        [("flour tortilla", False), ("shredded cheese", False)],
    ),
    (
        "bean-and-cheese-burrito",
        "Bean & Cheese Burrito",
        10,
        "Warm refried beans, spoon onto tortilla with cheese and salsa. Roll up "
        "and serve.",
        [
            ("flour tortilla", False),
            ("refried beans", True),
            ("shredded cheese", False),
            ("salsa", True),
        ],
    ),
    (
        "instant-ramen-upgrade",
        "Upgraded Instant Ramen",
        10,
        "Cook ramen, add soft-boiled egg, green onions, and a drizzle of sesame "
        "oil. Optional: add leftover protein.",
        [
            ("instant ramen", True),
            ("eggs", False),
            ("green onions", False),
            ("sesame oil", True),
        ],
    ),
    (
        "tuna-salad-crackers",
        "Tuna Salad with Crackers",
        10,
        "Mix canned tuna with mayo, celery, and lemon juice. Serve with crackers "
        "or on bread.",
        [
            ("canned tuna", True),
            ("mayonnaise", True),
            ("celery", False),
            ("lemon juice", True),
            ("crackers", True),
        ],
    ),
    (
        "pb-banana-sandwich",
        "Peanut Butter Banana Sandwich",
        5,
        "Spread peanut butter on bread, add sliced banana and drizzle of honey. "
        "Close and slice.",
        [
            ("bread", False),
            ("peanut butter", True),
            ("banana", False),
            ("honey", True),
        ],
    ),
    (
        "chicken-stir-fry",
        "Chicken Stir Fry",
        25,
        "Slice chicken thin and sear in a hot pan. Add mixed vegetables and soy "
        "sauce, toss until glossy. Serve over rice.",
        [
            ("chicken breast", False),
            ("mixed vegetables", False),
            ("soy sauce", True),
            ("cooked rice", True),
        ],
    ),
    (
        "sheet-pan-sausage-veg",
        "Sheet Pan Sausage and Vegetables",
        30,
        "Chop sausage, potatoes and peppers. Toss with olive oil and salt, roast "
        "at 220C for 25 minutes.",
        [
            ("sausage", False),
            ("potatoes", False),
            ("bell peppers", False),
            ("olive oil", True),
            ("salt", True),
        ],
    ),
]


def seed_meals(db: Session) -> int:
    """
    Insert any missing seed meals with their ingredient rows.

    Args:
        db: Database session

    Returns:
        Number of meals inserted
    """
    repo = MealRepository(db)
    inserted = 0

    for sort_order, (key, name, minutes, instructions, ingredients) in enumerate(
        SEED_MEALS
    ):
        if repo.get_by_canonical_key(key) is not None:
            logger.debug(f"Meal {key} already seeded")
            continue

        meal = Meal(
            canonical_key=key,
            name=name,
            instructions_short=instructions,
            est_minutes=minutes,
            is_active=True,
            sort_order=sort_order,
        )
        meal.ingredients = [
            MealIngredient(ingredient_name=ingredient, is_pantry_staple=staple)
            for ingredient, staple in ingredients
        ]
        db.add(meal)
        inserted += 1

    db.commit()
    logger.info(f"Seeded {inserted} meals ({len(SEED_MEALS) - inserted} already present)")
    return inserted


def main() -> int:
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    from domain.models import SessionLocal, init_database

    init_database()
    db = SessionLocal()
    try:
        seed_meals(db)
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
