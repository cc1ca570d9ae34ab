from __future__ import annotations

import difflib
from dataclasses import dataclass


@dataclass(frozen=True)
class IngredientItem:
    name: str
    icon: str


COMMON_INGREDIENTS: tuple[IngredientItem, ...] = tuple(
    IngredientItem(name, icon)
    for name, icon in (
        # produce
        ("apple", "🍎"), ("banana", "🍌"), ("tomato", "🍅"), ("onion", "🧅"),
        ("garlic", "🧄"), ("potato", "🥔"), ("carrot", "🥕"), ("broccoli", "🥦"),
        ("spinach", "🥬"), ("bell pepper", "🫑"), ("cucumber", "🥒"), ("lemon", "🍋"),
        ("lime", "🟢"), ("strawberry", "🍓"), ("avocado", "🥑"), ("mushroom", "🍄"),
        ("ginger", "🫚"), ("celery", "🥬"), ("corn", "🌽"), ("grapes", "🍇"),
        ("orange", "🍊"), ("pineapple", "🍍"),
        # protein
        ("chicken breast", "🍗"), ("ground beef", "🥩"), ("salmon fillet", "🐟"),
        ("pork chop", "🍖"), ("bacon", "🥓"), ("sausage", "🌭"), ("tuna (canned)", "🐟"),
        ("tofu", "⬜"), ("shrimp", "🦐"),
        # dairy
        ("milk", "🥛"), ("egg", "🥚"), ("butter", "🧈"), ("cheddar cheese", "🧀"),
        ("mozzarella cheese", "🧀"), ("yogurt", "🍦"), ("heavy cream", "🥛"),
        # grains and baking
        ("rice", "🍚"), ("flour", "🍚"), ("pasta", "🍝"), ("bread", "🍞"), ("oats", "🥣"),
        ("sugar", "🍚"), ("baking soda", "🥄"), ("baking powder", "🥄"),
        # legumes and nuts
        ("black beans", "🫘"), ("lentils", "🫘"), ("peanut butter", "🥜"),
        ("almonds", "🌰"), ("chickpeas", "🫘"),
        # pantry
        ("olive oil", "🍾"), ("vegetable oil", "🍾"), ("salt", "🧂"), ("black pepper", "🧂"),
        ("soy sauce", "🍶"), ("ketchup", "🥫"), ("mustard", "🟡"), ("vinegar", "🍾"),
        ("honey", "🍯"),
        # herbs and spices
        ("oregano", "🌿"), ("basil", "🌿"), ("thyme", "🌿"), ("cumin", "🌶️"),
        ("paprika", "🌶️"), ("chili powder", "🌶️"), ("cinnamon", "🪵"),
    )
)

_BY_NAME = {item.name: item for item in COMMON_INGREDIENTS}


def search_ingredients(query: str, limit: int = 8, cutoff: float = 0.7) -> list[IngredientItem]:
    """Substring matches first (catalog order), then close spellings."""
    q = query.strip().lower()
    if not q:
        return []

    results = [item for item in COMMON_INGREDIENTS if q in item.name]
    seen = {item.name for item in results}
    for name in difflib.get_close_matches(q, list(_BY_NAME), n=limit, cutoff=cutoff):
        if name not in seen:
            results.append(_BY_NAME[name])
            seen.add(name)
    return results[:limit]
