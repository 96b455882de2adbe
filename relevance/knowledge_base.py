# relevance/knowledge_base.py
"""
Static interest knowledge base: multi-language dictionary + interest graph.

Loaded once at import, exposed read-only (MappingProxyType over tuples).
Keys are lowercase interest terms; all listed words are lowercase.

Languages: en, de, fr, it, es.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class InterestNode:
    direct_related: tuple[str, ...]
    indirect_related: tuple[str, ...]
    subcategories: tuple[str, ...]
    weight: float


# ---------------------------------------------------------------------------
# Multi-language dictionary
# ---------------------------------------------------------------------------

_LANGUAGE_DICTIONARY: dict[str, dict[str, tuple[str, ...]]] = {
    "food": {
        "de": ("essen", "nahrung", "lebensmittel", "speisen", "gerichte", "küche", "kulinarisch"),
        "en": ("food", "cuisine", "meal", "dish", "culinary", "gastronomy"),
        "fr": ("nourriture", "cuisine", "repas", "plat", "gastronomie"),
        "it": ("cibo", "cucina", "pasto", "piatto", "gastronomia"),
        "es": ("comida", "cocina", "plato", "gastronomía"),
    },
    "restaurant": {
        "de": ("restaurant", "gaststätte", "lokal", "speiselokal", "wirtshaus"),
        "en": ("restaurant", "eatery", "diner", "bistro", "brasserie"),
        "fr": ("restaurant", "bistrot", "brasserie"),
        "it": ("ristorante", "trattoria", "osteria"),
        "es": ("restaurante", "tasca", "mesón"),
    },
    "café": {
        "de": ("café", "kaffee", "kaffeehouse", "kaffeehaus", "espresso bar"),
        "en": ("café", "coffee shop", "coffeehouse", "espresso bar"),
        "fr": ("café", "salon de thé"),
        "it": ("caffè", "bar"),
        "es": ("café", "cafetería"),
    },
    "tech": {
        "de": ("technik", "technologie", "it", "digital", "innovation", "startup"),
        "en": ("tech", "technology", "it", "digital", "innovation", "startup"),
        "fr": ("technologie", "numérique", "innovation"),
        "it": ("tecnologia", "digitale", "innovazione"),
        "es": ("tecnología", "digital", "innovación"),
    },
    "ai": {
        "de": ("ki", "künstliche intelligenz", "maschinelles lernen"),
        "en": ("ai", "artificial intelligence", "machine learning", "ml"),
        "fr": ("ia", "intelligence artificielle", "apprentissage automatique"),
        "it": ("ia", "intelligenza artificiale"),
        "es": ("ia", "inteligencia artificial"),
    },
    "community": {
        "de": ("gemeinschaft", "community", "nachbarschaft", "kiez", "sozial"),
        "en": ("community", "neighborhood", "social", "local"),
        "fr": ("communauté", "quartier", "social"),
        "it": ("comunità", "quartiere", "sociale"),
        "es": ("comunidad", "barrio", "social"),
    },
    "health": {
        "de": ("gesundheit", "medizin", "wohlbefinden"),
        "en": ("health", "medical", "wellbeing"),
        "fr": ("santé", "médecine", "bien-être"),
        "it": ("salute", "medicina", "benessere"),
        "es": ("salud", "medicina", "bienestar"),
    },
    "culture": {
        "de": ("kultur", "kunst", "brauchtum"),
        "en": ("culture", "art", "arts"),
        "fr": ("culture", "art"),
        "it": ("cultura", "arte"),
        "es": ("cultura", "arte"),
    },
    "sports": {
        "de": ("sport", "fussball", "turnen", "bewegung"),
        "en": ("sports", "sport", "athletics", "football"),
        "fr": ("sport", "football"),
        "it": ("sport", "calcio"),
        "es": ("deporte", "deportes", "fútbol"),
    },
    "music": {
        "de": ("musik", "konzert", "band"),
        "en": ("music", "concert", "gig", "band"),
        "fr": ("musique", "concert"),
        "it": ("musica", "concerto"),
        "es": ("música", "concierto"),
    },
    "nature": {
        "de": ("natur", "wald", "wandern", "umwelt"),
        "en": ("nature", "outdoor", "hiking", "environment"),
        "fr": ("nature", "randonnée", "environnement"),
        "it": ("natura", "escursionismo", "ambiente"),
        "es": ("naturaleza", "senderismo", "medio ambiente"),
    },
    "travel": {
        "de": ("reisen", "urlaub", "tourismus"),
        "en": ("travel", "trip", "tourism", "vacation"),
        "fr": ("voyage", "tourisme", "vacances"),
        "it": ("viaggio", "turismo", "vacanza"),
        "es": ("viaje", "turismo", "vacaciones"),
    },
    "education": {
        "de": ("bildung", "schule", "lernen", "weiterbildung"),
        "en": ("education", "learning", "school", "course"),
        "fr": ("éducation", "école", "formation"),
        "it": ("istruzione", "scuola", "formazione"),
        "es": ("educación", "escuela", "formación"),
    },
}


# ---------------------------------------------------------------------------
# Interest graph
# ---------------------------------------------------------------------------

_INTEREST_GRAPH: dict[str, InterestNode] = {
    "food": InterestNode(
        direct_related=("restaurant", "café", "bar", "bakery", "cooking", "kitchen", "chef", "recipe"),
        indirect_related=("health", "lifestyle", "culture", "travel", "social", "community"),
        subcategories=(
            "vegan", "vegetarian", "organic", "bio",
            "street food", "fast food", "fine dining", "casual dining",
            "breakfast", "lunch", "dinner", "brunch",
            "italian", "german", "french", "asian", "mediterranean",
            "pizza", "pasta", "burger", "sushi", "bbq",
        ),
        weight=1.0,
    ),
    "restaurant": InterestNode(
        direct_related=("food", "dining", "menu", "chef", "cuisine", "meal"),
        indirect_related=("travel", "culture", "social", "lifestyle"),
        subcategories=("fine dining", "casual", "bistro", "brasserie", "pizzeria"),
        weight=0.9,
    ),
    "café": InterestNode(
        direct_related=("coffee", "tea", "breakfast", "bakery", "pastry"),
        indirect_related=("social", "work", "study", "meeting"),
        subcategories=("coffeehouse", "espresso bar", "tea room", "bakery café"),
        weight=0.8,
    ),
    "bar": InterestNode(
        direct_related=("drinks", "cocktails", "beer", "wine", "nightlife"),
        indirect_related=("social", "music", "entertainment", "culture"),
        subcategories=("cocktail bar", "wine bar", "beer garden", "pub", "lounge"),
        weight=0.7,
    ),
    "tech": InterestNode(
        direct_related=("technology", "innovation", "startup", "digital", "it", "software"),
        indirect_related=("community", "education", "business", "future"),
        subcategories=("ai", "blockchain", "cloud", "mobile", "web", "iot"),
        weight=1.0,
    ),
    "ai": InterestNode(
        direct_related=("machine learning", "neural network", "llm", "automation", "data science"),
        indirect_related=("tech", "science", "ethics", "research"),
        subcategories=("deep learning", "computer vision", "nlp", "chatbot", "robotics"),
        weight=1.0,
    ),
    "community": InterestNode(
        direct_related=("local", "neighborhood", "social", "people", "network"),
        indirect_related=("culture", "events", "activities", "volunteering"),
        subcategories=("meetup", "group", "club", "organization", "initiative"),
        weight=1.0,
    ),
    "health": InterestNode(
        direct_related=("wellness", "fitness", "sport", "nutrition", "medical"),
        indirect_related=("food", "lifestyle", "mental health", "yoga"),
        subcategories=("gym", "yoga", "meditation", "nutrition", "therapy"),
        weight=0.9,
    ),
    "culture": InterestNode(
        direct_related=("art", "music", "theater", "museum", "history", "festival"),
        indirect_related=("community", "education", "travel", "food"),
        subcategories=("concert", "exhibition", "performance", "literature"),
        weight=0.9,
    ),
    "sports": InterestNode(
        direct_related=("fitness", "football", "running", "cycling", "team"),
        indirect_related=("health", "community", "outdoor"),
        subcategories=("soccer", "tennis", "basketball", "swimming", "marathon"),
        weight=0.9,
    ),
    "music": InterestNode(
        direct_related=("concert", "band", "festival", "live music", "dj"),
        indirect_related=("culture", "nightlife", "bar", "entertainment"),
        subcategories=("jazz", "rock", "electronic", "classical", "hip hop"),
        weight=0.9,
    ),
    "nature": InterestNode(
        direct_related=("outdoor", "hiking", "park", "forest", "environment"),
        indirect_related=("health", "travel", "sports", "climate"),
        subcategories=("lake", "mountains", "garden", "wildlife", "camping"),
        weight=0.8,
    ),
    "travel": InterestNode(
        direct_related=("trip", "tourism", "hotel", "flight", "destination"),
        indirect_related=("culture", "food", "nature", "adventure"),
        subcategories=("city trip", "backpacking", "road trip", "cruise"),
        weight=0.8,
    ),
    "education": InterestNode(
        direct_related=("school", "learning", "university", "course", "teacher"),
        indirect_related=("community", "science", "tech", "culture"),
        subcategories=("workshop", "lecture", "tutorial", "seminar"),
        weight=0.8,
    ),
}


# ---------------------------------------------------------------------------
# Lexical variant rules
# ---------------------------------------------------------------------------

_KNOWN_TYPOS: dict[str, tuple[str, ...]] = {
    "food": ("fod", "foof", "foood", "fuod"),
    "tech": ("tec", "techy", "techno"),
    "café": ("cafe", "kaffee", "coffee"),
    "restaurant": ("resto", "restau", "resturant"),
}

# Applied in both directions.
UMLAUT_PAIRS: tuple[tuple[str, str], ...] = (
    ("ä", "ae"),
    ("ö", "oe"),
    ("ü", "ue"),
)

# Category-specific compound terms appended on top of the graph expansion.
_CATEGORY_EXTRAS: dict[str, tuple[str, ...]] = {
    "food": (
        "restaurant", "café", "bar", "bakery", "bistro",
        "essen", "speise", "küche", "kochen",
        "vegan", "vegetarian", "bio", "organic",
        "street food", "fast food", "fine dining",
        "breakfast", "lunch", "dinner", "brunch",
        "pizza", "pasta", "burger", "sushi",
        "gastronomie", "kulinarik", "gourmet",
    ),
}


LANGUAGE_DICTIONARY: Mapping[str, Mapping[str, tuple[str, ...]]] = MappingProxyType(
    {k: MappingProxyType(v) for k, v in _LANGUAGE_DICTIONARY.items()}
)
INTEREST_GRAPH: Mapping[str, InterestNode] = MappingProxyType(_INTEREST_GRAPH)
KNOWN_TYPOS: Mapping[str, tuple[str, ...]] = MappingProxyType(_KNOWN_TYPOS)
CATEGORY_EXTRAS: Mapping[str, tuple[str, ...]] = MappingProxyType(_CATEGORY_EXTRAS)


def known_categories() -> list[str]:
    """Every term with a dictionary or graph entry, sorted."""
    return sorted(set(LANGUAGE_DICTIONARY) | set(INTEREST_GRAPH))
