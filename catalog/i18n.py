"""
Language handling for the receipt page.

The active language is always passed explicitly (query parameter, session
state or Accept-Language header); nothing in the catalog package reads a
global language setting. This module normalizes language codes and holds the
UI label table for each supported language.
"""

from typing import Dict, Optional

SUPPORTED_LANGUAGES = ("en", "es")
DEFAULT_LANGUAGE = "en"

_LABELS: Dict[str, Dict[str, str]] = {
    "en": {
        "page_title": "Receipt Details",
        "loading": "Loading...",
        "placeholder": "N/A",
        "perfect_for": "Perfect for",
        "prep_time": "Prep time",
        "calories": "Calories",
        "ingredients": "Ingredients",
        "benefits": "Benefits",
        "how_to_prepare": "How to prepare",
        "nutrition": "Nutritional information",
        "protein": "Protein",
        "carbohydrates": "Carbohydrates",
        "fats": "Fats",
        "fiber": "Fiber",
        "sugars": "Sugars",
        "sodium": "Sodium",
        "tags": "Tags",
        "quote": "Quote",
        "no_receipt_for_slug": "No receipt found for slug {slug} in language {language}.",
        "footer": "Receipt catalog. Simple, healthy food guides.",
    },
    "es": {
        "page_title": "Detalles de la receta",
        "loading": "Cargando...",
        "placeholder": "N/D",
        "perfect_for": "Ideal para",
        "prep_time": "Tiempo de preparación",
        "calories": "Calorías",
        "ingredients": "Ingredientes",
        "benefits": "Beneficios",
        "how_to_prepare": "Cómo prepararlo",
        "nutrition": "Información nutricional",
        "protein": "Proteínas",
        "carbohydrates": "Carbohidratos",
        "fats": "Grasas",
        "fiber": "Fibra",
        "sugars": "Azúcares",
        "sodium": "Sodio",
        "tags": "Etiquetas",
        "quote": "Cita",
        "no_receipt_for_slug": "No se encontró ninguna receta con el slug {slug} en el idioma {language}.",
        "footer": "Catálogo de recetas. Guías de comida simples y saludables.",
    },
}


def normalize_language(code: Optional[str], default: str = DEFAULT_LANGUAGE) -> str:
    """
    Normalize a language code to one of SUPPORTED_LANGUAGES.

    Region suffixes are dropped ("es-MX" -> "es", "en_GB" -> "en").
    Unsupported or empty codes fall back to the default.

    Args:
        code: Raw language code (may be None)
        default: Fallback language

    Returns:
        Supported two-letter language code
    """
    if not code:
        return default
    base = code.strip().replace("_", "-").split("-")[0].lower()
    return base if base in SUPPORTED_LANGUAGES else default


def resolve_language(
    explicit: Optional[str] = None,
    accept_language: Optional[str] = None,
    default: str = DEFAULT_LANGUAGE,
) -> str:
    """
    Pick the active language for a request.

    An explicit value (e.g. a ?language= query parameter) wins. Otherwise the
    first supported entry of an Accept-Language header is used, in header
    order (quality weights are not re-sorted).

    Args:
        explicit: Language chosen by the caller
        accept_language: Raw Accept-Language header value
        default: Fallback language

    Returns:
        Supported language code
    """
    if explicit and explicit.strip():
        return normalize_language(explicit, default=default)
    if accept_language:
        for entry in accept_language.split(","):
            code = entry.split(";")[0].strip()
            if code and code != "*":
                candidate = normalize_language(code, default="")
                if candidate:
                    return candidate
    return default


def get_labels(language: Optional[str]) -> Dict[str, str]:
    """Return the label table for a language (default language if unsupported)."""
    return _LABELS[normalize_language(language)]
