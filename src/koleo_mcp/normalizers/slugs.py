"""Station name to Koleo URL slug conversion."""

# Applied per character after lowercasing. Anything not listed passes through.
TRANSLITERATIONS: dict[str, str] = {
    "ł": "l",
    "ń": "n",
    "ą": "a",
    "ę": "e",
    "ś": "s",
    "ć": "c",
    "ó": "o",
    "ź": "z",
    "ż": "z",
    " ": "-",
    "/": "-",
    "_": "-",
}


def name_to_slug(name: str) -> str:
    """Convert a station name to the slug form used in Koleo URLs.

    Repeated or leading/trailing separators are kept as they are.

    Examples:
        "Kraków Główny" -> "krakow-glowny"
        "Warszawa Centralna" -> "warszawa-centralna"
        " a__b " -> "-a--b-"
    """
    return "".join(TRANSLITERATIONS.get(char, char) for char in name.lower())


def looks_like_slug(value: str) -> bool:
    """Check whether a value already looks like a slug.

    Heuristic only: a lowercase single word ("gdynia") is not treated as a
    slug, which is harmless since name_to_slug leaves it unchanged.
    """
    return "-" in value and value.lower() == value


def resolve_slug(station: str) -> str:
    """Return the slug for a station given either a slug or a display name."""
    return station if looks_like_slug(station) else name_to_slug(station)
