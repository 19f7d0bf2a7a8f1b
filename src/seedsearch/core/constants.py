"""Domain constants for seedsearch."""

# Synonym classes used for keyword corroboration in the relevance gate.
# Keys are lowercase; values include the key itself.
DEFAULT_SYNONYMS: dict[str, tuple[str, ...]] = {
    "e-commerce": ("ecommerce", "e-commerce", "commerce", "online store", "retail"),
    "ecommerce": ("ecommerce", "e-commerce", "commerce", "online store", "retail"),
    "podcasting": ("podcast", "podcasting", "podcasts", "audio"),
    "podcast": ("podcast", "podcasting", "podcasts", "audio"),
    "ai": ("ai", "artificial intelligence", "machine learning", "ml"),
    "artificial intelligence": ("ai", "artificial intelligence", "machine learning", "ml"),
    "hr": ("hr", "human resources", "personnel", "workforce"),
    "human resources": ("hr", "human resources", "personnel", "workforce"),
    "real estate": (
        "real estate", "property management", "construction",
        "residential", "commercial real estate", "proptech",
    ),
    "transportation": ("transportation", "vehicles", "ev", "electric vehicle", "automotive", "fleet"),
}

# Query term -> lowercase company names kept out of the primary result set.
DEFAULT_EXCLUSIONS: dict[str, tuple[str, ...]] = {
    "real estate": ("cobalt intelligence", "segmetrics"),
}

MAX_QUERY_CHARS: int = 5000
UNKNOWN_GROUP: str = "Unknown"
