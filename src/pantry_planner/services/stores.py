"""Store brand detection for product brand strings."""

# Longer prefixes first so sub-brands win over their parent store.
STORE_BRAND_MAP: list[tuple[str, str]] = [
    ("tesco finest", "Tesco"),
    ("tesco everyday value", "Tesco"),
    ("tesco", "Tesco"),
    ("sainsbury's taste the difference", "Sainsbury's"),
    ("sainsbury's", "Sainsbury's"),
    ("sainsbury", "Sainsbury's"),
    ("asda extra special", "Asda"),
    ("asda", "Asda"),
    ("marks & spencer", "M&S"),
    ("m&s", "M&S"),
    ("aldi", "Aldi"),
    ("lidl", "Lidl"),
    ("morrisons", "Morrisons"),
    ("waitrose", "Waitrose"),
    ("co-op", "Co-op"),
    ("iceland", "Iceland"),
    ("spar", "Spar"),
]


def detect_store_brand(brands: str | None) -> str | None:
    """Return the canonical store name for a store-brand string, if any."""
    if not brands:
        return None
    lowered = brands.lower()
    for prefix, store in STORE_BRAND_MAP:
        if prefix in lowered:
            return store
    return None
