import re
import unicodedata


def normalize_slug(value: str) -> str:
    """'Barbería Demo' -> 'barberia-demo'."""
    if not value:
        return ""

    value = unicodedata.normalize("NFKD", value)
    value = value.encode("ascii", "ignore").decode("ascii")
    value = value.strip().lower()
    value = re.sub(r"[^a-z0-9]+", "-", value)
    value = re.sub(r"-{2,}", "-", value)

    return value.strip("-")
