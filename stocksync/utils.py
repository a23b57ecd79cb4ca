import re
from datetime import datetime
from typing import Any, Iterable, Iterator, TypeVar

T = TypeVar("T")

# Hyphen, non-breaking hyphen, figure dash, en/em dash, horizontal bar, minus sign.
_DASHES_RE = re.compile("[\u2010-\u2015\u2212]")
# Zero-width space/non-joiner/joiner and the byte-order mark.
_ZERO_WIDTH_RE = re.compile("[\u200b-\u200d\ufeff]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_sku(value: Any) -> str:
    """
    Canonicalizes free-text SKU input typed into the sheet.
    Never raises; blank input comes back as "".
    """
    if value is None or value == "":
        return ""
    s = str(value).strip()
    if not s:
        return ""
    s = _DASHES_RE.sub("-", s)
    s = _ZERO_WIDTH_RE.sub("", s)
    s = _WHITESPACE_RE.sub(" ", s)
    # Stripping zero-width characters can expose new outer whitespace.
    return s.strip()


def unique_skus(values: Iterable[Any]) -> list[str]:
    """Normalizes, drops blanks and de-duplicates while keeping first-seen order."""
    return list(dict.fromkeys(s for s in map(normalize_sku, values) if s))


def chunked(items: list[T], size: int) -> Iterator[list[T]]:
    if size < 1:
        raise ValueError(f"Chunk size must be positive, got {size}")
    for i in range(0, len(items), size):
        yield items[i : i + size]


def bool_to_yn(value: Any) -> str:
    return "Y" if value else "N"


def truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit]


def get_date_suffix_for_filename() -> str:
    """Returns the current date as a YYYY-MM-DD string for filenames."""
    return datetime.now().strftime("%Y-%m-%d")
