"""Persistent identifier normalization and format checks."""

import re
from typing import Optional
from urllib.parse import urlparse

DOI_PATTERN = re.compile(r"^10\.[0-9]{4,}/\S+$")
ISSN_PATTERN = re.compile(r"^[0-9]{4}-?[0-9]{3}[0-9X]$")


def normalize_doi(doi: Optional[str]) -> Optional[str]:
    """Normalize DOI to canonical form."""
    if not doi:
        return None
    doi = doi.lower().strip()
    prefixes = [
        "https://doi.org/",
        "http://doi.org/",
        "https://dx.doi.org/",
        "http://dx.doi.org/",
        "doi:",
    ]
    for prefix in prefixes:
        if doi.startswith(prefix):
            doi = doi[len(prefix):]
    return doi.strip() or None


def normalize_isbn(isbn: Optional[str]) -> Optional[str]:
    """Strip hyphens and whitespace from an ISBN."""
    if not isbn:
        return None
    compact = re.sub(r"[-\s]", "", isbn).upper()
    return compact or None


def is_valid_doi(doi: Optional[str]) -> bool:
    """``10.`` + registrant code of at least four digits + ``/`` + suffix."""
    normalized = normalize_doi(doi)
    return bool(normalized and DOI_PATTERN.match(normalized))


def is_valid_isbn(isbn: Optional[str]) -> bool:
    """Length check only; check digits are not verified."""
    compact = normalize_isbn(isbn)
    return compact is not None and len(compact) in (10, 13)


def is_valid_issn(issn: Optional[str]) -> bool:
    if not issn:
        return False
    return bool(ISSN_PATTERN.match(issn.strip().upper()))


def is_http_url(url: Optional[str]) -> bool:
    """True for absolute http(s) URLs with a host."""
    if not url:
        return False
    parsed = urlparse(url.strip())
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)
