"""
Core utility functions
"""
import fnmatch
from urllib.parse import urlsplit, urlunsplit

from .constants import URL_SCHEMES, DEFAULT_NAME_PATTERN


# ============================================================
# URL Handling
# ============================================================

def is_absolute_url(value: str) -> bool:
    """Check if value is a well-formed absolute http(s) URL"""
    if not value or any(ch.isspace() for ch in value.strip()):
        return False
    try:
        parts = urlsplit(value.strip())
    except ValueError:
        return False
    return parts.scheme.lower() in URL_SCHEMES and bool(parts.hostname)


def normalize_url(value: str) -> str:
    """
    Normalize an absolute URL.
    
    Scheme and host are lowercased, query and fragment are dropped and
    trailing slashes removed. Path case is kept, collection names live there.
    
    Examples:
        normalize_url("HTTP://TFS:8080/tfs/DefaultCollection/") -> "http://tfs:8080/tfs/DefaultCollection"
    """
    parts = urlsplit(value.strip())
    path = parts.path.rstrip("/")
    return urlunsplit((parts.scheme.lower(), parts.netloc.lower(), path, "", ""))


def join_url(base: str, *segments: str) -> str:
    """Join URL path segments without doubling slashes"""
    url = base.rstrip("/")
    for segment in segments:
        url = f"{url}/{segment.strip('/')}"
    return url


def last_path_segment(url: str) -> str:
    """Last non-empty path segment of URL, or its host"""
    parts = urlsplit(url)
    segments = [s for s in parts.path.split("/") if s]
    return segments[-1] if segments else (parts.hostname or url)


# ============================================================
# Name Matching
# ============================================================

def name_matches(name: str, pattern: str = DEFAULT_NAME_PATTERN) -> bool:
    """Case-insensitive glob match; empty pattern matches everything"""
    if not pattern:
        return True
    return fnmatch.fnmatchcase(name.lower(), pattern.lower())
