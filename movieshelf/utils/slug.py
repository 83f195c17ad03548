import re

_INVALID_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")


def slugify(title: str) -> str:
    """Turn a title into a lowercase, hyphen-separated URL identifier"""
    cleaned = _INVALID_CHARS.sub("", title.lower()).strip()
    return _WHITESPACE.sub("-", cleaned)
