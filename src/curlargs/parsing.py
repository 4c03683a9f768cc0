"""Parsers for the composite string values curl flags accept.

Each parser is a total function: malformed input yields ``None`` (or is
left out of the returned list) instead of raising.

Grammars:
    header:      NAME ":" VALUE          split on the first colon, both trimmed
    credentials: USER ":" PASSWORD       split on the first colon, both trimmed
    cookie:      PAIR *( ";" PAIR )      PAIR is NAME "=" VALUE, both trimmed
    form field:  KEY "=" VALUE           split on the first "=", verbatim
"""

from __future__ import annotations

from urllib.parse import quote_plus


def split_pair(raw: str, separator: str) -> tuple[str, str] | None:
    """Split ``raw`` on the first ``separator``.

    Returns:
        (left, right), or None if the separator does not occur
    """
    left, found, right = raw.partition(separator)
    if not found:
        return None
    return left, right


def parse_header(raw: str) -> tuple[str, str] | None:
    """Parse a ``Name: Value`` header line."""
    pair = split_pair(raw, ":")
    if pair is None:
        return None
    name, value = pair[0].strip(), pair[1].strip()
    if not name:
        return None
    return name, value


def parse_credentials(raw: str) -> tuple[str, str] | None:
    """Parse a ``user:password`` credential string."""
    pair = split_pair(raw, ":")
    if pair is None:
        return None
    return pair[0].strip(), pair[1].strip()


def parse_cookies(raw: str) -> list[tuple[str, str]]:
    """Parse a curl-style cookie string such as ``"a=1; b=2"``."""
    cookies = []
    for chunk in raw.split(";"):
        chunk = chunk.strip()
        if not chunk:
            continue
        pair = split_pair(chunk, "=")
        if pair is None:
            continue
        name, value = pair[0].strip(), pair[1].strip()
        if name:
            cookies.append((name, value))
    return cookies


def parse_form_field(raw: str) -> tuple[str, str] | None:
    """Parse a ``key=value`` form field."""
    return split_pair(raw, "=")


def urlencode_data(raw: str) -> str:
    """Encode a ``--data-urlencode`` value.

    With a ``=`` present only the part after the first ``=`` is encoded and
    the prefix is kept as given; otherwise the whole value is encoded.

    Example:
        >>> urlencode_data("q=hello world")
        'q=hello+world'
        >>> urlencode_data("a&b")
        'a%26b'
    """
    pair = split_pair(raw, "=")
    if pair is None:
        return quote_plus(raw, safe="")
    return f"{pair[0]}={quote_plus(pair[1], safe='')}"


def append_query(url: str, query: str) -> str:
    """Append a raw query string to ``url``."""
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{query}"
