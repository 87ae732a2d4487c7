"""Parser for the HTTP Link header used by GitHub pagination.

GitHub advertises further pages with a header such as:

    <https://api.github.com/repositories/1/commits?page=2>; rel="next",
    <https://api.github.com/repositories/1/commits?page=5>; rel="last"

The URLs already carry the correct page cursor and are followed verbatim.
See: https://docs.github.com/en/rest/using-the-rest-api/using-pagination-in-the-rest-api
"""

from collections.abc import Iterator


def parse_link_header(value: str | None) -> dict[str, str]:
    """Parse a Link header into a mapping of relation name to URL.

    Tolerates unquoted relation values, extra parameters, whitespace
    and entries carrying several space-separated relations. When a
    relation appears twice the first URL wins. Malformed entries are
    skipped.

    Args:
        value: Raw header value (None or empty yields an empty mapping)

    Returns:
        Dict such as {"next": "https://...", "last": "https://..."}
    """
    links: dict[str, str] = {}
    if not value:
        return links

    for entry in _split_entries(value):
        # The URL may itself contain ";", so params start after the first ">"
        entry = entry.strip()
        end = entry.find(">")
        if not entry.startswith("<") or end == -1:
            continue
        url = entry[1:end].strip()
        params = entry[end + 1 :]
        if not url:
            continue

        for param in params.split(";"):
            key, eq, raw = param.partition("=")
            if not eq or key.strip().lower() != "rel":
                continue
            for rel in raw.strip().strip('"').split():
                links.setdefault(rel.lower(), url)

    return links


def next_page_url(value: str | None) -> str | None:
    """Return the rel="next" URL from a Link header, if any."""
    return parse_link_header(value).get("next")


def _split_entries(value: str) -> Iterator[str]:
    """Split on commas that are not inside <...>."""
    depth = 0
    start = 0
    for i, char in enumerate(value):
        if char == "<":
            depth += 1
        elif char == ">" and depth:
            depth -= 1
        elif char == "," and depth == 0:
            yield value[start:i]
            start = i + 1
    yield value[start:]
