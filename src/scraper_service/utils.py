"""Utility functions for HTML processing."""

from __future__ import annotations

import re
from urllib.parse import urlparse

from bs4 import BeautifulSoup

# Elements removed together with their contents before text extraction
STRIP_TAGS: tuple[str, ...] = (
    "script",
    "style",
    "link",
    "meta",
    "img",
    "video",
    "audio",
    "source",
    "track",
    "iframe",
    "object",
    "embed",
    "canvas",
    "svg",
    "picture",
    "noscript",
    "template",
)

MAX_CONTENT_LENGTH = 50_000
MAX_LINKS = 10

# Exhausted one pattern at a time, in this order
LINK_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"""href=["']([^"']+)["']""", re.IGNORECASE),
    re.compile(r"""src=["']([^"']+)["']""", re.IGNORECASE),
    re.compile(r"""action=["']([^"']+)["']""", re.IGNORECASE),
)

IGNORED_PREFIXES: tuple[str, ...] = ("javascript:", "mailto:", "tel:", "data:")

FILTERED_EXTENSIONS: tuple[str, ...] = (
    # Images
    ".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg", ".ico", ".bmp", ".tiff", ".avif",
    # Video
    ".mp4", ".webm", ".avi", ".mov", ".mkv", ".flv", ".wmv", ".m4v", ".swf", ".vtt",
    # Audio
    ".mp3", ".wav", ".ogg", ".flac", ".aac", ".m4a",
    # Archives
    ".zip", ".rar", ".7z", ".tar", ".gz", ".bz2",
    # Executables
    ".exe", ".dmg", ".msi", ".apk", ".rpm",
    # Office documents
    ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx", ".odt",
    # Fonts
    ".woff", ".woff2", ".ttf", ".otf", ".eot",
    # Stylesheets
    ".css",
)

FILTERED_MARKERS: tuple[str, ...] = (
    "favicon",
    "/css/",
    ".css?",
    "fonts.googleapis.com",
    "fonts.gstatic.com",
)

BLOCKED_HOSTS: frozenset[str] = frozenset(
    {
        "fonts.googleapis.com",
        "fonts.gstatic.com",
        "cdnjs.cloudflare.com",
        "stackpath.bootstrapcdn.com",
        "maxcdn.bootstrapcdn.com",
        "ajax.googleapis.com",
    }
)

COMMON_DOMAIN_MARKERS: tuple[str, ...] = (".com", ".org", ".net")

_DEFAULT_PORTS = {"http": 80, "https": 443}
_WHITESPACE = re.compile(r"\s+")
# "<" that would open a tag once the text is rendered as HTML again
_TAG_OPEN = re.compile(r"<(?=[A-Za-z/!?])")


def reduce_to_text(html: str) -> str:
    """Reduce an HTML document to a single line of plain text.

    Non-text elements (scripts, styles, media, embeds, templates, ...) are
    dropped with their contents, every other tag is replaced by whitespace,
    whitespace runs are collapsed and the result is capped at
    MAX_CONTENT_LENGTH characters.

    Args:
        html: The HTML content to process

    Returns:
        Plain text content
    """
    soup = BeautifulSoup(html, "lxml")

    for element in soup.find_all(list(STRIP_TAGS)):
        # Nested matches are destroyed along with their parent
        if element.decomposed:
            continue
        element.decompose()

    text = soup.get_text(separator=" ")
    text = _TAG_OPEN.sub("&lt;", text)
    text = _WHITESPACE.sub(" ", text).strip()
    return text[:MAX_CONTENT_LENGTH]


def find_link_candidates(html: str) -> list[str]:
    """Collect raw href, src and action attribute values from HTML.

    All href values come first, then src, then action, each in document order.
    """
    candidates: list[str] = []
    for pattern in LINK_PATTERNS:
        candidates.extend(match.group(1) for match in pattern.finditer(html))
    return candidates


def is_filtered_resource(link: str) -> bool:
    """Check whether a link points at a static asset rather than a page."""
    lowered = link.lower()
    if any(ext in lowered for ext in FILTERED_EXTENSIONS):
        return True
    return any(marker in lowered for marker in FILTERED_MARKERS)


def url_origin(url: str) -> str:
    """Return scheme://host[:port] for an absolute URL.

    Raises:
        ValueError: If the URL has no scheme or host, or an invalid port
    """
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.hostname:
        raise ValueError(f"Not an absolute URL: {url}")

    host = parsed.hostname
    if ":" in host:
        host = f"[{host}]"

    port = parsed.port
    if port is not None and _DEFAULT_PORTS.get(parsed.scheme) != port:
        host = f"{host}:{port}"

    return f"{parsed.scheme}://{host}"


def _clean_link(link: str) -> str | None:
    """Strip fragment and query, returning None for links that are never followed."""
    cleaned = link.split("#")[0].split("?")[0]

    if not cleaned.strip() or cleaned in ("/", "#"):
        return None
    if cleaned.lower().startswith(IGNORED_PREFIXES):
        return None
    if is_filtered_resource(cleaned):
        return None
    return cleaned


def resolve_link(link: str, base_url: str) -> str | None:
    """Resolve a cleaned link against the page URL.

    Args:
        link: Link with fragment and query already removed
        base_url: URL of the page the link was found on

    Returns:
        Absolute URL, or None when the link is too short to be a relative path

    Raises:
        ValueError: If base_url cannot be parsed
    """
    if link.startswith("/"):
        return url_origin(base_url) + link

    if link.startswith("http"):
        return link

    if "." in link or len(link) > 3:
        base_path = urlparse(base_url).path or "/"
        if not base_path.endswith("/"):
            base_path += "/"
        return url_origin(base_url) + base_path + link

    return None


def is_allowed_host(hostname: str, page_hostname: str) -> bool:
    """Check a resolved link host against the page host and CDN block list.

    Besides the page's own host, any host containing .com, .org or .net is
    accepted.
    """
    if hostname in BLOCKED_HOSTS:
        return False
    if hostname == page_hostname:
        return True
    return any(marker in hostname for marker in COMMON_DOMAIN_MARKERS)


def extract_links(html: str, base_url: str, limit: int = MAX_LINKS) -> list[str]:
    """Extract normalized outbound links from HTML.

    Args:
        html: The raw HTML content
        base_url: URL the HTML was fetched from
        limit: Maximum number of links to return (default: 10)

    Returns:
        Unique absolute URLs in first-seen order
    """
    try:
        page_hostname = urlparse(base_url).hostname
    except ValueError:
        return []
    if not page_hostname:
        return []

    links: list[str] = []
    seen: set[str] = set()

    for candidate in find_link_candidates(html):
        cleaned = _clean_link(candidate)
        if cleaned is None:
            continue

        try:
            resolved = resolve_link(cleaned, base_url)
            if resolved is None:
                continue
            hostname = urlparse(resolved).hostname
        except ValueError:
            continue

        if not hostname or not is_allowed_host(hostname, page_hostname):
            continue

        if resolved not in seen:
            seen.add(resolved)
            links.append(resolved)
            if len(links) >= limit:
                break

    return links
