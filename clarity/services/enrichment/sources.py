"""Lightweight evidence extractors for website, listing and social references."""

import logging
import re
from urllib.parse import urlparse

import httpx
from bs4 import BeautifulSoup

from clarity.config.constants import Relevance, SourceKind
from clarity.services.enrichment.models import EvidenceNugget

logger = logging.getLogger(__name__)

SERVICE_KEYWORDS: tuple[str, ...] = ("service", "offer", "provide", "specialize", "expert")

SOCIAL_PLATFORMS: dict[str, str] = {
    "facebook.com": "Facebook",
    "instagram.com": "Instagram",
    "linkedin.com": "LinkedIn",
    "twitter.com": "Twitter/X",
    "x.com": "Twitter/X",
    "youtube.com": "YouTube",
    "tiktok.com": "TikTok",
}

_WHITESPACE = re.compile(r"\s+")
_MAX_HEADINGS = 5


def normalize_url(ref: str) -> str:
    """Prepend https:// to references supplied without a scheme."""
    ref = ref.strip()
    if not re.match(r"^[a-zA-Z][a-zA-Z0-9+.-]*://", ref):
        return f"https://{ref}"
    return ref


def truncate_snippet(text: str, max_chars: int) -> str:
    """Collapse whitespace and cut to max_chars, marking the cut with '...'."""
    text = _WHITESPACE.sub(" ", text).strip()
    if len(text) <= max_chars:
        return text
    return text[: max_chars - 3].rstrip() + "..."


def detect_platform(ref: str) -> str | None:
    """Social platform name from a profile URL, or None."""
    if ref.strip().startswith("@"):
        return None
    host = (urlparse(normalize_url(ref)).hostname or "").lower()
    for domain, platform in SOCIAL_PLATFORMS.items():
        if host == domain or host.endswith(f".{domain}"):
            return platform
    return None


def _meta_content(soup: BeautifulSoup, **attrs: str) -> str:
    tag = soup.find("meta", attrs=attrs)
    if tag is None:
        return ""
    content = tag.get("content") or ""
    return content.strip() if isinstance(content, str) else ""


def _page_title(soup: BeautifulSoup) -> str:
    if soup.title and soup.title.string:
        return soup.title.string.strip()
    return ""


class EvidenceSources:
    """Fetches and summarizes each kind of reference into at most one nugget.

    Extractors raise on network or HTTP errors; the enricher decides what a
    failure means.
    """

    def __init__(self, snippet_max_chars: int = 150):
        self.snippet_max_chars = snippet_max_chars

    def for_kind(self, kind: SourceKind):
        return {
            SourceKind.WEBSITE: self.website,
            SourceKind.LISTING: self.listing,
            SourceKind.SOCIAL: self.social,
        }[kind]

    async def _fetch(self, client: httpx.AsyncClient, url: str) -> BeautifulSoup:
        response = await client.get(url)
        response.raise_for_status()
        return BeautifulSoup(response.text, "html.parser")

    async def website(self, client: httpx.AsyncClient, ref: str) -> EvidenceNugget | None:
        """Business name, description and headline services from the homepage."""
        soup = await self._fetch(client, normalize_url(ref))

        name = _meta_content(soup, property="og:site_name") or _page_title(soup)
        description = _meta_content(soup, name="description") or _meta_content(
            soup, property="og:description"
        )
        services = [
            h.get_text(" ", strip=True) for h in soup.find_all(["h2", "h3"])[:_MAX_HEADINGS]
        ]
        services_text = ", ".join(s for s in services if s)

        if description and len(description) > 10:
            snippet = f"{name} - {description}" if name else description
        elif services_text:
            snippet = f"{name} - {services_text}" if name else services_text
        else:
            snippet = name
        if not snippet:
            return None

        searchable = f"{description} {services_text}".lower()
        has_service_mention = any(kw in searchable for kw in SERVICE_KEYWORDS)

        return EvidenceNugget(
            source_kind=SourceKind.WEBSITE,
            relevance=Relevance.HIGH if has_service_mention else Relevance.MEDIUM,
            content=truncate_snippet(snippet, self.snippet_max_chars),
        )

    async def listing(self, client: httpx.AsyncClient, ref: str) -> EvidenceNugget | None:
        """Listing description, or a bare presence acknowledgement."""
        soup = await self._fetch(client, normalize_url(ref))
        description = _meta_content(soup, name="description") or _meta_content(
            soup, property="og:description"
        )
        if description:
            return EvidenceNugget(
                source_kind=SourceKind.LISTING,
                relevance=Relevance.MEDIUM,
                content=truncate_snippet(description, self.snippet_max_chars),
            )
        return EvidenceNugget(
            source_kind=SourceKind.LISTING,
            relevance=Relevance.LOW,
            content="Business listing present",
        )

    async def social(self, client: httpx.AsyncClient, ref: str) -> EvidenceNugget | None:
        """Confirm the profile resolves; use its bio when one is exposed."""
        platform = detect_platform(ref)
        if platform is None:
            logger.debug("Unrecognized social reference %r", ref)
            return None

        soup = await self._fetch(client, normalize_url(ref))
        bio = _meta_content(soup, property="og:description")
        if bio:
            return EvidenceNugget(
                source_kind=SourceKind.SOCIAL,
                relevance=Relevance.MEDIUM,
                content=truncate_snippet(f"{platform}: {bio}", self.snippet_max_chars),
            )
        return EvidenceNugget(
            source_kind=SourceKind.SOCIAL,
            relevance=Relevance.LOW,
            content=f"Active on {platform}",
        )
