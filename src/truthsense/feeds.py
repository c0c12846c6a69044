"""
RSS scraper that writes a plain-text report of several feeds.

Independent of the headline scorer: it only fetches, parses and renders.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Literal, Sequence

import feedparser
import httpx

logger = logging.getLogger(__name__)

MISSING = "(none)"
HEADER_RULE = "=" * 49
SECTION_RULE = "-" * 47


class FeedError(RuntimeError):
    """Raised when a feed cannot be retrieved."""


@dataclass
class FeedItem:
    title: str = MISSING
    description: str = MISSING
    link: str = MISSING
    published: str = MISSING


@dataclass
class FeedReport:
    title: str = MISSING
    items: list[FeedItem] = field(default_factory=list)


@dataclass
class FeedOutcome:
    url: str
    status: Literal["ok", "invalid", "failed"]
    item_count: int = 0
    error: str | None = None


def _text(value: object) -> str:
    if value is None:
        return MISSING
    text = str(value).strip()
    return text or MISSING


def parse_feed(document: bytes | str) -> FeedReport | None:
    """Parse an RSS/Atom document; None when it is not a recognizable feed."""
    if isinstance(document, str):
        # feedparser treats some strings as URLs or paths; bytes are always content
        document = document.encode("utf-8")
    parsed = feedparser.parse(document)
    if not parsed.get("version"):
        return None
    channel = parsed.get("feed", {})
    items = [
        FeedItem(
            title=_text(entry.get("title")),
            description=_text(entry.get("summary")),
            link=_text(entry.get("link")),
            published=_text(entry.get("published")),
        )
        for entry in parsed.get("entries", [])
    ]
    return FeedReport(title=_text(channel.get("title")), items=items)


def render_report(report: FeedReport) -> str:
    lines = [f"Feed Title: {report.title}", ""]
    for item in report.items:
        lines.extend(
            [
                f"Title: {item.title}",
                f"Description: {item.description}",
                f"Link: {item.link}",
                f"Published: {item.published}",
                SECTION_RULE,
            ]
        )
    return "\n".join(lines) + "\n"


class FeedScraper:
    def __init__(self, *, timeout: float = 15.0, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._timeout = timeout
        self._transport = transport

    async def fetch(self, client: httpx.AsyncClient, url: str) -> bytes:
        try:
            response = await client.get(url)
        except httpx.HTTPError as exc:
            raise FeedError(str(exc) or exc.__class__.__name__) from exc
        if not response.is_success:
            raise FeedError(f"HTTP {response.status_code} - {response.reason_phrase}")
        return response.content

    async def scrape_feeds(self, feed_urls: Sequence[str], output_path: str | Path) -> list[FeedOutcome]:
        """Fetch every feed in order and write one combined report file."""
        outcomes: list[FeedOutcome] = []
        path = Path(output_path)
        async with httpx.AsyncClient(
            timeout=self._timeout,
            transport=self._transport,
            follow_redirects=True,
        ) as client:
            with path.open("w", encoding="utf-8") as writer:
                writer.write(f"RSS Scrape Results - {datetime.now(timezone.utc).isoformat()}\n")
                writer.write(f"{HEADER_RULE}\n\n")

                for url in feed_urls:
                    writer.write(f"Fetching feed: {url}\n")
                    writer.write(f"{SECTION_RULE}\n")
                    outcome = await self._scrape_one(client, url, writer)
                    outcomes.append(outcome)
                    writer.write("\n\n")

        ok = sum(1 for outcome in outcomes if outcome.status == "ok")
        logger.info("Feed report written to %s (%d/%d feeds ok)", path, ok, len(outcomes))
        return outcomes

    async def _scrape_one(self, client: httpx.AsyncClient, url: str, writer) -> FeedOutcome:
        try:
            document = await self.fetch(client, url)
        except FeedError as exc:
            logger.warning("Failed to retrieve feed %s: %s", url, exc)
            writer.write(f"Failed to retrieve feed: {exc}\n\n")
            return FeedOutcome(url=url, status="failed", error=str(exc))

        report = parse_feed(document)
        if report is None:
            logger.warning("Not a valid feed: %s", url)
            writer.write("Not a valid RSS feed.\n\n")
            return FeedOutcome(url=url, status="invalid")

        writer.write(render_report(report))
        logger.info("Fetched %d items from %s", len(report.items), url)
        return FeedOutcome(url=url, status="ok", item_count=len(report.items))


async def scrape_feeds(
    feed_urls: Sequence[str],
    output_path: str | Path,
    *,
    timeout: float = 15.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[FeedOutcome]:
    scraper = FeedScraper(timeout=timeout, transport=transport)
    return await scraper.scrape_feeds(feed_urls, output_path)
