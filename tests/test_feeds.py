import httpx
import pytest

from truthsense.feeds import FeedScraper, parse_feed, render_report, scrape_feeds

RSS = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>World News</title>
    <link>https://example.com</link>
    <description>Top stories</description>
    <item>
      <title> Story one </title>
      <description>First story</description>
      <link>https://example.com/1</link>
      <pubDate>Mon, 06 Jan 2025 10:00:00 GMT</pubDate>
    </item>
    <item>
      <title>Story two</title>
      <link>https://example.com/2</link>
    </item>
  </channel>
</rss>
"""


def _handler(request: httpx.Request) -> httpx.Response:
    host = request.url.host
    if host == "good.example":
        return httpx.Response(200, content=RSS)
    if host == "html.example":
        return httpx.Response(200, content=b"<html><body><p>Not a feed</p></body></html>")
    if host == "missing.example":
        return httpx.Response(404)
    raise httpx.ConnectError("connection refused", request=request)


def test_parse_feed_fills_missing_fields():
    report = parse_feed(RSS)
    assert report is not None
    assert report.title == "World News"
    assert len(report.items) == 2
    first, second = report.items
    assert first.title == "Story one"
    assert first.description == "First story"
    assert first.link == "https://example.com/1"
    assert first.published == "Mon, 06 Jan 2025 10:00:00 GMT"
    assert second.description == "(none)"
    assert second.published == "(none)"


def test_parse_feed_rejects_non_feed():
    assert parse_feed("<html><body>hello</body></html>") is None


def test_render_report():
    text = render_report(parse_feed(RSS))
    assert text.startswith("Feed Title: World News\n\n")
    assert "Title: Story one\nDescription: First story\nLink: https://example.com/1\n" in text
    assert text.count("-" * 47) == 2


@pytest.mark.asyncio
async def test_scrape_feeds_writes_report(tmp_path):
    output = tmp_path / "report.txt"
    scraper = FeedScraper(transport=httpx.MockTransport(_handler))
    urls = [
        "https://good.example/rss",
        "https://html.example/",
        "https://missing.example/rss",
        "https://down.example/rss",
    ]
    outcomes = await scraper.scrape_feeds(urls, output)

    assert [o.status for o in outcomes] == ["ok", "invalid", "failed", "failed"]
    assert outcomes[0].item_count == 2
    assert outcomes[2].error == "HTTP 404 - Not Found"
    assert outcomes[3].error == "connection refused"

    text = output.read_text(encoding="utf-8")
    assert text.startswith("RSS Scrape Results - ")
    assert "=" * 49 in text
    for url in urls:
        assert f"Fetching feed: {url}\n" in text
    assert "Feed Title: World News" in text
    assert "Not a valid RSS feed." in text
    assert "Failed to retrieve feed: HTTP 404 - Not Found" in text
    assert "Failed to retrieve feed: connection refused" in text


@pytest.mark.asyncio
async def test_module_scrape_feeds(tmp_path):
    output = tmp_path / "feeds.txt"
    outcomes = await scrape_feeds(
        ["https://good.example/rss"],
        output,
        transport=httpx.MockTransport(_handler),
    )
    assert len(outcomes) == 1
    assert outcomes[0].status == "ok"
    assert "Title: Story two" in output.read_text(encoding="utf-8")
