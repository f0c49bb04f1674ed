# services/scraper.py
"""
Scraping service
----------------
Fetches each referenced URL and pulls out the page's main text.

Extraction order for the body:
1. first <article>
2. first <main>
3. all <p> paragraphs joined

Failures never raise: they come back as ScrapeResult(ok=False, error=...)
and the row keeps its CSV title as text.
"""

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

import requests
from bs4 import BeautifulSoup

from backend.models import Article
from backend.utils.loader import normalize_url

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120 Safari/537.36"
)
DEFAULT_TIMEOUT = 15.0
DEFAULT_CONCURRENCY = 5
MAX_TEXT_CHARS = 200_000

NOISE_TAGS = ["script", "noscript", "style", "svg", "header", "footer", "nav", "form", "aside"]

_HTTP_RE = re.compile(r"^https?://", re.I)
_HTML_TYPE_RE = re.compile(r"text/html|application/xhtml\+xml", re.I)


@dataclass
class ScrapeResult:
    ok: bool
    title: str = ""
    text: str = ""
    error: Optional[str] = None
    status: int = 200

    def to_dict(self):
        if self.ok:
            return {"ok": True, "title": self.title, "text": self.text}
        return {"ok": False, "error": self.error}


def clean_text(s) -> str:
    s = (s or "").replace("\u00a0", " ")
    return re.sub(r"\s+", " ", s).strip()


def extract_main(html: str):
    """Return (title, text) for an HTML document."""
    soup = BeautifulSoup(html, "html.parser")

    for tag in soup.find_all(NOISE_TAGS):
        tag.decompose()

    main = ""
    for name in ("article", "main"):
        el = soup.find(name)
        if el is not None:
            main = el.get_text(" ")
            if main.strip():
                break
    if not main.strip():
        body = soup.body or soup
        main = "\n".join(p.get_text(" ") for p in body.find_all("p"))

    text = clean_text(main)[:MAX_TEXT_CHARS]

    title = ""
    og = soup.find("meta", attrs={"property": "og:title"})
    if og is not None and og.get("content"):
        title = og["content"]
    elif soup.title is not None and soup.title.string:
        title = soup.title.string
    else:
        h1 = soup.find("h1")
        if h1 is not None:
            title = h1.get_text(" ")

    return clean_text(title), text


def fetch_article(url, timeout: float = DEFAULT_TIMEOUT) -> ScrapeResult:
    """Download one page and extract its title and main text."""
    if not url or not isinstance(url, str) or not _HTTP_RE.match(url):
        return ScrapeResult(ok=False, error="Invalid URL", status=400)

    try:
        response = requests.get(
            url,
            headers={"User-Agent": USER_AGENT, "Accept": "text/html,application/xhtml+xml"},
            timeout=timeout,
            allow_redirects=True,
        )
    except requests.RequestException as e:
        logger.warning(f"fetch failed for {url}: {e}")
        return ScrapeResult(ok=False, error=str(e), status=502)

    if not response.ok:
        logger.warning(f"fetch failed for {url}: HTTP {response.status_code}")
        return ScrapeResult(ok=False, error=f"Fetch {response.status_code}", status=502)

    content_type = response.headers.get("content-type", "")
    if not _HTML_TYPE_RE.search(content_type):
        return ScrapeResult(ok=False, error="Not an HTML page", status=415)

    try:
        title, text = extract_main(response.text)
    except Exception as e:
        logger.warning(f"extraction failed for {url}: {e}")
        return ScrapeResult(ok=False, error=str(e), status=502)

    return ScrapeResult(ok=True, title=title, text=text)


def _row_items(rows, title_col, url_col):
    items = []
    for idx, r in enumerate(rows or []):
        r = r if isinstance(r, dict) else {}
        title = str(r.get(title_col) or "").strip() if title_col else ""
        url = str(r.get(url_col) or "").strip() if url_col else ""
        if title or url:
            items.append((idx, title, url))
    return items


def _scrape_one(position, idx, title, url, fetch, timeout):
    text = ""
    final_title = title
    link = normalize_url(url) if url else None

    if link:
        result = fetch(link, timeout=timeout)
        if result.ok:
            text = result.text
            if not final_title and result.title:
                final_title = result.title

    combined = " ".join(part for part in (final_title, text) if part)
    return Article(
        id=f"a{position}",
        title=final_title or url or f"Row {idx + 1}",
        text=combined,
        url=url or None,
    )


def scrape_rows(rows, title_col, url_col, concurrency: int = DEFAULT_CONCURRENCY,
                timeout: float = DEFAULT_TIMEOUT, fetch=fetch_article):
    """
    Scrape every CSV row that has a title or URL with a bounded worker pool.

    Returns:
        list of Article, same order as the kept rows
    """
    items = _row_items(rows, title_col, url_col)
    if not items:
        return []

    workers = max(1, min(int(concurrency or 1), len(items)))
    logger.info("scraping %d rows with %d workers", len(items), workers)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [
            pool.submit(_scrape_one, pos, idx, title, url, fetch, timeout)
            for pos, (idx, title, url) in enumerate(items)
        ]

    articles = []
    for pos, fut in enumerate(futures):
        idx, title, url = items[pos]
        try:
            articles.append(fut.result())
        except Exception as e:
            logger.warning(f"scrape failed for row {idx + 1}: {e}")
            articles.append(Article(
                id=f"a{pos}",
                title=title or url or f"Row {idx + 1}",
                text=title,
                url=url or None,
            ))

    return articles
