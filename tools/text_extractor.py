"""
Text Extractor Tool — extracts job postings from career page HTML.
Uses BeautifulSoup, either with configured CSS selectors or by scanning
job-related links.
"""

import re
from urllib.parse import urljoin, urlparse
from bs4 import BeautifulSoup

from models.source import SelectorRules


# Words in a link's text or href that suggest it points to a job posting
JOB_KEYWORDS = [
    "job",
    "stelle",
    "stellen",
    "karriere",
    "career",
    "vacancy",
    "position",
    "jobportal",
]

MIN_LINK_TEXT_LENGTH = 4


def clean_text(value: str) -> str:
    """Collapse runs of whitespace into single spaces."""
    return re.sub(r"\s+", " ", value or "").strip()


def to_absolute_url(href: str, base_url: str):
    """
    Resolve a (possibly relative) link against the page URL.

    Returns:
        The absolute http(s) URL, or None if the link cannot be resolved.
    """
    if not href:
        return None
    try:
        full_url = urljoin(base_url, href.strip())
        parsed = urlparse(full_url)
    except ValueError:
        return None
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return None
    return full_url


def _href_of(element):
    if element is None:
        return None
    href = element.get("href")
    if href:
        return href
    anchor = element.find("a", href=True)
    return anchor["href"] if anchor else None


def extract_by_selectors(html: str, base_url: str, selectors: SelectorRules = None) -> list[dict]:
    """
    Extract postings with the site's configured CSS selectors.

    Args:
        html: Raw HTML string.
        base_url: Page URL for resolving relative links.
        selectors: Item/title/link/location selectors (None → no results).

    Returns:
        List of dicts with 'title', 'url' and optionally 'location' keys.
    """
    if not html or selectors is None:
        return []

    soup = BeautifulSoup(html, "html.parser")
    results = []

    for item in soup.select(selectors.item):
        title_element = item.select_one(selectors.title) if selectors.title else item
        link_element = item.select_one(selectors.link) if selectors.link else title_element
        if title_element is None:
            continue

        title = clean_text(title_element.get_text())
        href = _href_of(link_element)
        if not title or not href:
            continue

        url = to_absolute_url(href, base_url)
        if not url:
            continue

        entry = {"title": title, "url": url}
        if selectors.location:
            location_element = item.select_one(selectors.location)
            entry["location"] = clean_text(location_element.get_text()) if location_element else ""
        results.append(entry)

    return results


def extract_job_links(html: str, base_url: str) -> list[dict]:
    """
    Extract links that likely point to job postings.

    A link qualifies when its visible text has at least four characters and
    its text or href contains a job keyword.

    Args:
        html: Raw HTML string.
        base_url: Base URL for resolving relative links.

    Returns:
        List of dicts with 'title' and 'url' keys.
    """
    if not html:
        return []

    soup = BeautifulSoup(html, "html.parser")
    job_links = []

    for link in soup.find_all("a", href=True):
        href = link["href"]
        text = clean_text(link.get_text())
        if len(text) < MIN_LINK_TEXT_LENGTH:
            continue

        full_url = to_absolute_url(href, base_url)
        if not full_url:
            continue

        haystack = f"{text} {href}".lower()
        if any(keyword in haystack for keyword in JOB_KEYWORDS):
            job_links.append({"title": text, "url": full_url})

    return job_links


def extract_postings(html: str, base_url: str, selectors: SelectorRules = None) -> list[dict]:
    """Structured extraction first, anchor scan if it yields nothing."""
    return extract_by_selectors(html, base_url, selectors) or extract_job_links(html, base_url)
