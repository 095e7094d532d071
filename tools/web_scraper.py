"""
Web Scraper Tool — fetches raw HTML from URLs.
Uses httpx with browser-like headers and a hard timeout. No retries.
"""

import httpx
from config.settings import settings


# Common browser-like headers to avoid being blocked
DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "de-AT,de;q=0.9,en;q=0.8",
    "Accept-Encoding": "gzip, deflate",
}


def fetch_page(url: str, timeout: int = None) -> dict:
    """
    Fetch a web page and return its HTML content.

    Args:
        url: The URL to fetch.
        timeout: Request timeout in seconds (defaults to settings.request_timeout).

    Returns:
        dict with keys:
            - success (bool): Whether the fetch was successful.
            - html (str): The raw HTML content (empty string on failure).
            - status_code (int): HTTP status code (0 on connection error).
            - error (str): Error message if failed (empty string on success).
            - url (str): The final URL after redirects, used to resolve relative links.
    """
    timeout = timeout or settings.request_timeout

    try:
        with httpx.Client(
            headers=DEFAULT_HEADERS,
            timeout=timeout,
            follow_redirects=True,
        ) as client:
            response = client.get(url)

            if response.is_success:
                return {
                    "success": True,
                    "html": response.text,
                    "status_code": response.status_code,
                    "error": "",
                    "url": str(response.url),
                }
            return {
                "success": False,
                "html": "",
                "status_code": response.status_code,
                "error": f"HTTP {response.status_code} for {url}",
                "url": url,
            }

    except httpx.TimeoutException:
        return {
            "success": False,
            "html": "",
            "status_code": 0,
            "error": f"Timeout after {timeout}s for {url}",
            "url": url,
        }

    except (httpx.HTTPError, httpx.InvalidURL) as e:
        return {
            "success": False,
            "html": "",
            "status_code": 0,
            "error": f"HTTP error for {url}: {str(e)}",
            "url": url,
        }
