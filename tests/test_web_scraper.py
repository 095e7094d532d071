import unittest
from unittest.mock import patch

import httpx

from config.settings import settings
from tools.web_scraper import fetch_page


REAL_CLIENT = httpx.Client


def client_with(handler):
    """Build an httpx.Client factory that answers every request with handler."""
    def factory(**kwargs):
        return REAL_CLIENT(transport=httpx.MockTransport(handler), **kwargs)
    return factory


class TestFetchPage(unittest.TestCase):
    def test_success_returns_html_and_final_url(self):
        def handler(request):
            if request.url.path == "/karriere":
                return httpx.Response(301, headers={"Location": "https://www.ikb.at/jobs/"})
            return httpx.Response(200, text="<a href='/jobs/1'>Junior Job</a>")

        with patch("tools.web_scraper.httpx.Client", side_effect=client_with(handler)):
            result = fetch_page("https://www.ikb.at/karriere")

        self.assertTrue(result["success"])
        self.assertEqual(result["status_code"], 200)
        self.assertIn("Junior Job", result["html"])
        self.assertEqual(result["url"], "https://www.ikb.at/jobs/")

    def test_non_2xx_is_a_failure(self):
        handler = lambda request: httpx.Response(503, text="down")

        with patch("tools.web_scraper.httpx.Client", side_effect=client_with(handler)):
            result = fetch_page("https://www.ams.at/allejobs")

        self.assertFalse(result["success"])
        self.assertEqual(result["html"], "")
        self.assertEqual(result["status_code"], 503)
        self.assertEqual(result["error"], "HTTP 503 for https://www.ams.at/allejobs")

    def test_timeout_becomes_result(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with patch("tools.web_scraper.httpx.Client", side_effect=client_with(handler)):
            result = fetch_page("https://www.ams.at/allejobs", timeout=5)

        self.assertFalse(result["success"])
        self.assertEqual(result["status_code"], 0)
        self.assertEqual(result["error"], "Timeout after 5s for https://www.ams.at/allejobs")

    def test_connection_error_becomes_result(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with patch("tools.web_scraper.httpx.Client", side_effect=client_with(handler)):
            result = fetch_page("https://www.ams.at/allejobs")

        self.assertFalse(result["success"])
        self.assertIn("refused", result["error"])

    def test_malformed_url_becomes_result(self):
        result = fetch_page("http://[::1")

        self.assertFalse(result["success"])
        self.assertEqual(result["url"], "http://[::1")

    def test_default_timeout_comes_from_settings(self):
        handler = lambda request: httpx.Response(200, text="")

        with patch("tools.web_scraper.httpx.Client", side_effect=client_with(handler)) as mock_client:
            fetch_page("https://www.ikb.at/karriere")

        self.assertEqual(mock_client.call_args.kwargs["timeout"], settings.request_timeout)
        self.assertTrue(mock_client.call_args.kwargs["follow_redirects"])


if __name__ == "__main__":
    unittest.main()
