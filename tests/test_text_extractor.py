import unittest

from models.source import SelectorRules
from tools.text_extractor import (
    extract_by_selectors,
    extract_job_links,
    extract_postings,
    to_absolute_url,
)


LINKS_HTML = """
<html><body>
  <nav><a href="/about">Über uns</a></nav>
  <a href="/karriere/123">Sachbearbeiter   Backoffice</a>
  <a href="/jobs/1">Job</a>
  <a href="mailto:jobs@ikb.at">Bewerbung per Mail an jobs</a>
  <a href="https://other.at/stellen/5">Offene Stelle: Koch</a>
  <a href="javascript:void(0)">Alle Jobs anzeigen</a>
</body></html>
"""

SELECTOR_HTML = """
<html><body>
  <div class="job">
    <h3><a href="/j/1">Office Assistant</a></h3>
    <span class="loc">Innsbruck</span>
  </div>
  <div class="job">
    <h3>No link here</h3>
  </div>
  <div class="job">
    <h3><a href="https://example.at/j/2">Lagerhelfer
      (m/w/d)</a></h3>
  </div>
</body></html>
"""


class TestAbsoluteUrls(unittest.TestCase):
    def test_relative_links_resolve_against_page(self):
        self.assertEqual(to_absolute_url("../x", "https://a.at/b/c/"), "https://a.at/b/x")
        self.assertEqual(to_absolute_url("/j/1", "https://a.at/karriere"), "https://a.at/j/1")

    def test_unresolvable_links_dropped(self):
        self.assertIsNone(to_absolute_url("javascript:void(0)", "https://a.at/"))
        self.assertIsNone(to_absolute_url("mailto:hr@a.at", "https://a.at/"))
        self.assertIsNone(to_absolute_url("", "https://a.at/"))


class TestJobLinks(unittest.TestCase):
    def test_keyword_links_with_enough_text(self):
        links = extract_job_links(LINKS_HTML, "https://www.ikb.at/karriere")
        self.assertEqual(
            links,
            [
                {"title": "Sachbearbeiter Backoffice", "url": "https://www.ikb.at/karriere/123"},
                {"title": "Offene Stelle: Koch", "url": "https://other.at/stellen/5"},
            ],
        )

    def test_empty_html(self):
        self.assertEqual(extract_job_links("", "https://a.at"), [])


class TestSelectors(unittest.TestCase):
    def setUp(self):
        self.selectors = SelectorRules(item="div.job", title="h3", link="a", location="span.loc")

    def test_structured_extraction(self):
        items = extract_by_selectors(SELECTOR_HTML, "https://example.at/jobs", self.selectors)
        self.assertEqual(
            items,
            [
                {"title": "Office Assistant", "url": "https://example.at/j/1", "location": "Innsbruck"},
                {"title": "Lagerhelfer (m/w/d)", "url": "https://example.at/j/2", "location": ""},
            ],
        )

    def test_title_element_used_as_link_when_no_link_selector(self):
        selectors = SelectorRules(item="div.job", title="h3")
        items = extract_by_selectors(SELECTOR_HTML, "https://example.at/jobs", selectors)
        self.assertEqual([item["url"] for item in items], ["https://example.at/j/1", "https://example.at/j/2"])
        self.assertNotIn("location", items[0])

    def test_no_selectors_configured(self):
        self.assertEqual(extract_by_selectors(SELECTOR_HTML, "https://example.at", None), [])


class TestExtractionStrategy(unittest.TestCase):
    def test_falls_back_to_links_when_selectors_match_nothing(self):
        selectors = SelectorRules(item="li.posting")
        items = extract_postings(LINKS_HTML, "https://www.ikb.at/karriere", selectors)
        self.assertEqual(len(items), 2)
        self.assertEqual(items[0]["title"], "Sachbearbeiter Backoffice")

    def test_selectors_win_when_they_match(self):
        selectors = SelectorRules(item="div.job", title="h3", link="a")
        items = extract_postings(SELECTOR_HTML, "https://example.at/jobs", selectors)
        self.assertEqual([item["title"] for item in items], ["Office Assistant", "Lagerhelfer (m/w/d)"])


if __name__ == "__main__":
    unittest.main()
