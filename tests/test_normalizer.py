import unittest
from datetime import datetime, timezone

from agents.normalizer import (
    build_summary,
    derive_tags,
    normalize_arbeitnow_job,
    normalize_date,
    normalize_location,
    normalize_remotive_job,
    normalize_scraped_item,
    strip_html,
)
from agents.query_filter import matches_location_rules


REMOTIVE_JOB = {
    "id": 1,
    "title": "Junior Backoffice Assistant",
    "company_name": "Acme GmbH",
    "candidate_required_location": "Remote",
    "publication_date": "2024-05-01T10:00:00",
    "tags": [],
    "url": "https://remotive.com/remote-jobs/1",
    "description": "<p>Hello   <b>world</b></p>",
    "category": "Admin",
}

ARBEITNOW_JOB = {
    "slug": "senior-sales-manager-acme",
    "title": "Senior Sales Manager",
    "company_name": "Acme GmbH",
    "location": "Vienna",
    "created_at": 1714557600,
    "tags": ["Sales"],
    "description": "",
    "remote": False,
    "url": "https://www.arbeitnow.com/jobs/senior-sales-manager-acme",
}


class TestLocation(unittest.TestCase):
    def test_remote_indicators_become_remote(self):
        for value in ["Remote - Europe", "Work from Anywhere", "Home Office", "home-office", "HomeOffice möglich"]:
            self.assertEqual(normalize_location(value), "Remote", value)

    def test_other_locations_unchanged(self):
        self.assertEqual(normalize_location("Innsbruck"), "Innsbruck")
        self.assertEqual(normalize_location(""), "")


class TestTags(unittest.TestCase):
    def test_entry_level_backoffice_remote(self):
        tags = derive_tags("Junior Backoffice Assistant", "Acme GmbH", "", [], is_remote=True)
        self.assertEqual(
            set(tags),
            {"home-office", "quereinsteiger", "ohne-vorkenntnisse", "ohne-kundenkontakt"},
        )

    def test_no_keywords_no_tags(self):
        self.assertEqual(derive_tags("Senior Sales Manager", "Acme GmbH", "Sales", []), [])

    def test_provider_tags_and_category_are_searched(self):
        tags = derive_tags("Studio Mitarbeiter", "Salon", "Wellness", ["skincare"])
        self.assertEqual(tags, ["beauty"])

    def test_remote_keyword_in_text_adds_home_office(self):
        self.assertIn("home-office", derive_tags("Remote Support", "Acme", "", []))

    def test_tags_have_no_duplicates(self):
        tags = derive_tags("Junior Trainee Assistant", "Entry Co", "junior", ["trainee"], is_remote=True)
        self.assertEqual(len(tags), len(set(tags)))


class TestSummary(unittest.TestCase):
    def test_strip_html_collapses_whitespace(self):
        self.assertEqual(strip_html("<p>Hello   <b>world</b></p>\n"), "Hello world")

    def test_truncates_long_descriptions(self):
        summary = build_summary("a" * 250, "Title", "Company")
        self.assertEqual(len(summary), 198)
        self.assertTrue(summary.endswith("…"))
        self.assertEqual(summary[:197], "a" * 197)

    def test_exactly_200_characters_kept(self):
        self.assertEqual(build_summary("b" * 200, "Title", "Company"), "b" * 200)

    def test_empty_description_synthesized(self):
        self.assertEqual(build_summary("<div> </div>", "Koch", "Hotel Post"), "Koch bei Hotel Post.")


class TestDates(unittest.TestCase):
    def test_iso_strings_kept(self):
        self.assertEqual(normalize_date("2024-05-01T10:00:00Z"), "2024-05-01T10:00:00Z")
        self.assertEqual(normalize_date("2024-05-01T10:00:00"), "2024-05-01T10:00:00")

    def test_epoch_seconds_and_millis(self):
        self.assertEqual(normalize_date(1714557600), "2024-05-01T10:00:00+00:00")
        self.assertEqual(normalize_date(1714557600000), "2024-05-01T10:00:00+00:00")

    def test_unparsable_falls_back_to_now(self):
        for value in ["not a date", None, "", {"x": 1}]:
            result = datetime.fromisoformat(normalize_date(value))
            age = datetime.now(timezone.utc) - result
            self.assertLess(abs(age.total_seconds()), 60)


class TestProviderRecords(unittest.TestCase):
    def test_remote_junior_scenario(self):
        job = normalize_remotive_job(REMOTIVE_JOB)
        self.assertEqual(job.id, "remotive-1")
        self.assertEqual(job.location, "Remote")
        self.assertTrue(job.is_remote)
        self.assertEqual(job.source, "Remotive")
        self.assertEqual(job.summary, "Hello world")
        self.assertEqual(
            set(job.tags),
            {"home-office", "quereinsteiger", "ohne-vorkenntnisse", "ohne-kundenkontakt"},
        )
        self.assertTrue(matches_location_rules(job))
        self.assertIsNone(job.rank_score)

    def test_vienna_sales_scenario(self):
        job = normalize_arbeitnow_job(ARBEITNOW_JOB)
        self.assertEqual(job.id, "arbeitnow-senior-sales-manager-acme")
        self.assertEqual(job.tags, [])
        self.assertFalse(job.is_remote)
        self.assertEqual(job.summary, "Senior Sales Manager bei Acme GmbH.")
        self.assertEqual(job.posted_at, "2024-05-01T10:00:00+00:00")
        self.assertFalse(matches_location_rules(job))

    def test_arbeitnow_remote_flag_wins(self):
        job = normalize_arbeitnow_job({**ARBEITNOW_JOB, "location": "Berlin", "remote": True})
        self.assertEqual(job.location, "Remote")
        self.assertTrue(job.is_remote)
        self.assertIn("home-office", job.tags)

    def test_normalization_is_idempotent(self):
        first = normalize_remotive_job(REMOTIVE_JOB)
        second = normalize_remotive_job(dict(REMOTIVE_JOB))
        self.assertEqual(first, second)

    def test_scraped_item(self):
        job = normalize_scraped_item(
            {"title": "Trainee Buchhaltung", "url": "https://www.uibk.ac.at/jobs/1"},
            "Uni Innsbruck",
            0,
        )
        self.assertEqual(job.id, "uni-innsbruck-0-https://www.uibk.ac.at/jobs/1")
        self.assertEqual(job.company, "Uni Innsbruck")
        self.assertEqual(job.location, "Tirol")
        self.assertFalse(job.is_remote)
        self.assertEqual(job.summary, "Gefunden auf Uni Innsbruck.")
        self.assertEqual(set(job.tags), {"quereinsteiger", "ohne-vorkenntnisse"})
        self.assertEqual(job.dedup_key(), "Trainee Buchhaltung|https://www.uibk.ac.at/jobs/1")

    def test_scraped_item_with_remote_location(self):
        job = normalize_scraped_item(
            {"title": "Sachbearbeiter", "url": "https://x.at/1", "location": "Homeoffice"},
            "IKB",
            3,
        )
        self.assertEqual(job.location, "Remote")
        self.assertTrue(job.is_remote)
        self.assertIn("home-office", job.tags)

    def test_api_serialization_uses_camel_case(self):
        data = normalize_remotive_job(REMOTIVE_JOB).to_api()
        self.assertIn("isRemote", data)
        self.assertIn("postedAt", data)
        self.assertNotIn("rankScore", data)
        self.assertNotIn("scraped", data)


if __name__ == "__main__":
    unittest.main()
