import unittest
from unittest.mock import patch
from calplan.api import api_ai
from calplan.domain.DayPlan import DayPlan
from calplan.domain.Entry import Entry
from calplan.tests.fakes import FakeOpenAI
from calplan.utilities.constants import ANALYSIS_FAILED, ANALYSIS_UNAVAILABLE, NOTHING_TO_ANALYZE

DAY = "2024-06-01"


def _plan():
    return DayPlan(DAY, [
        Entry("a", "18:00", "Cup", "Team A vs Team B"),
        Entry("b", "20:00", "League", ""),
        Entry("c", "21:30", "", "Team C vs Team D"),
    ])


class TestAdvisoryClient(unittest.TestCase):

    def test_nothing_to_analyze_makes_no_call(self):
        client = FakeOpenAI()
        result = api_ai.analyze_day_plan(DayPlan(DAY, [Entry("a", description="")]), client=client)
        self.assertEqual(result, NOTHING_TO_ANALYZE)
        self.assertEqual(client.requests, [])

    def test_prompt_lists_active_entries_only(self):
        prompt = api_ai.build_prompt(_plan())
        self.assertIn(DAY, prompt)
        self.assertIn("- 18:00: Team A vs Team B (Cup)", prompt)
        self.assertIn("- 21:30: Team C vs Team D ()", prompt)
        self.assertNotIn("20:00", prompt)

    def test_single_call_with_temperature(self):
        client = FakeOpenAI(reply="  Tough evening.  ")
        self.assertEqual(api_ai.analyze_day_plan(_plan(), client=client), "Tough evening.")
        self.assertEqual(len(client.requests), 1)
        request = client.requests[0]
        self.assertIn("temperature", request)
        self.assertIn("Team A vs Team B", request["input"])

    def test_failure_maps_to_fixed_message_without_retry(self):
        client = FakeOpenAI(error=RuntimeError("network down"))
        with self.assertLogs("calplan.api.api_ai", level="ERROR"):
            result = api_ai.analyze_day_plan(_plan(), client=client)
        self.assertEqual(result, ANALYSIS_FAILED)
        self.assertEqual(len(client.requests), 1)

    def test_empty_reply(self):
        self.assertEqual(api_ai.analyze_day_plan(_plan(), client=FakeOpenAI(reply="")), ANALYSIS_UNAVAILABLE)

    def test_missing_api_key(self):
        with patch.object(api_ai.config, "OPENAI_API_KEY", ""):
            self.assertEqual(api_ai.analyze_day_plan(_plan()), ANALYSIS_FAILED)

    def test_calls_are_not_cached(self):
        client = FakeOpenAI()
        api_ai.analyze_day_plan(_plan(), client=client)
        api_ai.analyze_day_plan(_plan(), client=client)
        self.assertEqual(len(client.requests), 2)


if __name__ == '__main__':
    unittest.main()
