import random
import unittest
from calplan.domain.Entry import Outcome
from calplan.domain.PlanStore import PlanStore
from calplan.exceptions import InvalidStoreShape
from calplan.infra.Plan_Repository import serialize
from calplan.logic.plans.operations import (
    add_entry, clear_day, get_or_init_day_plan, remove_entry, replace_store,
    set_entry_field, toggle_outcome,
)
from calplan.utilities.export_import import parse_backup

DAY = "2024-06-01"


class TestPlanOperations(unittest.TestCase):

    def setUp(self):
        self.empty = PlanStore()

    def test_get_or_init_does_not_write_back(self):
        plan = get_or_init_day_plan(self.empty, DAY)
        self.assertEqual(len(plan.entries), 1)
        self.assertFalse(plan.entries[0].is_active)
        self.assertNotIn(DAY, self.empty)

    def test_scenario_add_then_edit(self):
        store = add_entry(self.empty, DAY)
        entry_id = store[DAY].entries[-1].id
        store = set_entry_field(store, DAY, entry_id, "description", "Team A vs Team B")
        store = set_entry_field(store, DAY, entry_id, "time", "18:00")
        plan = store[DAY]
        self.assertEqual(len(plan.entries), 1)
        entry = plan.entries[0]
        self.assertEqual(entry.description, "Team A vs Team B")
        self.assertEqual(entry.time, "18:00")
        self.assertEqual(entry.outcome, Outcome.PENDING)
        self.assertNotIn(DAY, self.empty)

    def test_clear_day_leaves_one_blank_entry(self):
        store = add_entry(self.empty, DAY)
        entry_id = store[DAY].entries[0].id
        store = set_entry_field(store, DAY, entry_id, "description", "Team A vs Team B")
        cleared = clear_day(store, DAY)
        self.assertEqual(len(cleared[DAY].entries), 1)
        blank = cleared[DAY].entries[0]
        self.assertEqual((blank.time, blank.category, blank.description), ("", "", ""))
        self.assertEqual(blank.outcome, Outcome.PENDING)
        self.assertNotEqual(blank.id, entry_id)
        # the prior snapshot still holds the entry
        self.assertEqual(store[DAY].entries[0].description, "Team A vs Team B")

    def test_editing_the_placeholder_materializes_the_day(self):
        placeholder = get_or_init_day_plan(self.empty, DAY).entries[0]
        self.assertEqual(get_or_init_day_plan(self.empty, DAY).entries[0].id, placeholder.id)
        store = set_entry_field(self.empty, DAY, placeholder.id, "category", "Work")
        self.assertEqual(store[DAY].entries[0].category, "Work")
        self.assertEqual(store[DAY].entries[0].id, placeholder.id)

    def test_removed_placeholder_id_is_never_offered_again(self):
        claimed_id = get_or_init_day_plan(self.empty, DAY).entries[0].id
        store = set_entry_field(self.empty, DAY, claimed_id, "description", "Gym")
        store = remove_entry(store, DAY, claimed_id)
        store = replace_store({DAY: {"date": DAY, "games": []}})
        offered_id = get_or_init_day_plan(store, DAY).entries[0].id
        self.assertNotEqual(offered_id, claimed_id)
        self.assertNotEqual(get_or_init_day_plan(self.empty, DAY).entries[0].id, claimed_id)

    def test_removing_the_placeholder_retires_its_id(self):
        placeholder_id = get_or_init_day_plan(self.empty, DAY).entries[0].id
        store = remove_entry(self.empty, DAY, placeholder_id)
        self.assertNotEqual(store[DAY].entries[0].id, placeholder_id)
        self.assertNotEqual(get_or_init_day_plan(self.empty, DAY).entries[0].id, placeholder_id)
        self.assertEqual(store[DAY].entries[0].category, "Work")

    def test_set_field_noops(self):
        store = add_entry(self.empty, DAY)
        entry_id = store[DAY].entries[0].id
        self.assertIs(set_entry_field(store, DAY, "missing", "time", "1"), store)
        self.assertIs(set_entry_field(store, "", entry_id, "time", "1"), store)
        self.assertIs(set_entry_field(store, None, entry_id, "time", "1"), store)
        self.assertIs(set_entry_field(store, DAY, entry_id, "id", "hijack"), store)

    def test_outcome_values_are_normalized(self):
        store = add_entry(self.empty, DAY)
        entry_id = store[DAY].entries[0].id
        store = set_entry_field(store, DAY, entry_id, "outcome", "loss")
        self.assertEqual(store[DAY].entries[0].outcome, Outcome.NEGATIVE)

    def test_toggle_outcome(self):
        store = add_entry(self.empty, DAY)
        entry_id = store[DAY].entries[0].id
        store = toggle_outcome(store, DAY, entry_id, Outcome.POSITIVE)
        self.assertEqual(store[DAY].entries[0].outcome, Outcome.POSITIVE)
        store = toggle_outcome(store, DAY, entry_id, Outcome.POSITIVE)
        self.assertEqual(store[DAY].entries[0].outcome, Outcome.PENDING)

    def test_remove_last_entry_synthesizes_blank(self):
        store = add_entry(self.empty, DAY)
        first_id = store[DAY].entries[0].id
        store = remove_entry(store, DAY, first_id)
        self.assertEqual(len(store[DAY].entries), 1)
        synthesized_id = store[DAY].entries[0].id
        self.assertNotEqual(synthesized_id, first_id)
        store = remove_entry(store, DAY, synthesized_id)
        self.assertEqual(len(store[DAY].entries), 1)
        self.assertNotEqual(store[DAY].entries[0].id, synthesized_id)

    def test_remove_keeps_order_of_others(self):
        store = self.empty
        for _ in range(3):
            store = add_entry(store, DAY)
        ids = [e.id for e in store[DAY].entries]
        store = remove_entry(store, DAY, ids[1])
        self.assertEqual([e.id for e in store[DAY].entries], [ids[0], ids[2]])

    def test_entry_count_never_drops_below_one(self):
        rng = random.Random(7)
        store = self.empty
        for _ in range(200):
            if rng.random() < 0.5:
                store = add_entry(store, DAY)
            else:
                entries = get_or_init_day_plan(store, DAY).entries
                store = remove_entry(store, DAY, rng.choice(entries).id)
            if DAY in store:
                self.assertGreaterEqual(len(store[DAY].entries), 1)

    def test_imported_empty_day_is_materialized_on_read_only(self):
        store = replace_store({DAY: {"date": DAY, "games": []}})
        plan = get_or_init_day_plan(store, DAY)
        self.assertEqual(len(plan.entries), 1)
        self.assertEqual(len(store[DAY].entries), 0)
        edited = set_entry_field(store, DAY, plan.entries[0].id, "description", "Gym")
        self.assertEqual(len(edited[DAY].entries), 1)
        self.assertEqual(edited[DAY].entries[0].description, "Gym")

    def test_replace_store_accepts_mapping_only(self):
        store = replace_store({"2024-01-01": {"wrong": "fields"}})
        self.assertEqual(len(store["2024-01-01"].entries), 0)
        with self.assertRaises(InvalidStoreShape):
            replace_store(["not", "a", "mapping"])

    def test_round_trip_preserves_store(self):
        store = self.empty
        for day in ("2024-06-01", "2024-06-02"):
            store = add_entry(store, day)
            store = add_entry(store, day)
            for i, entry in enumerate(store[day].entries):
                store = set_entry_field(store, day, entry.id, "description", f"Event {i} ção")
                store = set_entry_field(store, day, entry.id, "category", "League")
        store = toggle_outcome(store, "2024-06-02", store["2024-06-02"].entries[1].id, Outcome.VOIDED)
        self.assertEqual(parse_backup(serialize(store)), store)


if __name__ == '__main__':
    unittest.main()
