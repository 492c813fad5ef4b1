"""
Tests for versioned validation result storage.
"""
from django.test import TestCase

from restoration.models import CriteriaSite, CriteriaSiteHistoric
from restoration.services.result_store import ResultStore


class ResultStoreWriteTest(TestCase):
    """Current/historic bookkeeping of write_result."""

    def setUp(self):
        self.store = ResultStore()
        self.polygon_uuid = 'c1a2b3c4-0000-4000-8000-000000000001'

    def test_first_write_creates_current_without_history(self):
        """The first result for a pair is stored as current only."""
        current = self.store.write_result(self.polygon_uuid, 4, True, None)

        self.assertTrue(current.valid)
        self.assertEqual(CriteriaSite.objects.count(), 1)
        self.assertEqual(CriteriaSiteHistoric.objects.count(), 0)

    def test_second_write_moves_previous_values_to_history(self):
        """Replacing a result keeps the old values and timestamp in history."""
        first = self.store.write_result(self.polygon_uuid, 6, False, {'areaHectares': 1500.0})
        first_created_at = first.created_at

        second = self.store.write_result(self.polygon_uuid, 6, True, {'areaHectares': 500.0})

        self.assertEqual(CriteriaSite.objects.count(), 1)
        self.assertEqual(second.pk, first.pk)
        self.assertTrue(second.valid)
        self.assertEqual(second.extra_info, {'areaHectares': 500.0})
        self.assertGreaterEqual(second.created_at, first_created_at)

        historic = CriteriaSiteHistoric.objects.get()
        self.assertEqual(historic.polygon_uuid, self.polygon_uuid)
        self.assertEqual(historic.criteria_id, 6)
        self.assertFalse(historic.valid)
        self.assertEqual(historic.extra_info, {'areaHectares': 1500.0})
        self.assertEqual(historic.created_at, first_created_at)

    def test_n_writes_leave_n_minus_one_historic_rows(self):
        """Identical re-runs still append to the history."""
        for _ in range(3):
            self.store.write_result(self.polygon_uuid, 8, True, {'spikes': [], 'spikeCount': 0})

        self.assertEqual(CriteriaSite.objects.filter(polygon_uuid=self.polygon_uuid, criteria_id=8).count(), 1)
        self.assertEqual(CriteriaSiteHistoric.objects.filter(polygon_uuid=self.polygon_uuid, criteria_id=8).count(), 2)

    def test_pairs_are_independent(self):
        """Different criteria of one polygon never share a current row."""
        self.store.write_result(self.polygon_uuid, 4, True)
        self.store.write_result(self.polygon_uuid, 8, False, {'spikes': [[0, 0]], 'spikeCount': 1})

        self.assertEqual(CriteriaSite.objects.filter(polygon_uuid=self.polygon_uuid).count(), 2)
        self.assertEqual(CriteriaSiteHistoric.objects.count(), 0)


class ResultStoreReadTest(TestCase):
    """Read helpers of the result store."""

    def setUp(self):
        self.store = ResultStore()
        self.store.write_result('polygon-a', 4, True)
        self.store.write_result('polygon-a', 6, False, {'areaHectares': 2000.0})
        self.store.write_result('polygon-b', 4, False)

    def test_current_for_polygon_is_newest_first(self):
        """Results come back most recent check first."""
        results = self.store.current_for_polygon('polygon-a')

        self.assertEqual([result.criteria_id for result in results], [6, 4])

    def test_current_for_polygons_filters_by_criteria(self):
        """The criteria filter keeps only matching rows."""
        results = self.store.current_for_polygons(['polygon-a', 'polygon-b'], criteria_id=4)

        self.assertEqual({result.polygon_uuid for result in results}, {'polygon-a', 'polygon-b'})
        self.assertTrue(all(result.criteria_id == 4 for result in results))

    def test_current_for_polygons_without_filter(self):
        results = self.store.current_for_polygons(['polygon-a', 'polygon-b'])

        self.assertEqual(len(results), 3)

    def test_history_for_polygon(self):
        """History lists superseded results, newest first."""
        self.store.write_result('polygon-a', 6, True, {'areaHectares': 900.0})
        self.store.write_result('polygon-a', 6, True, {'areaHectares': 800.0})

        history = self.store.history_for_polygon('polygon-a', criteria_id=6)

        self.assertEqual(len(history), 2)
        self.assertEqual(history[0].extra_info, {'areaHectares': 900.0})
        self.assertEqual(history[1].extra_info, {'areaHectares': 2000.0})
        self.assertEqual(self.store.history_for_polygon('polygon-b'), [])
