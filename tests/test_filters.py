"""Unit tests for app.services.filters: filter set -> bound equality predicates."""

import unittest

from sqlalchemy.orm import aliased

from app.models import Submission
from app.schemas.analytics import AnalyticsFilters
from app.services.filters import FilterPredicate, build_filter


class TestBuildFilterEmpty(unittest.TestCase):
    """No filters, 'all' and blank values produce an empty predicate."""

    def test_none(self) -> None:
        predicate = build_filter(None)
        self.assertTrue(predicate.is_empty)
        self.assertEqual(predicate.params, [])
        self.assertEqual(predicate.for_submissions(), [])

    def test_empty_filter_set(self) -> None:
        predicate = build_filter(AnalyticsFilters())
        self.assertEqual(predicate.conditions, ())
        self.assertEqual(predicate.params, [])

    def test_all_and_blank_are_ignored(self) -> None:
        predicate = build_filter(
            AnalyticsFilters(vehicle_type="all", usage_type="", location_type="  ")
        )
        self.assertTrue(predicate.is_empty)


class TestBuildFilterSingleField(unittest.TestCase):
    """One literal value yields exactly one column = :param clause bound to it."""

    def test_vehicle_type(self) -> None:
        predicate = build_filter(AnalyticsFilters(vehicle_type="SUV"))
        self.assertEqual(predicate.conditions, (("vehicle_type", "SUV"),))
        self.assertEqual(predicate.params, ["SUV"])
        clauses = predicate.for_submissions()
        self.assertEqual(len(clauses), 1)
        self.assertEqual(clauses[0].left.key, "vehicle_type")
        self.assertEqual(clauses[0].right.value, "SUV")
        sql = str(clauses[0])
        self.assertIn("ev_form_submissions.vehicle_type =", sql)
        self.assertNotIn("SUV", sql)

    def test_location_type_maps_to_primary_charging_location(self) -> None:
        predicate = build_filter(AnalyticsFilters(location_type="Casa"))
        self.assertEqual(predicate.conditions, (("primary_charging_location", "Casa"),))


class TestBuildFilterOrdering(unittest.TestCase):
    """Conditions come out in fixed field order whatever order values were given in."""

    def test_order_is_vehicle_usage_location(self) -> None:
        predicate = build_filter(
            AnalyticsFilters.model_validate(
                {"locationType": "Trabajo", "usageType": "Taxi", "vehicleType": "SUV"}
            )
        )
        self.assertEqual(
            [column for column, _ in predicate.conditions],
            ["vehicle_type", "usage_type", "primary_charging_location"],
        )
        self.assertEqual(predicate.params, ["SUV", "Taxi", "Trabajo"])


class TestJoinQualification(unittest.TestCase):
    """for_join renders the same conditions against the aliased submissions table."""

    def test_alias_qualified(self) -> None:
        predicate = build_filter(AnalyticsFilters(vehicle_type="SUV", usage_type="Taxi"))
        efs = aliased(Submission, name="efs")
        clauses = predicate.for_join(efs)
        self.assertEqual(len(clauses), 2)
        self.assertIn("efs.vehicle_type =", str(clauses[0]))
        self.assertIn("efs.usage_type =", str(clauses[1]))
        self.assertEqual([c.right.value for c in clauses], predicate.params)

    def test_direct_and_joined_share_params(self) -> None:
        predicate = FilterPredicate(conditions=(("usage_type", "Taxi"),))
        efs = aliased(Submission, name="efs")
        direct = predicate.for_submissions()[0]
        joined = predicate.for_join(efs)[0]
        self.assertEqual(direct.right.value, joined.right.value)
        self.assertNotEqual(str(direct), str(joined))


if __name__ == "__main__":
    unittest.main()
