"""Translate dashboard filter values into SQL equality predicates on submissions."""

from dataclasses import dataclass
from typing import Any

from sqlalchemy import ColumnElement

from app.core.constants import FILTER_ALL
from app.models import Submission
from app.schemas.analytics import AnalyticsFilters

# Filter field -> submissions column. Order is the order conditions and params are produced in.
FILTER_COLUMNS: tuple[tuple[str, str], ...] = (
    ("vehicle_type", "vehicle_type"),
    ("usage_type", "usage_type"),
    ("location_type", "primary_charging_location"),
)


def _is_constraint(value: str | None) -> bool:
    return value is not None and value.strip() != "" and value != FILTER_ALL


@dataclass(frozen=True)
class FilterPredicate:
    """
    Ordered (column, value) equality conditions, joined with AND.

    The same conditions render against the Submission entity for direct queries
    (for_submissions) or against an aliased Submission inside a join (for_join).
    Values are always bound as parameters.
    """

    conditions: tuple[tuple[str, str], ...] = ()

    @property
    def params(self) -> list[str]:
        return [value for _, value in self.conditions]

    @property
    def is_empty(self) -> bool:
        return not self.conditions

    def for_submissions(self) -> list[ColumnElement[bool]]:
        return [getattr(Submission, column) == value for column, value in self.conditions]

    def for_join(self, alias: Any) -> list[ColumnElement[bool]]:
        """Clauses against alias, an aliased(Submission) used on the joined side."""
        return [getattr(alias, column) == value for column, value in self.conditions]


def build_filter(filters: AnalyticsFilters | None) -> FilterPredicate:
    """Build the predicate for a filter set; absent, blank and 'all' values add no condition."""
    if filters is None:
        return FilterPredicate()
    conditions = []
    for field, column in FILTER_COLUMNS:
        value = getattr(filters, field)
        if _is_constraint(value):
            conditions.append((column, value))
    return FilterPredicate(conditions=tuple(conditions))
