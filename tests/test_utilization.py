from datetime import date

import pytest

from resource_scheduler.core.errors import ProjectNotFoundError
from resource_scheduler.schemas.utilization import BillableTier, StatusTier, UtilizationSettings
from resource_scheduler.services.utilization import (
    calculate_utilization,
    classify_billable,
    classify_status,
    summarize_team,
)
from .factories import (
    BILLABLE_PROJECT_ID,
    SHOP_PROJECT_ID,
    TRAINING_PROJECT_ID,
    build_assignment,
    build_holiday,
    build_projects,
    build_unavailability,
)

AUGUST_START = date(2025, 8, 1)
AUGUST_END = date(2025, 8, 31)


def _august_assignments():
    return [
        # 15 weekdays of billable work: Aug 1 through Aug 21.
        build_assignment(id=1, start_date=date(2025, 8, 1), end_date=date(2025, 8, 21)),
        # Covers Aug 22, 25 and 26.
        build_assignment(id=2, project_id=SHOP_PROJECT_ID, start_date=date(2025, 8, 22), end_date=date(2025, 8, 26)),
    ]


def _august_vacation():
    return [build_unavailability(start_date=date(2025, 8, 27), end_date=date(2025, 8, 28))]


def test_month_with_billable_shop_and_vacation() -> None:
    result = calculate_utilization(
        1,
        AUGUST_START,
        AUGUST_END,
        UtilizationSettings(),
        _august_assignments(),
        _august_vacation(),
        projects=build_projects(),
    )

    assert result.available_days == 21
    assert result.utilized_days == 18
    assert result.billable_days == 15
    assert result.utilization_pct == pytest.approx(85.71, abs=0.01)
    assert result.billable_pct == pytest.approx(83.33, abs=0.01)
    assert result.status_tier is StatusTier.ON_TARGET
    assert result.billable_tier is BillableTier.ON_TARGET
    assert result.available_hours == 168.0
    assert result.utilized_hours == 144.0


def test_shop_and_pto_flags_change_utilized_days() -> None:
    settings = UtilizationSettings(count_shop_as_utilized=False, count_pto_as_utilized=True)

    result = calculate_utilization(
        1,
        AUGUST_START,
        AUGUST_END,
        settings,
        _august_assignments(),
        _august_vacation(),
        projects=build_projects(),
    )

    assert result.utilized_days == 17
    assert result.billable_days == 15


def test_holiday_reduces_available_days() -> None:
    result = calculate_utilization(
        1,
        AUGUST_START,
        AUGUST_END,
        UtilizationSettings(),
        _august_assignments(),
        holidays=[build_holiday(date=date(2025, 8, 29))],
        projects=build_projects(),
    )

    assert result.available_days == 20
    assert result.utilized_days == 18


def test_zero_available_days_gives_zero_percentages() -> None:
    result = calculate_utilization(
        1,
        date(2025, 8, 2),
        date(2025, 8, 3),
        UtilizationSettings(),
        _august_assignments(),
        projects=build_projects(),
    )

    assert result.available_days == 0
    assert result.utilization_pct == 0.0
    assert result.billable_pct == 0.0
    assert result.status_tier is StatusTier.UNDERUTILIZED


def test_travel_days_are_not_utilized() -> None:
    assignment = build_assignment(start_date=date(2025, 8, 5), end_date=date(2025, 8, 7), travel_out_days=1, travel_back_days=1)

    result = calculate_utilization(
        1, date(2025, 8, 4), date(2025, 8, 8), UtilizationSettings(), [assignment], projects=build_projects()
    )

    assert result.available_days == 5
    assert result.utilized_days == 3


def test_overlapping_records_count_each_day_once() -> None:
    assignments = [
        build_assignment(id=1, start_date=date(2025, 8, 4), end_date=date(2025, 8, 8)),
        build_assignment(id=2, project_id=SHOP_PROJECT_ID, start_date=date(2025, 8, 6), end_date=date(2025, 8, 8)),
    ]

    result = calculate_utilization(
        1, date(2025, 8, 4), date(2025, 8, 8), UtilizationSettings(), assignments, projects=build_projects()
    )

    assert result.utilized_days == 5
    assert result.billable_days == 5
    assert result.utilization_pct == 100.0


def test_training_project_and_training_leave() -> None:
    assignments = [build_assignment(project_id=TRAINING_PROJECT_ID, start_date=date(2025, 8, 4), end_date=date(2025, 8, 5))]
    unavailabilities = [build_unavailability(type="training", start_date=date(2025, 8, 6), end_date=date(2025, 8, 6))]

    counted = calculate_utilization(
        1, date(2025, 8, 4), date(2025, 8, 8), UtilizationSettings(), assignments, unavailabilities, projects=build_projects()
    )
    ignored = calculate_utilization(
        1,
        date(2025, 8, 4),
        date(2025, 8, 8),
        UtilizationSettings(count_training_as_utilized=False),
        assignments,
        unavailabilities,
        projects=build_projects(),
    )

    assert counted.utilized_days == 3
    assert counted.billable_days == 0
    assert ignored.utilized_days == 0


def test_other_resources_are_ignored() -> None:
    assignments = [build_assignment(resource_id=2, start_date=date(2025, 8, 4), end_date=date(2025, 8, 8))]

    result = calculate_utilization(
        1, date(2025, 8, 4), date(2025, 8, 8), UtilizationSettings(), assignments, projects=build_projects()
    )

    assert result.utilized_days == 0


def test_unknown_project_raises() -> None:
    assignments = [build_assignment(project_id=99, start_date=date(2025, 8, 4), end_date=date(2025, 8, 8))]

    with pytest.raises(ProjectNotFoundError):
        calculate_utilization(1, AUGUST_START, AUGUST_END, UtilizationSettings(), assignments, projects=build_projects())


def test_overallocation_alert_below_full_utilization() -> None:
    settings = UtilizationSettings(overallocation_alert=95.0)
    assignments = [build_assignment(project_id=BILLABLE_PROJECT_ID, start_date=date(2025, 8, 4), end_date=date(2025, 8, 8))]

    result = calculate_utilization(
        1, date(2025, 8, 4), date(2025, 8, 8), settings, assignments, projects=build_projects()
    )

    assert result.status_tier is StatusTier.OVERALLOCATED


@pytest.mark.parametrize(
    ("utilization", "billable", "expected"),
    [
        (120.0, 90.0, StatusTier.OVERALLOCATED),
        (85.0, 80.0, StatusTier.ON_TARGET),
        (80.0, 74.9, StatusTier.LOW_BILLABLE),
        (70.0, 100.0, StatusTier.BELOW_TARGET),
        (64.9, 100.0, StatusTier.UNDERUTILIZED),
    ],
)
def test_status_tier_precedence(utilization, billable, expected) -> None:
    assert classify_status(utilization, billable, UtilizationSettings()) is expected


@pytest.mark.parametrize(
    ("billable", "expected"),
    [(75.0, BillableTier.ON_TARGET), (60.0, BillableTier.BELOW_TARGET), (59.9, BillableTier.BELOW_MINIMUM)],
)
def test_billable_tier(billable, expected) -> None:
    assert classify_billable(billable, UtilizationSettings()) is expected


def test_summarize_team() -> None:
    projects = build_projects()
    busy = calculate_utilization(1, AUGUST_START, AUGUST_END, UtilizationSettings(), _august_assignments(), projects=projects)
    idle = calculate_utilization(2, AUGUST_START, AUGUST_END, UtilizationSettings(), _august_assignments(), projects=projects)

    summary = summarize_team([busy, idle])

    assert summary.resource_count == 2
    assert summary.average_utilization_pct == pytest.approx(busy.utilization_pct / 2, abs=0.01)
    assert summary.tier_counts == {StatusTier.ON_TARGET: 1, StatusTier.UNDERUTILIZED: 1}
    assert summarize_team([]).resource_count == 0
