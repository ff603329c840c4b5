# /tests/test_aggregation.py

from datetime import datetime, timedelta

import pytest

from engagement_api.models.attendance_model import AttendanceStatus
from engagement_api.models.dashboard_model import Trend
from engagement_api.services.analytics_helpers.aggregation import (
    compute_attendance_rate,
    group_subject_gpas,
    mean_gpa,
    mean_value,
    tally_attendance,
)
from engagement_api.services.analytics_helpers.timestamps import to_iso_string
from engagement_api.services.analytics_helpers.trends import calculate_trend, reporting_periods, round_half_up


# --- Attendance ---

def test_attendance_rate_counts_present_and_late():
    records = [{"status": "PRESENT"}, {"status": "LATE"}, {"status": "ABSENT"}, {"status": "EXCUSED"}]
    assert compute_attendance_rate(records) == 50


def test_attendance_rate_is_zero_for_no_records():
    assert compute_attendance_rate([]) == 0


def test_attendance_rate_accepts_enum_statuses_and_is_not_rounded():
    records = [{"status": AttendanceStatus.PRESENT}, {"status": AttendanceStatus.ABSENT}, {"status": AttendanceStatus.ABSENT}]
    assert compute_attendance_rate(records) == pytest.approx(100 / 3)


def test_tally_attendance():
    records = [{"status": s} for s in ["PRESENT", "PRESENT", "LATE", "ABSENT", "EXCUSED"]]
    stats = tally_attendance(records)
    assert stats == {"totalDays": 5, "present": 2, "absent": 1, "late": 1, "excused": 1, "rate": 60.0}


def test_tally_attendance_empty():
    assert tally_attendance([]) == {"totalDays": 0, "present": 0, "absent": 0, "late": 0, "excused": 0, "rate": 0}


# --- GPA ---

def test_subject_gpas_and_overall_mean():
    records = [
        {"subject": "Math", "gpa": 4.0},
        {"subject": "Math", "gpa": 2.0},
        {"subject": "Sci", "gpa": 3.0},
    ]
    assert mean_gpa(records) == 3.0
    by_subject = {entry["subject"]: entry for entry in group_subject_gpas(records)}
    assert by_subject == {
        "Math": {"subject": "Math", "gpa": 3.0, "count": 2},
        "Sci": {"subject": "Sci", "gpa": 3.0, "count": 1},
    }


def test_missing_gpa_counts_as_zero_in_denominator():
    records = [{"subject": "Art", "gpa": None}, {"subject": "Art", "gpa": 4.0}]
    assert mean_gpa(records) == 2.0
    assert group_subject_gpas(records) == [{"subject": "Art", "gpa": 2.0, "count": 2}]


def test_empty_gpa_inputs():
    assert mean_gpa([]) == 0
    assert group_subject_gpas([]) == []
    assert mean_value([]) == 0


# --- Trends ---

@pytest.mark.parametrize("current, previous, expected", [
    (500, 0, Trend.STABLE),
    (0, 0, Trend.STABLE),
    (110, 100, Trend.UP),
    (94, 100, Trend.DOWN),
    (105, 100, Trend.STABLE),
    (95, 100, Trend.STABLE),
    (100, 100, Trend.STABLE),
    (0, 50, Trend.DOWN),
])
def test_calculate_trend(current, previous, expected):
    assert calculate_trend(current, previous) == expected


def test_round_half_up():
    assert round_half_up(0.125) == 0.13
    assert round_half_up(66.666666) == 66.67
    assert round_half_up(2.5, places=0) == 3


def test_reporting_periods_are_contiguous_and_disjoint():
    now = datetime(2025, 3, 31, 12, 0)
    current, previous = reporting_periods(now, 30)
    assert current.start == datetime(2025, 3, 1, 12, 0)
    assert current.end == now
    assert previous.start == datetime(2025, 1, 30, 12, 0)
    assert previous.end == current.start
    # The boundary instant belongs to the current window only.
    assert current.include_end is True
    assert previous.include_end is False


def test_reporting_periods_clamp_to_calendar_start():
    now = datetime(2025, 3, 31, 12, 0)
    current, previous = reporting_periods(now, 400000)
    assert current.start == now - timedelta(days=400000)
    assert previous.start == datetime.min
    assert previous.end == current.start

    current, previous = reporting_periods(now, 800000)
    assert current.start == datetime.min
    assert current.end == now
    assert previous.start == previous.end == datetime.min

    # Longer than timedelta itself can express.
    current, _ = reporting_periods(now, 10 ** 10)
    assert current.start == datetime.min


def test_to_iso_string_matches_javascript_format():
    assert to_iso_string(datetime(2025, 3, 1, 8, 30, 0, 123456)) == "2025-03-01T08:30:00.123Z"
