# /engagement_api/services/analytics_helpers/aggregation.py

"""
Pure arithmetic over collections of attendance, performance and analytics
rows. Every function accepts ORM objects or plain dicts, and every empty
input is answered with 0 (or an empty list) instead of an error.
"""

from typing import Any, Dict, Iterable, List

import pandas as pd

from ...models.attendance_model import AttendanceStatus, PRESENT_STATUSES


def _value_of(record: Any, field: str) -> Any:
    if isinstance(record, dict):
        return record.get(field)
    return getattr(record, field, None)


def _status_of(record: Any) -> str:
    status = _value_of(record, "status")
    # Accept both the enum and its raw string value.
    return getattr(status, "value", status)


def compute_attendance_rate(records: Iterable[Any]) -> float:
    """
    Percentage of records marked PRESENT or LATE. ABSENT and EXCUSED both
    count against the rate. The result is not rounded.
    """
    statuses = [_status_of(r) for r in records]
    if not statuses:
        return 0
    present_count = sum(1 for status in statuses if status in PRESENT_STATUSES)
    return (present_count / len(statuses)) * 100


def tally_attendance(records: Iterable[Any]) -> Dict[str, float]:
    """Exact per-status counts plus the attendance rate for one student's records."""
    statuses = [_status_of(r) for r in records]
    stats = {
        "totalDays": len(statuses),
        "present": statuses.count(AttendanceStatus.PRESENT.value),
        "absent": statuses.count(AttendanceStatus.ABSENT.value),
        "late": statuses.count(AttendanceStatus.LATE.value),
        "excused": statuses.count(AttendanceStatus.EXCUSED.value),
        "rate": 0,
    }
    if stats["totalDays"] > 0:
        stats["rate"] = ((stats["present"] + stats["late"]) / stats["totalDays"]) * 100
    return stats


def mean_gpa(records: Iterable[Any]) -> float:
    """Mean GPA. A missing GPA counts as 0 and still counts in the denominator."""
    gpas = [_value_of(r, "gpa") or 0 for r in records]
    if not gpas:
        return 0
    return sum(gpas) / len(gpas)


def mean_value(points: Iterable[Any]) -> float:
    values = [_value_of(p, "value") for p in points]
    if not values:
        return 0
    return sum(values) / len(values)


def group_subject_gpas(records: Iterable[Any]) -> List[Dict[str, Any]]:
    """
    One entry per distinct subject with that subject's mean GPA (missing GPA
    as 0) and its record count.
    """
    df = pd.DataFrame(
        [{"subject": _value_of(r, "subject"), "gpa": _value_of(r, "gpa")} for r in records],
        columns=["subject", "gpa"],
    )
    if df.empty:
        return []

    df["gpa"] = pd.to_numeric(df["gpa"], errors="coerce").fillna(0.0)
    grouped = df.groupby("subject", sort=False)["gpa"].agg(["sum", "count"])

    return [
        {"subject": subject, "gpa": float(row["sum"]) / int(row["count"]), "count": int(row["count"])}
        for subject, row in grouped.iterrows()
    ]
