# /engagement_api/services/grading.py

"""
Maps a percentage score onto the school's letter grade and 4.0 GPA scale.
"""

from typing import Dict, Union

# (inclusive lower bound, letter grade, GPA points), checked top-down.
GRADE_BREAKPOINTS = (
    (93, "A", 4.0),
    (90, "A-", 3.7),
    (87, "B+", 3.3),
    (83, "B", 3.0),
    (80, "B-", 2.7),
    (77, "C+", 2.3),
    (73, "C", 2.0),
    (70, "C-", 1.7),
    (67, "D+", 1.3),
    (63, "D", 1.0),
    (60, "D-", 0.7),
)
FAILING_GRADE = ("F", 0.0)


def calculate_grade(percentage: float) -> Dict[str, Union[str, float]]:
    """
    Returns the letter grade and GPA for a percentage. The first breakpoint
    the percentage reaches wins. Values above 100 (extra credit) or below 0
    are graded as they are, without clamping.
    """
    for lower_bound, letter_grade, gpa in GRADE_BREAKPOINTS:
        if percentage >= lower_bound:
            return {"letterGrade": letter_grade, "gpa": gpa}
    letter_grade, gpa = FAILING_GRADE
    return {"letterGrade": letter_grade, "gpa": gpa}


def percentage_of(score: float, max_score: float) -> float:
    """`score` as a percentage of `max_score`. A zero `max_score` is rejected."""
    if not max_score:
        raise ValueError("maxScore must be greater than zero.")
    return (score / max_score) * 100
