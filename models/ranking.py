# models/ranking.py

"""
Ranking engine: pure functions over a scope's students and tests.

Totals only count graded tests. A test the student has no mark for (or a NaN mark) contributes to
neither the student's total nor the maximum, so percentages are relative to what has been graded.

Two pass rules exist side by side:
    - `pass_status()` judges a student's overall percentage.
    - `test_status()` judges a single mark against its test's max marks.
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence

from core.utils import is_number
from models.student import Student
from models.test import Test

PASS_THRESHOLD = 33.0

PASS = "Pass"
FAIL = "Fail"
UNGRADED = "-"


class RankEntry:

    def __init__(
        self,
        position: int,
        student: Student,
        total: float,
        max_total: float,
        threshold: float = PASS_THRESHOLD,
    ):
        self.position = position
        self.student = student
        self.total = total
        self.max_total = max_total
        self.threshold = threshold

    @property
    def roll(self) -> str:
        return self.student.roll

    @property
    def percentage(self) -> str:
        return percentage(self.total, self.max_total)

    @property
    def status(self) -> str:
        return pass_status(self.percentage, self.threshold)

    def to_dict(self) -> dict:
        return {
            "rank": self.position,
            "roll": self.student.roll,
            "name": self.student.name,
            "total": self.total,
            "maxTotal": self.max_total,
            "percentage": self.percentage,
            "status": self.status,
        }

    def __repr__(self) -> str:
        return f"RankEntry({self.position}, {self.student.roll}, {self.total}, {self.max_total})"


# === totals and percentages ===


def compute_totals(student: Student, tests: Iterable[Test]) -> tuple[float, float]:
    total = 0.0
    max_total = 0.0

    for test in tests:
        mark = student.mark_for(test.title)

        if is_number(mark):
            total += mark
            # an unset max contributes nothing to the denominator
            max_total += test.max_marks if math.isfinite(test.max_marks) else 0.0

    return total, max_total


def percentage(total: float, max_total: float) -> str:
    if not max_total:
        return "0.00"

    return f"{total / max_total * 100:.2f}"


def pass_status(percent: float | str, threshold: float = PASS_THRESHOLD) -> str:
    return PASS if float(percent) >= threshold else FAIL


def test_status(
    mark: float | None, max_marks: float, threshold: float = PASS_THRESHOLD
) -> str:
    """
    Pass/fail for a single mark.

    Returns "-" when the mark is absent or NaN. A non-positive `max_marks` is scored as 0 %.
    """
    if not is_number(mark):
        return UNGRADED

    percent = mark / max_marks * 100 if max_marks > 0 else 0.0

    return PASS if percent >= threshold else FAIL


# === ranking ===


def rank(
    students: Sequence[Student],
    tests: Sequence[Test],
    threshold: float = PASS_THRESHOLD,
) -> list[RankEntry]:
    """
    Orders students by total marks, highest first.

    Ties keep the input order (Python's sort is stable); there is no secondary tie-break.
    Positions are 1-based.
    """
    totals = [(student, *compute_totals(student, tests)) for student in students]
    ordered = sorted(totals, key=lambda row: row[1], reverse=True)

    return [
        RankEntry(position, student, total, max_total, threshold)
        for position, (student, total, max_total) in enumerate(ordered, 1)
    ]


def rank_of(roll: str, students: Sequence[Student], tests: Sequence[Test]) -> int | None:
    for entry in rank(students, tests):
        if entry.roll == roll:
            return entry.position

    return None


# === student-facing report ===


def student_report(
    student: Student,
    students: Sequence[Student],
    tests: Sequence[Test],
    threshold: float = PASS_THRESHOLD,
) -> dict:
    """
    Bundles everything the student detail view shows.

    Returns:
        dict: A payload with the following keys:
            - "name", "roll" (str): The student's identifiers.
            - "total", "maxTotal" (float): Sums over graded tests only.
            - "percentage" (str): Two-decimal percentage, "0.00" with nothing graded.
            - "status" (str): Overall "Pass" or "Fail".
            - "rank" (int | None): 1-based position in the scope ranking.
            - "tests" (list[dict]): One row per test in test order with "title", "marks", "maxMarks", "status".
    """
    total, max_total = compute_totals(student, tests)
    percent = percentage(total, max_total)

    rows = []
    for test in tests:
        mark = student.mark_for(test.title)
        rows.append(
            {
                "title": test.title,
                "marks": mark if is_number(mark) else None,
                "maxMarks": test.max_marks,
                "status": test_status(mark, test.max_marks, threshold),
            }
        )

    return {
        "name": student.name,
        "roll": student.roll,
        "total": total,
        "maxTotal": max_total,
        "percentage": percent,
        "status": pass_status(percent, threshold),
        "rank": rank_of(student.roll, students, tests),
        "tests": rows,
    }
