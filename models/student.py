# models/student.py

"""
Represents a student registered in one (subject, class) scope.

Stores the display name, the roll number assigned at creation, and a mapping of test title to mark.

A `marks` entry exists only for tests the student has been graded on. A stored mark may be NaN when
non-numeric input was entered; absent and NaN marks are both treated as "ungraded" by every aggregate.

Serialization keeps the field names `name`, `roll`, and `marks` so previously persisted data stays readable.
Non-finite marks are written as JSON `null` and read back as NaN.
"""

from __future__ import annotations

import math
from typing import Any

from core.utils import is_number


class Student:

    def __init__(self, name: str, roll: str, marks: dict[str, float] | None = None):
        self._name: str = name
        self._roll: str = roll
        self._marks: dict[str, float] = dict(marks) if marks else {}

    # === properties ===

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        self._name = name

    @property
    def roll(self) -> str:
        return self._roll

    @property
    def marks(self) -> dict[str, float]:
        return self._marks.copy()

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "name": self._name,
            "roll": self._roll,
            "marks": {
                title: (mark if math.isfinite(mark) else None)
                for title, mark in self._marks.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict) -> Student:
        marks_raw: dict[str, Any] = data.get("marks") or {}

        if not isinstance(marks_raw, dict):
            raise ValueError("Student marks must be a mapping of test title to mark.")

        marks = {}
        for title, mark in marks_raw.items():
            if mark is None:
                marks[title] = math.nan
            elif isinstance(mark, (int, float)) and not isinstance(mark, bool):
                marks[title] = float(mark)
            else:
                raise ValueError(f"Invalid mark for '{title}': {mark!r}")

        return cls(
            name=data["name"],
            roll=data["roll"],
            marks=marks,
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Student({self._name}, {self._roll}, {self._marks})"

    def __str__(self) -> str:
        return f"STUDENT: name: {self._name}, roll: {self._roll}"

    # === data accessors ===

    def mark_for(self, title: str) -> float | None:
        return self._marks.get(title)

    def has_valid_mark(self, title: str) -> bool:
        return is_number(self._marks.get(title))

    def is_graded_on(self, title: str) -> bool:
        return title in self._marks

    # === data manipulators ===

    def set_mark(self, title: str, mark: float) -> None:
        self._marks[title] = mark

    def clear_mark(self, title: str) -> None:
        self._marks.pop(title, None)
