# models/test.py

"""
The Test model represents one graded test within a (subject, class) scope.

Titles are unique within a scope and double as the key into each student's marks.
`max_marks` is the denominator for every percentage computed against the test.

New tests must have a positive, finite max marks value (see `validate_max_marks_input()`), but
previously persisted tests are loaded as stored: a `null` max marks reads as NaN, and zero or
negative values are kept. Aggregates give such tests a defined result instead of rejecting them.
"""

from __future__ import annotations

import math
from typing import Any

from core.utils import parse_strict_number


class Test:
    # keeps pytest from collecting this class when imported into test modules
    __test__ = False

    def __init__(self, title: str, max_marks: float):
        self._title = title
        self._max_marks = float(max_marks)

    @property
    def title(self) -> str:
        return self._title

    @property
    def max_marks(self) -> float:
        return self._max_marks

    @property
    def has_valid_max_marks(self) -> bool:
        return math.isfinite(self._max_marks) and self._max_marks > 0

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "title": self._title,
            "maxMarks": self._max_marks if math.isfinite(self._max_marks) else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Test:
        max_marks = data["maxMarks"]

        if max_marks is None:
            max_marks = math.nan
        elif isinstance(max_marks, bool) or not isinstance(max_marks, (int, float)):
            raise ValueError(f"Invalid max marks for '{data['title']}': {max_marks!r}")

        return cls(
            title=data["title"],
            max_marks=max_marks,
        )

    @classmethod
    def create(cls, title: str, max_marks: Any) -> Test:
        """
        Builds a new test from raw user input, validating max marks first.

        Raises:
            TypeError: If max marks is not a number.
            ValueError: If max marks is non-finite or not positive.
        """
        return cls(title=title, max_marks=Test.validate_max_marks_input(max_marks))

    def __repr__(self) -> str:
        return f"Test({self._title}, {self._max_marks})"

    def __str__(self) -> str:
        return f"TEST: title: {self._title}, max marks: {self._max_marks}"

    # === data validators ===

    @staticmethod
    def validate_max_marks_input(max_marks: Any) -> float:
        """
        Validates and normalizes input for a new `Test` max_marks value.

        Accepts any input, and then:
            - Parses it as a whole-string number with `parse_strict_number()` ("50" passes, "50abc" does not).
            - Ensures the number is finite.
            - Ensures it is greater than zero.

        Args:
            max_marks (Any): The input value to validate.

        Returns:
            The normalized max marks value (float).

        Raises:
            TypeError: If the input cannot be read as a number.
            ValueError: If the input is non-finite or not positive.
        """
        value = parse_strict_number(max_marks)

        if math.isnan(value):
            raise TypeError("Invalid input. Max marks must be a number.")

        if not math.isfinite(value):
            raise ValueError("Invalid input. Max marks must be a finite number.")

        if value <= 0:
            raise ValueError("Invalid input. Max marks must be greater than zero.")

        return value
