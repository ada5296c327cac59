# models/scope.py

"""
A Scope is the (subject, class) pair that selects which student and test collections are active.

The scope derives everything that depends only on the pair:
    - the two storage keys under which its collections are persisted
    - roll numbers for newly added students

Distinct scopes never share storage keys, and the same scope always maps to the same keys.
"""

from __future__ import annotations


class Scope:

    def __init__(self, subject: str, class_name: str):
        self._subject = Scope.validate_part_input(subject, "Subject")
        self._class_name = Scope.validate_part_input(class_name, "Class")

    # === properties ===

    @property
    def subject(self) -> str:
        return self._subject

    @property
    def class_name(self) -> str:
        return self._class_name

    @property
    def subject_initial(self) -> str:
        return self._subject[0].upper()

    @property
    def students_key(self) -> str:
        return f"{self._subject}_students_{self._class_name}"

    @property
    def tests_key(self) -> str:
        return f"{self._subject}_tests_{self._class_name}"

    @property
    def roll_prefix(self) -> str:
        return f"{self._class_name}-{self.subject_initial}"

    # === roll numbers ===

    def generate_roll_no(self, student_count: int) -> str:
        """
        Builds the roll number for the next student added to this scope.

        Args:
            student_count (int): The number of students currently in the scope.

        Returns:
            A roll number of the form `<class>-<subject initial>-<count + 1>`, with the counter zero-padded to two digits.

        Notes:
            - Depends only on the scope and the count, never on existing roll values.
            - Deleting a student and adding another can therefore reproduce a roll number already in use.
        """
        return f"{self.roll_prefix}-{student_count + 1:02d}"

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Scope):
            return NotImplemented
        return (self._subject, self._class_name) == (other._subject, other._class_name)

    def __hash__(self) -> int:
        return hash((self._subject, self._class_name))

    def __repr__(self) -> str:
        return f"Scope({self._subject}, {self._class_name})"

    def __str__(self) -> str:
        return f"Class {self._class_name} - {self._subject}"

    # === data validators ===

    @staticmethod
    def validate_part_input(value: str, label: str) -> str:
        if not isinstance(value, str):
            raise TypeError(f"Invalid input. {label} must be a string.")

        if not value.strip():
            raise ValueError(f"Invalid input. {label} cannot be blank.")

        return value
