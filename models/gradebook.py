# models/gradebook.py

"""
The Gradebook model owns the students and tests of one (subject, class) scope and is the "source of truth" for them.

Students and tests are kept in insertion order, which is the order they are displayed, ranked on ties, and charted.
Both collections are persisted through a storage adapter as JSON lists under the scope's two keys.

Provides functions for loading a Gradebook from storage and saving it back, plus the mutators and lookups used by
the presentation layer. Mutators only change memory and mark the gradebook dirty; persisting is an explicit `save()`.
Includes the session-scoped `selected_test` (the test shown in the detail view) and `unsaved_changes` markers.
"""

from __future__ import annotations

import json
from typing import Any, Callable

from core.logger import get_logger
from core.response import ErrorCode, Response
from core.storage import StorageAdapter
from core.utils import is_number, parse_number
from models.scope import Scope
from models.student import Student
from models.test import Test

logger = get_logger(__name__)


class Gradebook:

    def __init__(self, scope: Scope, storage: StorageAdapter):
        self._scope: Scope = scope
        self._storage: StorageAdapter = storage
        self._students: list[Student] = []
        self._tests: list[Test] = []
        self._selected_test: str | None = None
        self._unsaved_changes: bool = False

    # === properties ===

    # --- core data structures ---

    @property
    def scope(self) -> Scope:
        return self._scope

    @property
    def students(self) -> list[Student]:
        return list(self._students)

    @property
    def tests(self) -> list[Test]:
        return list(self._tests)

    @property
    def test_titles(self) -> list[str]:
        return [t.title for t in self._tests]

    # --- status markers ---

    @property
    def selected_test(self) -> str | None:
        return self._selected_test

    @property
    def has_unsaved_changes(self) -> bool:
        return self._unsaved_changes

    # === public classmethods ===

    @classmethod
    def load(cls, scope: Scope, storage: StorageAdapter) -> Response:
        """
        Loads the persisted students and tests of a scope and returns a `Gradebook` instance.

        Args:
            scope (Scope): The (subject, class) pair to load.
            storage (StorageAdapter): The key-value store holding the serialized collections.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if both collections were read (absent keys count as empty).
                    - False for JSON deserialization issues, non-list blobs, or malformed records.
                - detail (str | None):
                    - On failure, a human-readable description of the error.
                    - On success, None.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_INPUT` if a blob is not valid JSON or not a list.
                    - `ErrorCode.INVALID_FIELD_VALUE` if a record has invalid or missing fields.
                    - `ErrorCode.INTERNAL_ERROR` for unexpected errors.
                - status_code (int | None):
                    - 200 on success
                    - 400 on failure
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "gradebook" (Gradebook): The loaded `Gradebook` object.
                    - On failure:
                        - None

        Notes:
            - An absent key is treated as first use and never fails.
            - A malformed blob is surfaced to the caller; it is not silently replaced with an empty list.
        """

        def read_list(key: str) -> list[Any]:
            raw = storage.get(key)

            if raw is None:
                return []

            data = json.loads(raw)

            if not isinstance(data, list):
                raise TypeError(f"Expected '{key}' to contain a list.")

            return data

        def load_records(
            key: str, from_dict_fn: Callable[[dict], Any], record_name: str
        ) -> list[Any]:
            records = []

            for record_dict in read_list(key):
                try:
                    records.append(from_dict_fn(record_dict))

                except (KeyError, ValueError, TypeError, AttributeError) as e:
                    raise ValueError(
                        f"Failed to deserialize {record_name}: {record_dict} - {e}"
                    ) from e

            return records

        try:
            gradebook = cls(scope, storage)
            gradebook._students = load_records(
                scope.students_key, Student.from_dict, "student"
            )
            gradebook._tests = load_records(scope.tests_key, Test.from_dict, "test")

        except json.JSONDecodeError as e:
            logger.error("malformed blob for %r: %s", scope, e)
            return Response.fail(
                detail=f"Failed to parse JSON data: {e}",
                error=ErrorCode.INVALID_INPUT,
            )

        except TypeError as e:
            logger.error("malformed blob for %r: %s", scope, e)
            return Response.fail(
                detail=f"Invalid stored data: {e}",
                error=ErrorCode.INVALID_INPUT,
            )

        except ValueError as e:
            logger.error("malformed record for %r: %s", scope, e)
            return Response.fail(
                detail=f"Invalid field value: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        except Exception as e:
            logger.exception("unexpected error loading %r", scope)
            return Response.fail(
                detail=f"Unexpected error: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        else:
            logger.info(
                "loaded %r: %d students, %d tests",
                scope,
                len(gradebook._students),
                len(gradebook._tests),
            )
            return Response.succeed(
                data={
                    "gradebook": gradebook,
                },
            )

    # === persistence ===

    def save(self) -> Response:
        """
        Serializes both collections and overwrites the scope's storage keys.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if both keys were written.
                - detail (str | None): Confirmation on success, error description on failure.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_FIELD_VALUE` if a record cannot be serialized.
                    - `ErrorCode.INTERNAL_ERROR` if the storage adapter fails or for unexpected errors.
                - status_code (int | None): 200 on success, 400 on failure.
                - data (dict | None): Always None.

        Notes:
            - Each call is a full overwrite, not an incremental patch. The last write wins.
            - The unsaved changes marker is cleared only on success.
        """
        try:
            students_blob = json.dumps(
                [s.to_dict() for s in self._students], allow_nan=False
            )
            tests_blob = json.dumps([t.to_dict() for t in self._tests], allow_nan=False)

            self._storage.set(self._scope.students_key, students_blob)
            self._storage.set(self._scope.tests_key, tests_blob)

        except (ValueError, TypeError) as e:
            logger.error("could not serialize %r: %s", self._scope, e)
            return Response.fail(
                detail=f"Object not JSON serializable: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        except OSError as e:
            logger.error("could not write %r: %s", self._scope, e)
            return Response.fail(
                detail=f"Failed to write data to storage: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        except Exception as e:
            logger.exception("unexpected error saving %r", self._scope)
            return Response.fail(
                detail=f"Unexpected error: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        else:
            self._unsaved_changes = False
            logger.info("saved %r", self._scope)

            return Response.succeed(detail="Gradebook successfully saved.")

    # === data accessors ===

    def generate_roll_no(self) -> str:
        return self._scope.generate_roll_no(len(self._students))

    def find_test(self, title: str) -> Test | None:
        return next((t for t in self._tests if t.title == title), None)

    def lookup_by_roll(self, roll: str) -> Response:
        """
        Finds the student whose roll number exactly matches `roll`.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if a student matched.
                - error (ErrorCode | str | None): `ErrorCode.NOT_FOUND` when no student matched.
                - status_code (int | None): 200 on success, 404 when not found.
                - data (dict | None): On success, "record" (Student) and "index" (int).

        Notes:
            - This method is read-only and never raises.
            - Matching is exact: no trimming or case folding.
        """
        for index, student in enumerate(self._students):
            if student.roll == roll:
                return Response.succeed(data={"record": student, "index": index})

        logger.debug("no student with roll %r in %r", roll, self._scope)
        return Response.not_found(f"No student found with roll number '{roll}'.")

    def marks_series(self, student: Student) -> list[dict]:
        """
        Builds the chart data for one student: one point per test, in test order.

        Each point is `{"name": title, "marks": mark or None, "max": max_marks}`; ungraded tests carry None.
        """
        series = []

        for test in self._tests:
            mark = student.mark_for(test.title)
            series.append(
                {
                    "name": test.title,
                    "marks": mark if is_number(mark) else None,
                    "max": test.max_marks,
                }
            )

        return series

    def results_for_test(self, title: str) -> Response:
        """
        Collects every student's mark for a single test, in student order.

        Returns:
            Response: On success, "test" (Test) and "rows" (list[tuple[Student, float | None]]) with
            ungraded marks as None. Fails with `ErrorCode.NOT_FOUND` for an unknown title.
        """
        test = self.find_test(title)

        if test is None:
            return Response.not_found(f"No test found with the title '{title}'.")

        rows = []
        for student in self._students:
            mark = student.mark_for(title)
            rows.append((student, mark if is_number(mark) else None))

        return Response.succeed(data={"test": test, "rows": rows})

    # === data manipulators ===

    def _mark_dirty(self) -> None:
        """
        Marks the gradebook as having unsaved changes.
        """
        self._unsaved_changes = True

    def _reject(self, detail: str) -> Response:
        logger.debug("rejected in %r: %s", self._scope, detail)
        return Response.fail(detail=detail, error=ErrorCode.VALIDATION_FAILED)

    # --- student manipulation ---

    def add_student(self, name: str) -> Response:
        """
        Registers a new student with a freshly generated roll number and no marks.

        Args:
            name (str): The display name; stored exactly as given.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the student was appended.
                    - False if the name is blank (the collection is left unchanged).
                - error (ErrorCode | str | None): `ErrorCode.VALIDATION_FAILED` for a blank name.
                - data (dict | None): On success, "record" (Student): the new student.

        Notes:
            - This method mutates `Gradebook` state and calls `_mark_dirty()` if successful.
            - Names need not be unique.
        """
        if not isinstance(name, str) or not name.strip():
            return self._reject("Student name cannot be blank.")

        student = Student(name=name, roll=self.generate_roll_no())
        self._students.append(student)
        self._mark_dirty()

        logger.info("added student %s to %r", student.roll, self._scope)

        return Response.succeed(
            detail=f"Student {student.name} added with roll number {student.roll}.",
            data={
                "record": student,
            },
        )

    def delete_student(self, index: int) -> Response:
        """
        Removes the student at a list position. Tests are not affected.

        Returns:
            Response: Fails with `ErrorCode.NOT_FOUND` if `index` is out of range;
            on success "record" (Student) holds the removed student.
        """
        if not 0 <= index < len(self._students):
            return Response.not_found(f"No student at position {index}.")

        student = self._students.pop(index)
        self._mark_dirty()

        logger.info("deleted student %s from %r", student.roll, self._scope)

        return Response.succeed(
            detail=f"Student {student.name} removed.",
            data={"record": student},
        )

    def update_mark(self, student_index: int, test_title: str, raw_value: Any) -> Response:
        """
        Sets one student's mark for one test from raw user input.

        Args:
            student_index (int): Position of the student in the collection.
            test_title (str): The test the mark belongs to.
            raw_value (Any): User input; parsed with `parse_number()`.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if the mark was stored, False for an out-of-range index.
                - error (ErrorCode | str | None): `ErrorCode.NOT_FOUND` for an out-of-range index.
                - data (dict | None): On success, "record" (Student) and "mark" (float, possibly NaN).

        Notes:
            - The parsed value is stored unconditionally: it is not checked against the test's max marks,
              and input that does not parse is stored as NaN, which every aggregate treats as ungraded.
        """
        if not 0 <= student_index < len(self._students):
            return Response.not_found(f"No student at position {student_index}.")

        student = self._students[student_index]
        mark = parse_number(raw_value)
        student.set_mark(test_title, mark)
        self._mark_dirty()

        logger.info(
            "set %s mark for %s in %r to %s",
            test_title,
            student.roll,
            self._scope,
            mark,
        )

        return Response.succeed(
            detail=f"Mark for {student.name} in {test_title} updated.",
            data={"record": student, "mark": mark},
        )

    # --- test manipulation ---

    def add_test(self, title: str, max_marks: Any) -> Response:
        """
        Adds a new test to the scope and selects it for the detail view.

        Args:
            title (str): The test title; must be unique within the scope.
            max_marks (Any): Raw max marks input; must read as a positive, finite number.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the test was appended.
                    - False for a blank title, invalid max marks, or a duplicate title.
                - error (ErrorCode | str | None):
                    - `ErrorCode.VALIDATION_FAILED` for a blank or duplicate title.
                    - `ErrorCode.INVALID_FIELD_VALUE` for invalid max marks.
                - data (dict | None): On success, "record" (Test): the new test.

        Notes:
            - On failure the test collection is left unchanged.
            - This method mutates `Gradebook` state and calls `_mark_dirty()` if successful.
        """
        if not isinstance(title, str) or not title.strip():
            return self._reject("Test title cannot be blank.")

        try:
            test = Test.create(title, max_marks)

        except (TypeError, ValueError) as e:
            logger.debug("rejected test %r in %r: %s", title, self._scope, e)
            return Response.fail(
                detail=f"Invalid field value: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        if self.find_test(title) is not None:
            return self._reject(f"A test with the title '{title}' already exists.")

        self._tests.append(test)
        self._selected_test = test.title
        self._mark_dirty()

        logger.info("added test %r to %r", test.title, self._scope)

        return Response.succeed(
            detail=f"Test {test.title} added.",
            data={
                "record": test,
            },
        )

    def delete_test(self, title: str) -> Response:
        """
        Removes a test and cascades the removal of its mark from every student.

        Returns:
            Response: Fails with `ErrorCode.NOT_FOUND` for an unknown title;
            on success "record" (Test) holds the removed test.

        Notes:
            - Clears `selected_test` if it pointed at the removed test.
            - This method calls `_mark_dirty()` if and only if the operation succeeds.
        """
        test = self.find_test(title)

        if test is None:
            return Response.not_found(f"No test found with the title '{title}'.")

        self._tests = [t for t in self._tests if t.title != title]

        for student in self._students:
            student.clear_mark(title)

        if self._selected_test == title:
            self._selected_test = None

        self._mark_dirty()

        logger.info("deleted test %r from %r", title, self._scope)

        return Response.succeed(
            detail=f"Test {title} removed.",
            data={"record": test},
        )

    def select_test(self, title: str | None) -> Response:
        if title is not None and self.find_test(title) is None:
            return Response.not_found(f"No test found with the title '{title}'.")

        self._selected_test = title

        return Response.succeed()

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Gradebook({self._scope!r}, {len(self._students)} students, {len(self._tests)} tests)"
