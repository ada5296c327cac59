# cli/menus/teacher_menu.py

"""
Teacher menu for the progress tracker CLI.

This module defines the full interface a teacher uses once the access code is accepted:
- Switching the active class and subject
- Adding and removing students and tests
- Entering marks for a student and test
- Viewing the marks table, per-test results, and the overall ranking

Every successful mutation is committed to storage immediately through `Session.commit()`.
"""

from collections.abc import Callable
from typing import cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from models import ranking
from models.session import Session
from models.student import Student
from models.test import Test


def run(session: Session) -> None:
    """
    Top-level loop with dispatch for the Teacher menu.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    options: list[tuple[str, Callable[[Session], None]]] = [
        ("Switch Class / Subject", switch_scope),
        ("Add Student", add_student),
        ("Remove Student", remove_student),
        ("Add Test", add_test),
        ("Remove Test", remove_test),
        ("Enter Marks", enter_marks),
        ("View Tests", view_tests),
        ("View Student List", view_student_list),
        ("View Test Results", view_test_results),
        ("View Overall Ranking", view_ranking),
    ]
    zero_option = "Log out"

    while True:
        title = formatters.format_banner_text(f"Manage {session.scope}")
        menu_response = helpers.display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            break

        elif callable(menu_response):
            menu_response(session)

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")

    helpers.returning_to("Start Menu")


# === scope ===


def switch_scope(session: Session) -> None:
    selection = helpers.prompt_scope_selection(session)

    if selection is None:
        helpers.returning_without_changes()
        return

    subject, class_name = selection
    load_response = session.switch_scope(subject, class_name)

    if not load_response.success:
        helpers.display_response_failure(load_response)
        print(f"\nStaying in {session.scope}.")
        return

    print(f"\nNow managing {session.scope}.")


# === students ===


def add_student(session: Session) -> None:
    """
    Loops a prompt to add students to the active scope until the user leaves the name blank.

    Notes:
        - Roll numbers are generated from the current student count.
    """
    while True:
        name = helpers.prompt_user_input_or_cancel(
            f"Enter student name (next roll number {session.gradebook.generate_roll_no()}, leave blank to finish):"
        )

        if name is MenuSignal.CANCEL:
            break
        name = cast(str, name)

        gradebook_response = session.gradebook.add_student(name)

        if not gradebook_response.success:
            helpers.display_response_failure(gradebook_response)
            continue

        print(f"\n{gradebook_response.detail}")
        helpers.commit_or_report(session)

    helpers.returning_to("Teacher menu")


def prompt_student_selection(session: Session) -> int | None:
    students = session.gradebook.students
    student = helpers.prompt_selection_from_list(
        students, "Students", model_formatters.format_student_oneline
    )

    if student is None:
        return None

    # identity, since names and even roll numbers may repeat
    return next(i for i, s in enumerate(students) if s is student)


def remove_student(session: Session) -> None:
    index = prompt_student_selection(session)

    if index is None:
        helpers.returning_without_changes()
        return

    student = session.gradebook.students[index]

    if not helpers.confirm_action(
        f"Remove {student.name} ({student.roll})? This cannot be undone."
    ):
        helpers.returning_without_changes()
        return

    gradebook_response = session.gradebook.delete_student(index)

    if not gradebook_response.success:
        helpers.display_response_failure(gradebook_response)
        return

    print(f"\n{gradebook_response.detail}")
    helpers.commit_or_report(session)


# === tests ===


def add_test(session: Session) -> None:
    title = helpers.prompt_user_input_or_cancel(
        "Enter test title (leave blank to cancel):"
    )

    if title is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    title = cast(str, title)

    max_marks = helpers.prompt_user_input("Enter max marks:")

    gradebook_response = session.gradebook.add_test(title, max_marks)

    if not gradebook_response.success:
        helpers.display_response_failure(gradebook_response)
        print(f"\n{title} was not added.")
        return

    print(f"\n{gradebook_response.detail}")
    helpers.commit_or_report(session)


def prompt_test_selection(session: Session) -> Test | None:
    return helpers.prompt_selection_from_list(
        session.gradebook.tests, "Tests", model_formatters.format_test_oneline
    )


def remove_test(session: Session) -> None:
    """
    Removes a test after confirmation, along with every student's mark for it.
    """
    test = prompt_test_selection(session)

    if test is None:
        helpers.returning_without_changes()
        return

    print(
        "\nRemoving a test also deletes the mark every student has for it."
    )

    if not helpers.confirm_action(f"Remove {test.title}?"):
        helpers.returning_without_changes()
        return

    gradebook_response = session.gradebook.delete_test(test.title)

    if not gradebook_response.success:
        helpers.display_response_failure(gradebook_response)
        return

    print(f"\n{gradebook_response.detail}")
    helpers.commit_or_report(session)


# === marks ===


def enter_marks(session: Session) -> None:
    """
    Prompts for a test, then walks through every student in order asking for their mark.

    Notes:
        - Blank input skips a student and leaves their mark untouched.
        - Any other input is stored as entered; text that is not a number is kept as "ungraded".
    """
    test = prompt_test_selection(session)

    if test is None:
        helpers.returning_without_changes()
        return

    session.gradebook.select_test(test.title)

    for index, student in enumerate(session.gradebook.students):
        current = formatters.format_score(student.mark_for(test.title)) or "-"
        raw_value = helpers.prompt_user_input_or_none(
            f"{student.name} ({student.roll}) - {test.title} out of "
            f"{formatters.format_score(test.max_marks)} [current: {current}, blank to skip]:"
        )

        if raw_value is None:
            continue

        gradebook_response = session.gradebook.update_mark(index, test.title, raw_value)

        if not gradebook_response.success:
            helpers.display_response_failure(gradebook_response)
            continue

        helpers.commit_or_report(session)

    helpers.returning_to("Teacher menu")


# === views ===


def view_tests(session: Session) -> None:
    print(f"\n{formatters.format_banner_text('All Tests')}")

    if not session.gradebook.tests:
        print("\nNo tests have been added yet.")
        return

    helpers.display_results(
        session.gradebook.tests, True, model_formatters.format_test_oneline
    )


def view_student_list(session: Session) -> None:
    gradebook = session.gradebook

    print(f"\n{formatters.format_banner_text('Student List')}")

    if not gradebook.students:
        print("\nNo students have been added yet.")
        return

    print(model_formatters.format_marks_table_header(gradebook))

    helpers.display_results(
        gradebook.students,
        formatter=lambda s: model_formatters.format_student_marks_row(s, gradebook),
    )


def view_test_results(session: Session) -> None:
    """
    Shows every student's mark and per-test status for the selected test, prompting for one if none is selected.
    """
    gradebook = session.gradebook
    title = gradebook.selected_test

    if title is None:
        test = prompt_test_selection(session)

        if test is None:
            return

        gradebook.select_test(test.title)
        title = test.title

    gradebook_response = gradebook.results_for_test(title)

    if not gradebook_response.success:
        helpers.display_response_failure(gradebook_response)
        return

    test = gradebook_response.data["test"]
    rows: list[tuple[Student, float | None]] = gradebook_response.data["rows"]

    print(f"\n{formatters.format_banner_text(f'{test.title} (max {formatters.format_score(test.max_marks)})')}")

    for student, mark in rows:
        status = ranking.test_status(mark, test.max_marks, session.settings.pass_threshold)
        print(
            f"{student.roll:<10} | {student.name:<20} | "
            f"{formatters.format_score(mark) or '-':>6} | {status}"
        )


def view_ranking(session: Session) -> None:
    gradebook = session.gradebook

    print(f"\n{formatters.format_banner_text('Overall Ranking')}")

    entries = ranking.rank(
        gradebook.students, gradebook.tests, session.settings.pass_threshold
    )

    if not entries:
        print("\nNo students have been added yet.")
        return

    print(model_formatters.format_rank_header())
    helpers.display_results(entries, formatter=model_formatters.format_rank_entry)
