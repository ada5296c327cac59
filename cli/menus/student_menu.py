# cli/menus/student_menu.py

"""
Student menu for the progress tracker CLI.

Students pick a class and subject, then look up their own results by roll number.
The session stays read-only: nothing a student does is ever written to storage.
"""

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from models.session import Session


def run(session: Session) -> None:
    """
    Loops scope selection and roll-number lookups until the student cancels.
    """
    while True:
        selection = helpers.prompt_scope_selection(session)

        if selection is None:
            break

        subject, class_name = selection
        load_response = session.switch_scope(subject, class_name)

        if not load_response.success:
            helpers.display_response_failure(load_response)
            continue

        lookup_results(session)

    helpers.returning_to("Start Menu")


def lookup_results(session: Session) -> None:
    while True:
        roll = helpers.prompt_user_input_or_cancel(
            f"Enter Roll No for {session.scope} (leave blank to go back):"
        )

        if roll is MenuSignal.CANCEL:
            return

        display_student_progress(session, str(roll))


def display_student_progress(session: Session, roll: str) -> None:
    """
    Prints the report for one roll number: summary, progress chart, and marks table.

    Notes:
        - A roll number that does not exist in the scope prints "No student found." and is not an error.
    """
    session_response = session.find_student(roll)

    if not session_response.success:
        print("\nNo student found.")
        return

    report = session_response.data["report"]
    series = session.gradebook.marks_series(session_response.data["record"])

    print(f"\n{model_formatters.format_report_summary(report)}")

    print(f"\n{formatters.format_banner_text('Progress Graph')}")
    if not series:
        print("No tests have been recorded yet.")
    helpers.display_results(series, formatter=model_formatters.format_progress_point)

    print(f"\n{formatters.format_banner_text('Marks Table')}")
    helpers.display_results(report["tests"], formatter=model_formatters.format_report_row)
