# cli/main.py

"""
Start Menu for the progress tracker CLI.

Asks whether the user is a teacher or a student and hands a `Session` to the matching menu.
"""

from typing import cast

import cli.menu_helpers as helpers
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.menus import student_menu, teacher_menu
from core.config import get_settings
from core.logger import configure_logging
from core.storage import JsonFileStorage
from models.session import Role, Session


def run_cli() -> None:
    """
    Top-level loop with dispatch for the Start menu.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    session = Session(JsonFileStorage(settings.resolved_data_dir), settings)

    title = formatters.format_banner_text("STUDENT PROGRESS TRACKER")
    options = [
        ("I am a Teacher", lambda: start_teacher(session)),
        ("I am a Student", lambda: start_student(session)),
    ]
    zero_option = "Exit Program"

    while True:
        menu_response = helpers.display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            exit_program()

        elif callable(menu_response):
            menu_response()

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")


def start_teacher(session: Session) -> None:
    """
    Prompts for the teacher code until it matches or the user cancels, then opens the Teacher menu.

    Notes:
        - A mismatch prints "Invalid code" and asks again; the session stays unauthenticated.
        - The last scope used in this run is reopened, reloaded from storage.
    """
    session.choose_role(Role.TEACHER)

    while not session.is_authenticated:
        code = helpers.prompt_user_input_or_cancel(
            "Enter Teacher Code (leave blank to cancel):"
        )

        if code is MenuSignal.CANCEL:
            return
        code = cast(str, code)

        auth_response = session.authenticate(code)

        if not auth_response.success:
            print(f"\n{auth_response.detail}")

    load_response = session.reload()

    while not load_response.success:
        helpers.display_response_failure(load_response)
        print("\nThe stored data for this class could not be read. Choose another class.")

        selection = helpers.prompt_scope_selection(session)

        if selection is None:
            return

        load_response = session.switch_scope(*selection)

    teacher_menu.run(session)


def start_student(session: Session) -> None:
    session.choose_role(Role.STUDENT)
    student_menu.run(session)


def exit_program():
    """
    Displays an exit banner and terminates the CLI program.

    Raises:
        SystemExit: Always raised to immediately terminate execution.
    """
    exit_banner = formatters.format_banner_text("Exiting Program")
    print(f"\n{exit_banner}\n")

    raise SystemExit


if __name__ == "__main__":
    run_cli()
