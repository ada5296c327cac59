# tests/test_cli.py

import pytest

from cli import main
from cli.menus import student_menu
from models.session import Session


@pytest.fixture
def scripted_input(monkeypatch):
    def feed(*answers):
        remaining = iter(answers)
        monkeypatch.setattr("builtins.input", lambda _prompt="": next(remaining))

    return feed


def test_teacher_code_reprompts_then_adds_student(
    scripted_input, memory_storage, sample_settings, capsys
):
    session = Session(memory_storage, sample_settings)
    scripted_input("wrong", "p3", "2", "Asha", "", "0")

    main.start_teacher(session)

    output = capsys.readouterr().out
    assert "Invalid code" in output
    assert "9-M-01" in output
    assert '"name": "Asha"' in memory_storage.get("Maths_students_9")


def test_cancelled_teacher_code_never_loads(scripted_input, memory_storage, sample_settings):
    session = Session(memory_storage, sample_settings)
    scripted_input("")

    main.start_teacher(session)

    assert not session.is_authenticated
    assert not session.has_gradebook


def test_student_progress_display(teacher_session, capsys):
    gb = teacher_session.gradebook
    gb.add_student("Asha")
    gb.add_test("Unit1", 50)
    gb.add_test("Unit2", 50)
    gb.update_mark(0, "Unit1", 40)

    student_menu.display_student_progress(teacher_session, "9-M-01")

    output = capsys.readouterr().out
    assert "Welcome, Asha" in output
    assert "Percentage: 80.00%" in output
    assert "Status: Pass" in output
    assert "Your Rank: 1" in output


def test_student_progress_miss(student_session, capsys):
    student_menu.display_student_progress(student_session, "9-M-77")

    assert "No student found." in capsys.readouterr().out
