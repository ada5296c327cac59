# tests/conftest.py

import pytest

from core.config import Settings
from core.storage import InMemoryStorage
from models.gradebook import Gradebook
from models.scope import Scope
from models.session import Session
from models.student import Student
from models.test import Test


@pytest.fixture
def sample_settings():
    return Settings(
        teacher_code="p3",
        data_dir="unused",
        classes=["9", "10", "11", "12"],
        subjects=["Maths", "English"],
        default_class="9",
        default_subject="Maths",
        pass_threshold=33.0,
        log_level="WARNING",
    )


@pytest.fixture
def memory_storage():
    return InMemoryStorage()


@pytest.fixture
def sample_scope():
    return Scope("Maths", "9")


@pytest.fixture
def sample_gradebook(sample_scope, memory_storage):
    gradebook_response = Gradebook.load(sample_scope, memory_storage)
    return gradebook_response.data["gradebook"]


@pytest.fixture
def populated_gradebook(sample_gradebook):
    gb = sample_gradebook
    gb.add_student("Asha")
    gb.add_student("Ravi")
    gb.add_student("Meera")
    gb.add_test("Unit1", 50)
    gb.add_test("Unit2", "100")
    return gb


@pytest.fixture
def sample_student():
    return Student("Asha", "9-M-01", {"Unit1": 40.0})


@pytest.fixture
def sample_test():
    return Test("Unit1", 50.0)


@pytest.fixture
def teacher_session(memory_storage, sample_settings):
    session = Session(memory_storage, sample_settings)
    session.choose_role("teacher")
    session.authenticate("p3")
    session.switch_scope("Maths", "9")
    return session


@pytest.fixture
def student_session(memory_storage, sample_settings):
    session = Session(memory_storage, sample_settings)
    session.choose_role("student")
    session.switch_scope("Maths", "9")
    return session
