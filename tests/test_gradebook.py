# tests/test_gradebook.py

import json
import math

from core.response import ErrorCode
from core.storage import InMemoryStorage
from models import ranking
from models.gradebook import Gradebook
from models.scope import Scope

# === loading and saving ===


def test_load_empty_storage(sample_gradebook):
    assert sample_gradebook.students == []
    assert sample_gradebook.tests == []
    assert not sample_gradebook.has_unsaved_changes


def test_load_existing_data(sample_scope):
    storage = InMemoryStorage(
        {
            "Maths_students_9": json.dumps(
                [{"name": "Asha", "roll": "9-M-01", "marks": {"Unit1": 40}}]
            ),
            "Maths_tests_9": json.dumps([{"title": "Unit1", "maxMarks": 50}]),
        }
    )

    response = Gradebook.load(sample_scope, storage)
    assert response.success

    gb = response.data["gradebook"]
    assert [s.roll for s in gb.students] == ["9-M-01"]
    assert gb.test_titles == ["Unit1"]
    assert gb.students[0].mark_for("Unit1") == 40.0


def test_load_accepts_null_and_non_positive_max_marks(sample_scope):
    storage = InMemoryStorage(
        {
            "Maths_students_9": json.dumps(
                [{"name": "Asha", "roll": "9-M-01", "marks": {"Unit1": 40, "Quiz": 5, "Oral": 3}}]
            ),
            "Maths_tests_9": json.dumps(
                [
                    {"title": "Unit1", "maxMarks": 50},
                    {"title": "Quiz", "maxMarks": None},
                    {"title": "Oral", "maxMarks": 0},
                ]
            ),
        }
    )

    response = Gradebook.load(sample_scope, storage)
    assert response.success

    gb = response.data["gradebook"]
    assert gb.test_titles == ["Unit1", "Quiz", "Oral"]
    assert math.isnan(gb.tests[1].max_marks)

    asha = gb.students[0]
    assert ranking.compute_totals(asha, gb.tests) == (48.0, 50.0)
    assert ranking.test_status(5, gb.tests[1].max_marks) == ranking.FAIL
    assert [e.position for e in ranking.rank(gb.students, gb.tests)] == [1]


def test_null_max_marks_survive_save(sample_scope):
    storage = InMemoryStorage(
        {"Maths_tests_9": json.dumps([{"title": "Quiz", "maxMarks": None}])}
    )
    gb = Gradebook.load(sample_scope, storage).data["gradebook"]

    assert gb.save().success
    assert json.loads(storage.get("Maths_tests_9")) == [
        {"title": "Quiz", "maxMarks": None}
    ]


def test_load_malformed_json_fails_without_raising(sample_scope):
    storage = InMemoryStorage({"Maths_students_9": "{not json"})

    response = Gradebook.load(sample_scope, storage)
    assert not response.success
    assert response.error == ErrorCode.INVALID_INPUT


def test_load_non_list_blob_fails(sample_scope):
    storage = InMemoryStorage({"Maths_tests_9": '{"title": "Unit1"}'})

    response = Gradebook.load(sample_scope, storage)
    assert not response.success
    assert response.error == ErrorCode.INVALID_INPUT


def test_load_record_with_missing_fields_fails(sample_scope):
    storage = InMemoryStorage({"Maths_students_9": '[{"name": "Asha"}]'})

    response = Gradebook.load(sample_scope, storage)
    assert not response.success
    assert response.error == ErrorCode.INVALID_FIELD_VALUE


def test_save_writes_both_keys(populated_gradebook, memory_storage):
    gb = populated_gradebook
    gb.update_mark(0, "Unit1", "40")

    response = gb.save()
    assert response.success
    assert not gb.has_unsaved_changes

    students = json.loads(memory_storage.get("Maths_students_9"))
    tests = json.loads(memory_storage.get("Maths_tests_9"))

    assert students[0] == {"name": "Asha", "roll": "9-M-01", "marks": {"Unit1": 40.0}}
    assert tests == [
        {"title": "Unit1", "maxMarks": 50.0},
        {"title": "Unit2", "maxMarks": 100.0},
    ]


def test_nan_marks_survive_save_and_load(populated_gradebook, memory_storage):
    populated_gradebook.update_mark(0, "Unit1", "abc")
    populated_gradebook.save()

    assert json.loads(memory_storage.get("Maths_students_9"))[0]["marks"] == {
        "Unit1": None
    }

    reloaded = Gradebook.load(Scope("Maths", "9"), memory_storage).data["gradebook"]
    asha = reloaded.students[0]

    assert asha.is_graded_on("Unit1")
    assert ranking.compute_totals(asha, reloaded.tests) == (0.0, 0.0)


def test_mutations_do_not_persist_until_saved(sample_gradebook, memory_storage):
    sample_gradebook.add_student("Asha")

    assert sample_gradebook.has_unsaved_changes
    assert memory_storage.get("Maths_students_9") is None


# === students ===


def test_add_student_generates_roll(sample_gradebook):
    response = sample_gradebook.add_student("Asha")

    assert response.success
    student = response.data["record"]
    assert student.roll == "9-M-01"
    assert student.marks == {}


def test_add_student_blank_name_is_rejected(sample_gradebook):
    for name in ("", "   "):
        response = sample_gradebook.add_student(name)
        assert not response.success
        assert response.error == ErrorCode.VALIDATION_FAILED

    assert sample_gradebook.students == []
    assert not sample_gradebook.has_unsaved_changes


def test_add_student_allows_duplicate_names(sample_gradebook):
    sample_gradebook.add_student("Asha")
    sample_gradebook.add_student("Asha")

    assert [s.roll for s in sample_gradebook.students] == ["9-M-01", "9-M-02"]


def test_delete_student(populated_gradebook):
    response = populated_gradebook.delete_student(1)

    assert response.success
    assert [s.name for s in populated_gradebook.students] == ["Asha", "Meera"]
    assert populated_gradebook.test_titles == ["Unit1", "Unit2"]


def test_delete_student_out_of_range(populated_gradebook):
    response = populated_gradebook.delete_student(7)

    assert not response.success
    assert response.error == ErrorCode.NOT_FOUND
    assert len(populated_gradebook.students) == 3


def test_roll_numbers_can_repeat_after_deletion(populated_gradebook):
    populated_gradebook.delete_student(0)
    response = populated_gradebook.add_student("Kiran")

    # count-based generation reuses "9-M-03", already held by Meera
    assert response.data["record"].roll == "9-M-03"
    assert [s.roll for s in populated_gradebook.students] == [
        "9-M-02",
        "9-M-03",
        "9-M-03",
    ]


# === tests ===


def test_add_test(sample_gradebook):
    response = sample_gradebook.add_test("Unit1", "50")

    assert response.success
    assert response.data["record"].max_marks == 50.0
    assert sample_gradebook.selected_test == "Unit1"


def test_add_duplicate_test_is_noop(sample_gradebook):
    sample_gradebook.add_test("Unit1", 50)
    response = sample_gradebook.add_test("Unit1", 80)

    assert not response.success
    assert response.error == ErrorCode.VALIDATION_FAILED
    assert sample_gradebook.test_titles == ["Unit1"]
    assert sample_gradebook.tests[0].max_marks == 50.0


def test_add_test_rejects_blank_title_and_bad_max_marks(sample_gradebook):
    assert not sample_gradebook.add_test("  ", 50).success
    assert not sample_gradebook.add_test("Unit1", "lots").success
    assert not sample_gradebook.add_test("Unit1", "").success
    assert not sample_gradebook.add_test("Unit1", 0).success
    assert not sample_gradebook.add_test("Unit1", -5).success
    assert not sample_gradebook.add_test("Unit1", "Infinity").success

    assert sample_gradebook.tests == []


def test_add_test_rejects_max_marks_with_trailing_text(sample_gradebook):
    response = sample_gradebook.add_test("Unit1", "42abc")

    assert not response.success
    assert response.error == ErrorCode.INVALID_FIELD_VALUE
    assert sample_gradebook.tests == []
    assert not sample_gradebook.has_unsaved_changes


def test_delete_test_cascades_to_marks(populated_gradebook):
    gb = populated_gradebook
    gb.update_mark(0, "Unit1", 40)
    gb.update_mark(1, "Unit1", 30)
    gb.update_mark(1, "Unit2", 70)

    response = gb.delete_test("Unit1")

    assert response.success
    assert gb.test_titles == ["Unit2"]
    assert all(not s.is_graded_on("Unit1") for s in gb.students)
    assert ranking.compute_totals(gb.students[1], gb.tests) == (70.0, 100.0)


def test_delete_selected_test_clears_selection(populated_gradebook):
    gb = populated_gradebook
    gb.select_test("Unit1")

    gb.delete_test("Unit2")
    assert gb.selected_test == "Unit1"

    gb.delete_test("Unit1")
    assert gb.selected_test is None


def test_delete_unknown_test(populated_gradebook):
    response = populated_gradebook.delete_test("Finals")

    assert response.error == ErrorCode.NOT_FOUND
    assert populated_gradebook.test_titles == ["Unit1", "Unit2"]


def test_select_unknown_test(populated_gradebook):
    assert not populated_gradebook.select_test("Finals").success
    assert populated_gradebook.select_test(None).success
    assert populated_gradebook.selected_test is None


# === marks ===


def test_update_mark_is_not_checked_against_max(populated_gradebook):
    response = populated_gradebook.update_mark(0, "Unit1", "75")

    assert response.success
    assert populated_gradebook.students[0].mark_for("Unit1") == 75.0


def test_update_mark_stores_nan_for_text(populated_gradebook):
    response = populated_gradebook.update_mark(0, "Unit1", "")

    assert response.success
    assert math.isnan(populated_gradebook.students[0].mark_for("Unit1"))
    assert ranking.rank_of("9-M-01", populated_gradebook.students, populated_gradebook.tests) == 1


def test_update_mark_out_of_range(populated_gradebook):
    response = populated_gradebook.update_mark(5, "Unit1", "10")

    assert response.error == ErrorCode.NOT_FOUND


# === lookups ===


def test_lookup_by_roll(populated_gradebook):
    response = populated_gradebook.lookup_by_roll("9-M-02")

    assert response.success
    assert response.data["record"].name == "Ravi"
    assert response.data["index"] == 1


def test_lookup_by_roll_is_exact(populated_gradebook):
    for roll in ("9-m-02", " 9-M-02", "9-M-2"):
        response = populated_gradebook.lookup_by_roll(roll)
        assert not response.success
        assert response.error == ErrorCode.NOT_FOUND
        assert response.status_code == 404


def test_marks_series_follows_test_order(populated_gradebook):
    gb = populated_gradebook
    gb.update_mark(0, "Unit2", 90)

    assert gb.marks_series(gb.students[0]) == [
        {"name": "Unit1", "marks": None, "max": 50.0},
        {"name": "Unit2", "marks": 90.0, "max": 100.0},
    ]


def test_results_for_test(populated_gradebook):
    gb = populated_gradebook
    gb.update_mark(2, "Unit1", 12)

    response = gb.results_for_test("Unit1")
    assert response.success
    assert [mark for _, mark in response.data["rows"]] == [None, None, 12.0]

    assert gb.results_for_test("Finals").error == ErrorCode.NOT_FOUND


# === end to end ===


def test_add_grade_and_rank_single_student(sample_gradebook):
    gb = sample_gradebook

    asha = gb.add_student("Asha").data["record"]
    assert asha.roll == "9-M-01"

    gb.add_test("Unit1", 50)
    gb.update_mark(0, "Unit1", 40)

    total, max_total = ranking.compute_totals(asha, gb.tests)
    percent = ranking.percentage(total, max_total)

    assert (total, max_total) == (40.0, 50.0)
    assert percent == "80.00"
    assert ranking.pass_status(percent) == "Pass"
    assert ranking.rank_of(asha.roll, gb.students, gb.tests) == 1
