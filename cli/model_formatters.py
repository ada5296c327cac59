# cli/model_formatters.py

# anything that renders domain objects or ranking results
from textwrap import dedent

import core.formatters as formatters
from models.gradebook import Gradebook
from models.ranking import RankEntry
from models.student import Student
from models.test import Test

# === student formatters ===


def format_student_oneline(student: Student) -> str:
    return f"{student.roll:<10} | {student.name}"


def format_student_marks_row(student: Student, gradebook: Gradebook) -> str:
    marks = " | ".join(
        f"{formatters.format_score(student.mark_for(title)):>8}"
        for title in gradebook.test_titles
    )

    return f"{student.name:<20} | {student.roll:<10} | {marks}"


def format_marks_table_header(gradebook: Gradebook) -> str:
    titles = " | ".join(f"{title[:8]:>8}" for title in gradebook.test_titles)

    return f"{'Name':<20} | {'Roll No':<10} | {titles}"


# === test formatters ===


def format_test_oneline(test: Test) -> str:
    return f"{test.title:<20} | Max: {formatters.format_score(test.max_marks)}"


# === ranking formatters ===


def format_rank_header() -> str:
    return f"{'Rank':>4} | {'Roll No':<10} | {'Name':<20} | {'Total':>7} | {'Max':>7} | {'%':>6}"


def format_rank_entry(entry: RankEntry) -> str:
    return (
        f"{entry.position:>4} | {entry.roll:<10} | {entry.student.name:<20} | "
        f"{formatters.format_score(entry.total):>7} | "
        f"{formatters.format_score(entry.max_total):>7} | {entry.percentage:>6}"
    )


# === student report formatters ===


def format_report_summary(report: dict) -> str:
    rank = report["rank"] if report["rank"] is not None else "-"

    return dedent(
        f"""\
        Welcome, {report['name']}
        ... Total Marks: {formatters.format_score(report['total'])}
        ... Maximum Marks: {formatters.format_score(report['maxTotal'])}
        ... Percentage: {report['percentage']}%
        ... Status: {report['status']}
        ... Your Rank: {rank}"""
    )


def format_report_row(row: dict) -> str:
    marks = formatters.format_score(row["marks"]) or "-"

    return (
        f"{row['title']:<20} | {marks:>6} / {formatters.format_score(row['maxMarks']):<6} | "
        f"{row['status']}"
    )


def format_progress_point(point: dict) -> str:
    bar = formatters.format_progress_bar(point["marks"], point["max"])
    marks = formatters.format_score(point["marks"]) or "-"

    return f"{point['name']:<20} [{bar}] {marks}"
