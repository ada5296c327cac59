# models/session.py

"""
Explicit application state for one user session.

A `Session` replaces the ambient UI state of a single-page app (role, authentication flag, active scope,
roll-number query) with one object that the presentation layer owns and passes around.

Control flow:
    - The user picks a role. Teachers must `authenticate()` with the configured code before managing data.
      Students are read-only and never need a code.
    - `switch_scope()` swaps the active `Gradebook` for the one persisted under the new (subject, class) keys.
    - After every successful mutation the presentation layer calls `commit()`, which persists the gradebook
      only while an authenticated teacher is in charge. Student lookups therefore never write.
"""

from __future__ import annotations

from enum import Enum

from core.config import Settings, get_settings
from core.logger import get_logger
from core.response import ErrorCode, Response
from core.storage import StorageAdapter
from models import ranking
from models.gradebook import Gradebook
from models.scope import Scope

logger = get_logger(__name__)


class Role(str, Enum):
    TEACHER = "teacher"
    STUDENT = "student"


class Session:

    def __init__(self, storage: StorageAdapter, settings: Settings | None = None):
        self._storage = storage
        self._settings = settings or get_settings()
        self._role: Role | None = None
        self._authenticated: bool = False
        self._query_roll: str = ""
        self._scope = Scope(self._settings.default_subject, self._settings.default_class)
        self._gradebook: Gradebook | None = None

    # === properties ===

    @property
    def role(self) -> Role | None:
        return self._role

    @property
    def is_authenticated(self) -> bool:
        return self._authenticated

    @property
    def can_manage(self) -> bool:
        return self._role is Role.TEACHER and self._authenticated

    @property
    def scope(self) -> Scope:
        return self._scope

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def query_roll(self) -> str:
        return self._query_roll

    @property
    def gradebook(self) -> Gradebook:
        if self._gradebook is None:
            raise RuntimeError("No gradebook loaded; call switch_scope() first.")
        return self._gradebook

    @property
    def has_gradebook(self) -> bool:
        return self._gradebook is not None

    # === role and authentication ===

    def choose_role(self, role: Role | str) -> None:
        self._role = Role(role)
        self._authenticated = False
        self._gradebook = None

    def authenticate(self, code: str) -> Response:
        """
        Checks a teacher code against the configured gate value.

        Returns:
            Response: Success marks the session authenticated; a mismatch fails with
            `ErrorCode.NOT_AUTHORIZED` and leaves the session unauthenticated.

        Notes:
            - The code is a placeholder gate, not a security mechanism.
        """
        if self._role is not Role.TEACHER:
            return Response.fail(
                detail="Only teachers need an access code.",
                error=ErrorCode.NOT_AUTHORIZED,
                status_code=403,
            )

        if code != self._settings.teacher_code:
            logger.info("teacher code rejected")
            return Response.fail(
                detail="Invalid code",
                error=ErrorCode.NOT_AUTHORIZED,
                status_code=401,
            )

        self._authenticated = True
        logger.info("teacher authenticated")

        return Response.succeed(detail="Teacher access granted.")

    # === scope ===

    def switch_scope(self, subject: str, class_name: str) -> Response:
        """
        Makes (subject, class) the active scope and loads its collections from storage.

        Returns:
            Response: The `Gradebook.load()` response. On failure the previous scope and gradebook stay active.

        Notes:
            - Any selection in the previous gradebook is discarded with it.
            - Reloading the same scope re-reads storage.
        """
        try:
            scope = Scope(subject, class_name)

        except (TypeError, ValueError) as e:
            return Response.fail(
                detail=f"Invalid field value: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        load_response = Gradebook.load(scope, self._storage)

        if load_response.success:
            self._scope = scope
            self._gradebook = load_response.data["gradebook"]

        return load_response

    def reload(self) -> Response:
        return self.switch_scope(self._scope.subject, self._scope.class_name)

    # === persistence ===

    def commit(self) -> Response:
        """
        Persists the active gradebook when an authenticated teacher is in charge.

        Returns:
            Response: The `Gradebook.save()` response, or a failed response with
            `ErrorCode.NOT_AUTHORIZED` (status 403) when the session may not write.
        """
        if not self.can_manage:
            return Response.fail(
                detail="Read-only session; nothing was saved.",
                error=ErrorCode.NOT_AUTHORIZED,
                status_code=403,
            )

        return self.gradebook.save()

    # === student lookup ===

    def find_student(self, roll: str) -> Response:
        """
        Looks up a roll number in the active scope and builds the student's report.

        Returns:
            Response: On success "record" (Student) and "report" (dict, see `ranking.student_report()`).
            A miss fails with `ErrorCode.NOT_FOUND`.
        """
        self._query_roll = roll

        lookup_response = self.gradebook.lookup_by_roll(roll)

        if not lookup_response.success:
            return lookup_response

        student = lookup_response.data["record"]
        report = ranking.student_report(
            student,
            self.gradebook.students,
            self.gradebook.tests,
            self._settings.pass_threshold,
        )

        return Response.succeed(data={"record": student, "report": report})
