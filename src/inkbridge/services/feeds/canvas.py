from __future__ import annotations

from typing import Any, Mapping

from inkbridge.domain import ResourceKind, Response
from inkbridge.services.projection import as_int, as_str, by_key

from .base import Feed, pick

DEFAULT_GRADE_POINTS: Mapping[str, float] = {
    "A+": 4.0,
    "A": 4.0,
    "A-": 3.7,
    "B+": 3.3,
    "B": 3.0,
    "B-": 2.7,
    "C+": 2.3,
    "C": 2.0,
    "C-": 1.7,
    "D+": 1.3,
    "D": 1.0,
    "D-": 0.7,
    "F": 0.0,
}


class Canvas(Feed):
    """LMS to-do items and course grades.

    ``domain`` and ``canvas_key`` are only sent when given; the backend falls
    back to what the user linked on the account.
    """

    def fetch(self, type_: str, domain: str = "", canvas_key: str = "") -> Response:
        response = self._bridge.post("/canvas", {"type": type_}, domain=domain, canvas_key=canvas_key)
        kind = ResourceKind.LMS_GRADES if type_ == "grades" else ResourceKind.LMS_TODOS
        return self._keep(kind, response)

    def _todos(self) -> Any:
        return self._data(ResourceKind.LMS_TODOS, lambda: self.fetch("todo"))

    def _grades(self) -> Any:
        return self._data(ResourceKind.LMS_GRADES, lambda: self.fetch("grades"))

    # assignments ----------------------------------------------------------
    def assignment(self, key: int | str) -> dict[str, Any]:
        """By position, or by assignment ``id``. Empty when there is no match."""
        item = pick(self._todos(), key, "id")
        return dict(item) if isinstance(item, Mapping) else {}

    def assignment_name(self, key: int | str) -> str:
        return as_str(self.assignment(key).get("name"))

    def assignment_due_date(self, key: int | str) -> str:
        return as_str(self.assignment(key).get("due_at"))

    def assignment_type(self, key: int | str) -> str:
        return as_str(self.assignment(key).get("type"))

    # grades ---------------------------------------------------------------
    def grade_set(self, key: int | str) -> dict[str, Any]:
        """By position, or by ``course_name``. Empty when there is no match."""
        item = pick(self._grades(), key, "course_name")
        return dict(item) if isinstance(item, Mapping) else {}

    def letter_grade(self, key: int | str) -> str:
        return as_str(self.grade_set(key).get("grade"))

    def numeric_grade(self, key: int | str) -> int:
        return as_int(self.grade_set(key).get("score"))

    def gpa_estimate(self, scale: Mapping[str, float] | None = None) -> float:
        """Unweighted mean of grade points; unknown letters count as ``F``."""
        points = dict(DEFAULT_GRADE_POINTS)
        if scale:
            points.update(scale)
        grades = self._grades()
        if not isinstance(grades, list) or not grades:
            return 0.0
        total = 0.0
        for entry in grades:
            letter = as_str(by_key(entry, "grade"))
            total += points.get(letter, points["F"])
        return total / len(grades)
