from __future__ import annotations

from typing import Protocol, Sequence

from .model import Assignment, CreatedResponsibility, NewResponsibility, Responsibility


class AssignmentRepository(Protocol):
    def list_all(self) -> Sequence[Assignment]:
        raise NotImplementedError

    def create(self, *, responsibility_id: str, staff_id: str) -> Assignment:
        raise NotImplementedError

    def delete(self, *, assignment_id: str) -> None:
        raise NotImplementedError


class ResponsibilityRepository(Protocol):
    def list_all(self) -> Sequence[Responsibility]:
        raise NotImplementedError

    def create(self, responsibility: NewResponsibility) -> CreatedResponsibility:
        """Create a responsibility; the backend also returns the assignments it generated."""

        raise NotImplementedError
