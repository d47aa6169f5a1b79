from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import NewWorkSubmission, WorkSubmission


class WorkSubmissionRepository(Protocol):
    def list_all(self) -> Sequence[WorkSubmission]:
        raise NotImplementedError

    def create(self, submission: NewWorkSubmission) -> WorkSubmission:
        raise NotImplementedError

    def verify(self, *, submission_id: str, approved: bool, manager_comment: Optional[str] = None) -> None:
        """Record a manager decision. The backend refuses a rejection without a comment."""

        raise NotImplementedError
