from __future__ import annotations

from typing import Protocol, Sequence

from .model import Department, SubDepartment


class DepartmentRepository(Protocol):
    def list_all(self) -> Sequence[Department]:
        raise NotImplementedError


class SubDepartmentRepository(Protocol):
    def list_all(self) -> Sequence[SubDepartment]:
        raise NotImplementedError
