"""
Tipo resultado para escrituras contra el backend.

Las operaciones del record store nunca lanzan: devuelven ``Ok(valor)``
o ``Err(kind, detail)`` y el llamador decide si conserva o revierte
la mutación optimista ya aplicada al snapshot.
"""

import enum
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class BackendErrorKind(str, enum.Enum):
    """Motivos por los que una operación del backend no se completó."""
    NOT_CONFIGURED = "not_configured"
    OPERATION_FAILED = "operation_failed"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    kind: BackendErrorKind
    detail: str = ""

    @property
    def ok(self) -> bool:
        return False

    def __str__(self) -> str:
        if self.detail:
            return f"{self.kind.value}: {self.detail}"
        return self.kind.value


Result = Union[Ok[T], Err]
