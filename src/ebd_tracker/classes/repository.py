from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence

from .model import ClassGroup


class ClassRepository(Protocol):
    def list_all(self) -> Sequence[ClassGroup]:
        raise NotImplementedError

    def create(self, *, atributos: Mapping[str, Any]) -> int:
        raise NotImplementedError
