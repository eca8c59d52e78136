from __future__ import annotations

import logging
from typing import Any

from ..common.validators import require_mapping
from .repository import ClassRepository

logger = logging.getLogger(__name__)


class ClassService:
    def __init__(self, classes: ClassRepository):
        self._classes = classes

    def list_classes(self) -> list[dict]:
        return [c.to_dict() for c in self._classes.list_all()]

    def create_class(self, payload: Any) -> int:
        atributos = {k: v for k, v in require_mapping(payload, "Corpo da requisição").items() if k != "id"}
        class_id = self._classes.create(atributos=atributos)
        logger.info("Class %s created", class_id)
        return class_id
