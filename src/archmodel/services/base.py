"""BaseService — foundation for all archmodel services.

Every service receives a :class:`Workspace` at construction time. The
workspace provides the model, its graph views, and persistence.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from archmodel.domain.errors import ModelError
from archmodel.services.result import ServiceResult

if TYPE_CHECKING:
    from archmodel.domain.elements import Element
    from archmodel.domain.model import Model
    from archmodel.infrastructure.workspace import Workspace

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class ModelService(BaseService):
            def add_person(self, name: str) -> ServiceResult:
                if failure := self._load_failure("add_person"):
                    return failure
                ...
    """

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace

    @property
    def model(self) -> Model:
        return self._workspace.model

    def _load_failure(self, op: str) -> ServiceResult | None:
        """Force hydration; return a failed result if the workspace is unreadable."""
        try:
            self._workspace.model
        except ValidationError as exc:
            return ServiceResult.failure(
                op,
                "INVALID_WORKSPACE",
                f"Workspace {self._workspace.path} is not a valid model document",
                errors=exc.error_count(),
            )
        except ModelError as exc:
            return self._model_error(op, exc)
        except OSError as exc:
            return ServiceResult.failure(op, "INVALID_WORKSPACE", str(exc))
        return None

    @staticmethod
    def _model_error(op: str, exc: ModelError) -> ServiceResult:
        logger.debug("%s failed: %s", op, exc)
        return ServiceResult.failure(op, exc.code, str(exc))

    def _lookup(self, op: str, element_id: str, expected: type[Element]) -> Element | ServiceResult:
        """Resolve *element_id* to an element of type *expected*, or a NOT_FOUND result."""
        element = self.model.find_element(element_id)
        if not isinstance(element, expected):
            kind = expected.kind if hasattr(expected, "kind") else "element"
            return ServiceResult.failure(
                op, "NOT_FOUND", f"No {kind} with id {element_id!r}", id=element_id
            )
        return element
