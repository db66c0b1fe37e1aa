"""Structural model errors.

Soft outcomes (a top-level name already taken, a duplicate relationship,
an implicit relationship that already exists) are reported as ``None``
returns by the model, never through these classes. Everything here
aborts the operation that raised it.
"""

from __future__ import annotations


class ModelError(ValueError):
    """Base class for structural violations in the model graph."""

    code = "MODEL_ERROR"


class NameConflictError(ModelError):
    """A nested element was created with a name already used in its scope."""

    code = "NAME_CONFLICT"

    def __init__(self, kind: str, name: str, scope: str) -> None:
        self.kind = kind
        self.name = name
        self.scope = scope
        super().__init__(f"A {kind} named {name!r} already exists in {scope}.")


class MissingDestinationError(ModelError):
    """A relationship was requested without a destination element."""

    code = "MISSING_DESTINATION"

    def __init__(self, source_id: str | None = None) -> None:
        self.source_id = source_id
        super().__init__("The destination must be specified.")


class RelationshipConflictError(ModelError):
    """Modifying a relationship would duplicate a sibling outgoing edge."""

    code = "RELATIONSHIP_CONFLICT"

    def __init__(self, relationship_id: str, description: str, conflicting_id: str) -> None:
        self.relationship_id = relationship_id
        self.description = description
        self.conflicting_id = conflicting_id
        super().__init__(
            f"Relationship {conflicting_id} already has description {description!r}; "
            f"cannot modify relationship {relationship_id}."
        )


class UnresolvedReferenceError(ModelError):
    """An ID did not resolve to a registered element (or to the expected kind)."""

    code = "UNRESOLVED_REFERENCE"

    def __init__(self, ref_id: str, *, expected: str = "element", context: str = "") -> None:
        self.ref_id = ref_id
        self.expected = expected
        self.context = context
        msg = f"No {expected} with id {ref_id!r}"
        if context:
            msg = f"{msg} ({context})"
        super().__init__(msg)


class DuplicateIdentifierError(ModelError):
    """Hydration met an ID that is already registered in the model."""

    code = "DUPLICATE_ID"

    def __init__(self, ref_id: str) -> None:
        self.ref_id = ref_id
        super().__init__(f"The id {ref_id!r} is already in use.")
