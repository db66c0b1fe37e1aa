"""Sequential identity generation for elements and relationships.

One generator per Model; elements and relationships share its identity
space. IDs are decimal strings ("1", "2", ...). IDs recovered from a
persisted model are passed to :meth:`SequentialIdGenerator.found` so that
freshly generated IDs never collide with them.

INVARIANT: IDs are permanent. Once assigned, an ID never changes.
"""

from __future__ import annotations

import re

_NUMERIC_ID = re.compile(r"^\d+$")


def is_numeric_id(value: str) -> bool:
    """Check whether *value* is a plain decimal ID (legacy IDs may not be)."""
    return _NUMERIC_ID.match(value) is not None


class SequentialIdGenerator:
    """Hands out increasing integer IDs above the highest one seen so far.

    Not thread-safe; a Model is mutated by one caller at a time.
    """

    def __init__(self) -> None:
        self._high_water = 0
        self._found: set[str] = set()

    @property
    def high_water(self) -> int:
        """The largest numeric ID generated or found."""
        return self._high_water

    def generate_id(self, entity: object | None = None) -> str:
        """Return the next unused ID as a decimal string.

        *entity* is accepted so alternative strategies can key on the
        kind of thing being identified; the sequential strategy ignores it.
        """
        self._high_water += 1
        return str(self._high_water)

    def found(self, entity_id: str) -> None:
        """Record an externally assigned ID as consumed.

        Non-numeric legacy IDs are remembered but leave the counter alone.
        """
        self._found.add(entity_id)
        if is_numeric_id(entity_id):
            self._high_water = max(self._high_water, int(entity_id))

    def is_used(self, entity_id: str) -> bool:
        """Whether *entity_id* has been recorded via :meth:`found`."""
        return entity_id in self._found
