"""Folding of one-row-per-member catalog results into entities."""

import logging
from typing import Any, Callable, Generic, Iterable, Mapping, Optional, TypeVar

logger = logging.getLogger("row-aggregator")

E = TypeVar("E")
Row = Mapping[str, Any]


class RowAggregator(Generic[E]):
    """Aggregate rows that describe one entity per composite key.

    Index and foreign key queries return one row per member column. Rows
    sharing a key carry the same entity-level attributes, so the first row
    seen creates the entity and every row (including the first) appends its
    member. Entities come back in first-seen order and members in row order.
    """

    def __init__(
        self,
        key_for: Callable[[Row], str],
        create: Callable[[Row], E],
        add_member: Callable[[E, Row], None],
        accept: Optional[Callable[[Row], bool]] = None
    ):
        """Initialize the aggregator.

        Args:
            key_for: Computes the entity's composite key from a row.
            create: Builds a new entity from the entity-level row attributes.
            add_member: Appends the row's member column(s) to an entity.
            accept: Optional filter; a rejected row contributes nothing.
        """
        self._key_for = key_for
        self._create = create
        self._add_member = add_member
        self._accept = accept

    def fold(self, rows: Iterable[Row]) -> list[E]:
        """Fold the rows into entities.

        Args:
            rows: Catalog rows in query order.

        Returns:
            The entities in first-seen order.
        """
        entities: dict[str, E] = {}
        skipped = 0
        for row in rows:
            if self._accept is not None and not self._accept(row):
                skipped += 1
                continue
            key = self._key_for(row)
            entity = entities.get(key)
            if entity is None:
                entity = self._create(row)
                entities[key] = entity
            self._add_member(entity, row)

        if skipped:
            logger.debug("Skipped %d rejected rows", skipped)
        return list(entities.values())
