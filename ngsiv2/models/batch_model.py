"""Batch operation models.

Batch updates carry whole entities and are encoded through the entity
codec; batch queries combine entity matchers with a query expression.
"""

from enum import StrEnum

from pydantic import Field

from .base_model import NgsiBaseModel
from .entity_model import Entity
from .query_model import EntityMatcher, QueryExpression


class ActionType(StrEnum):
    """Action applied by a batch update to every listed entity."""

    APPEND = "append"
    APPEND_STRICT = "appendStrict"
    UPDATE = "update"
    DELETE = "delete"
    REPLACE = "replace"


class BatchUpdate(NgsiBaseModel):
    """Request body of a batch update operation."""

    action_type: ActionType = Field(
        ..., alias="actionType", description="Action to apply"
    )
    entities: list[Entity] = Field(
        default_factory=list, description="Entities the action applies to"
    )

    def add_entity(self, entity: Entity) -> None:
        self.entities.append(entity)


class BatchQuery(NgsiBaseModel):
    """Request body of a batch query operation."""

    entities: list[EntityMatcher] | None = Field(
        default=None, description="Entities to match"
    )
    attrs: list[str] | None = Field(default=None, description="Attributes to return")
    expression: QueryExpression | None = Field(
        default=None, description="Filter expression"
    )
    metadata: list[str] | None = Field(default=None, description="Metadata to return")

    def match(self, *matchers: EntityMatcher) -> None:
        """Add entity matchers to the query.

        Every matcher is checked before any is added.

        Raises:
            InvalidValueError: If a matcher has neither or both of id and
                idPattern, or both type and typePattern
        """
        for matcher in matchers:
            matcher.check()
        if self.entities is None:
            self.entities = []
        self.entities.extend(matchers)
