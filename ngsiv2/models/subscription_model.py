"""Subscription models.

A subscription has a fixed schema, so unlike entities it is a plain
pydantic model with camelCase aliases. Unset fields are omitted when
encoding.
"""

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import Field, field_serializer, field_validator

from .attribute_type import format_date_time, parse_date_time
from .base_model import NgsiBaseModel
from .query_model import EntityMatcher, QueryExpression

SubscriptionSubjectEntity = EntityMatcher
SubscriptionSubjectConditionExpression = QueryExpression


class SubscriptionStatus(StrEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    EXPIRED = "expired"
    FAILED = "failed"


class SubscriptionSubjectCondition(NgsiBaseModel):
    """Attributes and expression whose changes trigger a notification."""

    attrs: list[str] | None = Field(default=None, description="Watched attributes")
    expression: SubscriptionSubjectConditionExpression | None = Field(
        default=None, description="Filter on the changed entities"
    )


class SubscriptionSubject(NgsiBaseModel):
    """Entities watched by a subscription and the triggering condition."""

    entities: list[SubscriptionSubjectEntity] | None = Field(
        default=None, description="Watched entities"
    )
    condition: SubscriptionSubjectCondition | None = Field(
        default=None, description="Triggering condition"
    )


class SubscriptionNotificationHttp(NgsiBaseModel):
    url: str = Field(..., description="Notification endpoint")


class SubscriptionNotificationHttpCustom(NgsiBaseModel):
    """Notification endpoint with a custom request template."""

    url: str = Field(..., description="Notification endpoint")
    headers: dict[str, str] | None = Field(default=None, description="Extra headers")
    qs: dict[str, str] | None = Field(default=None, description="Query parameters")
    method: str | None = Field(default=None, description="HTTP method")
    payload: str | None = Field(default=None, description="Payload template")


class SubscriptionNotification(NgsiBaseModel):
    """How and what to notify, plus delivery statistics kept by the broker."""

    attrs: list[str] | None = Field(default=None, description="Attributes to include")
    except_attrs: list[str] | None = Field(
        default=None, alias="exceptAttrs", description="Attributes to leave out"
    )
    http: SubscriptionNotificationHttp | None = None
    http_custom: SubscriptionNotificationHttpCustom | None = Field(
        default=None, alias="httpCustom"
    )
    attrs_format: str | None = Field(
        default=None, alias="attrsFormat", description="Entity representation format"
    )
    metadata: list[str] | None = Field(default=None, description="Metadata to include")
    times_sent: int | None = Field(default=None, ge=0, alias="timesSent")
    last_notification: datetime | None = Field(default=None, alias="lastNotification")
    last_failure: datetime | None = Field(default=None, alias="lastFailure")
    last_success: datetime | None = Field(default=None, alias="lastSuccess")
    last_success_code: int | None = Field(default=None, ge=0, alias="lastSuccessCode")


class Subscription(NgsiBaseModel):
    """A context subscription."""

    id: str | None = Field(default=None, description="Assigned by the broker")
    description: str | None = Field(default=None, description="Free text description")
    subject: SubscriptionSubject | None = None
    notification: SubscriptionNotification | None = None
    expires: datetime | None = Field(default=None, description="Expiration time")
    status: SubscriptionStatus | None = None
    throttling: int | None = Field(
        default=None, ge=0, description="Minimum seconds between notifications"
    )

    @field_validator("expires", mode="before")
    @classmethod
    def validate_expires(cls, v: Any) -> Any:
        """Parse expires as an RFC 3339 timestamp."""
        if v is None:
            return None
        return parse_date_time(v)

    @field_serializer("expires")
    def serialize_expires(self, v: datetime | None) -> str | None:
        """Format expires with millisecond precision."""
        return None if v is None else format_date_time(v)
