"""Context entity models package.

This package contains the pydantic models of NGSIv2 documents: entities and
their attributes, subscriptions, notifications and batch operations, plus the
codec functions reading and writing them.
"""

# Base models
from .base_model import NgsiBaseModel

# Errors
from .errors import (
    AttributeNameError,
    CastError,
    DecodeError,
    FieldSyntaxError,
    InvalidValueError,
    NgsiError,
    NotFoundError,
    TypeMismatchError,
)

# Field validation
from .validation import (
    INVALID_CHARS,
    INVALID_FIELD_CHARS,
    RESERVED_ATTRIBUTE_NAMES,
    is_valid_attribute_name,
    is_valid_field_syntax,
    is_valid_string,
    sanitize_string,
)

# Attribute types and values
from .attribute_type import (
    DATE_CREATED_ATTRIBUTE_NAME,
    DATE_EXPIRES_ATTRIBUTE_NAME,
    DATE_MODIFIED_ATTRIBUTE_NAME,
    AttributeType,
    format_date_time,
    parse_date_time,
)
from .geo_model import GeoPoint, Geometry

# Entity models
from .attribute_model import Attribute, Metadata
from .entity_model import Entity

# Subscription, notification and batch models
from .batch_model import ActionType, BatchQuery, BatchUpdate
from .notification_model import Notification
from .query_model import (
    APIResources,
    EntityMatcher,
    GeorelModifier,
    GeospatialRelationship,
    QueryExpression,
    SimpleLocationFormatGeometry,
    SimpleQueryOperator,
    SimpleQueryStatement,
    SimplifiedEntityRepresentation,
    binary_statement,
    binary_statement_multiple_values,
    binary_statement_range,
    build_georel,
    georel_modifier_max_distance,
    georel_modifier_min_distance,
)
from .subscription_model import (
    Subscription,
    SubscriptionNotification,
    SubscriptionNotificationHttp,
    SubscriptionNotificationHttpCustom,
    SubscriptionStatus,
    SubscriptionSubject,
    SubscriptionSubjectCondition,
)

# Codec
from .codec import (
    decode_entities,
    decode_entities_json,
    decode_entity,
    decode_entity_json,
    decode_notification,
    decode_notification_json,
    decode_subscription,
    decode_subscription_json,
    encode_batch_query,
    encode_batch_update,
    encode_entity,
    encode_entity_json,
    encode_subscription,
)

__all__ = [
    # Base models
    "NgsiBaseModel",
    # Errors
    "NgsiError",
    "FieldSyntaxError",
    "AttributeNameError",
    "InvalidValueError",
    "NotFoundError",
    "TypeMismatchError",
    "CastError",
    "DecodeError",
    # Field validation
    "INVALID_CHARS",
    "INVALID_FIELD_CHARS",
    "RESERVED_ATTRIBUTE_NAMES",
    "is_valid_string",
    "sanitize_string",
    "is_valid_field_syntax",
    "is_valid_attribute_name",
    # Attribute types and values
    "AttributeType",
    "DATE_CREATED_ATTRIBUTE_NAME",
    "DATE_MODIFIED_ATTRIBUTE_NAME",
    "DATE_EXPIRES_ATTRIBUTE_NAME",
    "format_date_time",
    "parse_date_time",
    "GeoPoint",
    "Geometry",
    # Entity models
    "Attribute",
    "Metadata",
    "Entity",
    # Subscription, notification and batch models
    "ActionType",
    "BatchUpdate",
    "BatchQuery",
    "EntityMatcher",
    "QueryExpression",
    "APIResources",
    "SimplifiedEntityRepresentation",
    "SimpleLocationFormatGeometry",
    "GeospatialRelationship",
    "GeorelModifier",
    "georel_modifier_max_distance",
    "georel_modifier_min_distance",
    "build_georel",
    "SimpleQueryOperator",
    "SimpleQueryStatement",
    "binary_statement",
    "binary_statement_multiple_values",
    "binary_statement_range",
    "Subscription",
    "SubscriptionStatus",
    "SubscriptionSubject",
    "SubscriptionSubjectCondition",
    "SubscriptionNotification",
    "SubscriptionNotificationHttp",
    "SubscriptionNotificationHttpCustom",
    "Notification",
    # Codec
    "encode_entity",
    "encode_entity_json",
    "decode_entity",
    "decode_entity_json",
    "decode_entities",
    "decode_entities_json",
    "encode_subscription",
    "decode_subscription",
    "decode_subscription_json",
    "decode_notification",
    "decode_notification_json",
    "encode_batch_update",
    "encode_batch_query",
]
