"""Base models for context broker documents.

This module defines the base configuration shared by every model of the
package.
"""

from pydantic import BaseModel, ConfigDict


# Base configuration for all models
class NgsiBaseModel(BaseModel):
    """Base model for all broker documents with common configuration."""

    model_config = ConfigDict(  # pyright: ignore[reportUnannotatedClassAttribute]
        populate_by_name=True,
    )
