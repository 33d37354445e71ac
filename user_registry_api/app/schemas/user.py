"""
Pydantic model for user records.

The same schema is used for request bodies and responses.  Fields that
are missing from a request body fall back to empty values; presence of
``id`` and ``name`` is enforced by the store, not by the schema.

Validation is strict: ``"40"``, ``40.0`` or ``true`` are not accepted as
an age, and a numeric ``id`` is not turned into a string.
"""

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """A user record as stored and returned by the API."""

    model_config = ConfigDict(strict=True)

    id: str = Field("", examples=["5"])
    name: str = Field("", examples=["Bowser"])
    age: int = Field(0, examples=[40])
