"""Recommendation API schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class RecommendationCreate(BaseModel):
    """Request body for POST /recommendations."""

    model_config = ConfigDict(populate_by_name=True)

    recipient_email: EmailStr = Field(..., alias="recipientEmail")
    property_id: str = Field(..., min_length=1, alias="propertyId")
    message: str | None = Field(None, max_length=500)

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip() or None
        return v


class RecommendationStatusUpdate(BaseModel):
    """Request body for PATCH /recommendations/{id}/status.

    status is a plain string; accepted/rejected is enforced by the service
    so a wrong value yields "Invalid status".
    """

    status: str = ""
