"""
Note schemas.

These define the API contracts for note CRUD operations.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models.note import Note


def _reject_blank(v: Optional[str]) -> Optional[str]:
    if v is not None and len(v.strip()) == 0:
        raise ValueError("Content cannot be empty")
    return v


class NoteCreate(BaseModel):
    """Note creation request schema."""

    content: str = Field(min_length=1, description="Note content")
    important: bool = Field(default=False, description="Importance flag")

    @field_validator("content")
    @classmethod
    def validate_content(cls, v):
        return _reject_blank(v)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"content": "async/await simplifies making async calls", "important": True}
        }
    )


class NoteUpdate(BaseModel):
    """Partial note update. Omitted fields are left untouched."""

    content: Optional[str] = Field(default=None, min_length=1, description="Note content")
    important: Optional[bool] = Field(default=None, description="Importance flag")

    @field_validator("content")
    @classmethod
    def validate_content(cls, v):
        return _reject_blank(v)

    def to_patch(self) -> dict:
        """Only the fields the caller actually sent."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class NoteResponse(BaseModel):
    """Note response schema."""

    id: str = Field(description="Note unique identifier")
    content: str = Field(description="Note content")
    important: bool = Field(description="Importance flag")
    user: str = Field(description="Id of the owning user")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "content": "HTML is easy",
                "important": False,
                "user": "456e7890-e89b-12d3-a456-426614174000",
            }
        }
    )

    @classmethod
    def from_model(cls, note: Note) -> "NoteResponse":
        return cls(
            id=str(note.id),
            content=note.content,
            important=bool(note.important),
            user=str(note.user_id),
        )
