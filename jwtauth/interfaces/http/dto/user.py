from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class UpdateProfileRequestDTO(BaseModel):
    """Partial update; omitted fields are left as they are.

    ``password`` may be an empty string, which also means "no change".
    """

    model_config = ConfigDict(str_max_length=255)

    name: str | None = Field(default=None, min_length=1)
    email: str | None = Field(default=None, min_length=1)
    password: str | None = Field(default=None, max_length=128)


class UpdateProfileResponseDTO(BaseModel):
    message: str = "Profile updated successfully"
    name: str
    email: str
