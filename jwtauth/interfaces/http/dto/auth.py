from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequestDTO(BaseModel):
    model_config = ConfigDict(str_max_length=255)

    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    password: str = Field(min_length=1, max_length=128)


class LoginRequestDTO(BaseModel):
    model_config = ConfigDict(str_max_length=255)

    email: str = Field(min_length=1)
    password: str = Field(min_length=1, max_length=128)


class UserDTO(BaseModel):
    id: int
    name: str
    email: str


class RegisterResponseDTO(BaseModel):
    message: str = "User created successfully"
    user: UserDTO


class LoginResponseDTO(BaseModel):
    message: str = "success"
    name: str
    email: str


class MessageDTO(BaseModel):
    message: str = "success"
