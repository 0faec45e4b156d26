from datetime import datetime
from typing import List, Literal, Optional, Union
from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, field_validator


class UserCreate(BaseModel):
    email: str = Field(min_length=1)
    name: str = Field(min_length=1)
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        # Stored exactly as typed; sign-in compares emails case-sensitively
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(str(e)) from e
        return value


class UserResponse(BaseModel):
    id: str
    email: str
    name: str
    interests: List[str] = []
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    class Config:
        from_attributes = True
        populate_by_name = True


class Identity(BaseModel):
    """A user resolved from either credential source."""
    id: str
    email: str
    name: str

    class Config:
        from_attributes = True


class PasswordAttempt(BaseModel):
    kind: Literal["password"] = "password"
    email: str
    password: str


class FederatedAttempt(BaseModel):
    kind: Literal["federated"] = "federated"
    email: str
    display_name: str = ""


CredentialAttempt = Union[PasswordAttempt, FederatedAttempt]
