from pydantic import BaseModel, field_validator
import datetime as dt
from uuid import UUID

class RegisterIn(BaseModel):
    email: str
    password: str
    name: str = ""

    @field_validator("email")
    @classmethod
    def email_normalize(cls, v: str):
        v = v.strip().lower()
        if "@" not in v or len(v) > 255:
            raise ValueError("invalid email")
        return v

    @field_validator("password")
    @classmethod
    def password_min(cls, v: str):
        v = str(v)
        if len(v) < 6:
            raise ValueError("password must be at least 6 characters")
        return v

    @field_validator("name")
    @classmethod
    def name_trim(cls, v: str):
        v = (v or "").strip()
        if len(v) > 128:
            raise ValueError("name too long")
        return v

class LoginIn(BaseModel):
    email: str
    password: str

class UserOut(BaseModel):
    id: UUID
    email: str
    name: str
    created_at: dt.datetime | None = None

    class Config:
        from_attributes = True

class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut
