from pydantic import BaseModel, field_validator


class UserLogin(BaseModel):
    email: str
    password: str

    @field_validator("email", "password")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Email and password are required")
        return v


class UserCreate(UserLogin):
    @field_validator("password")
    @classmethod
    def password_max_bytes(cls, v: str) -> str:
        """Ensure password does not exceed bcrypt's 72-byte limit when UTF-8 encoded.

        Raise a validation error so API returns a 400 with a clear message.
        """
        if len(v.encode("utf-8")) > 72:
            raise ValueError("password too long: must be at most 72 bytes when UTF-8 encoded")
        return v


class TokenOut(BaseModel):
    token: str
    email: str
