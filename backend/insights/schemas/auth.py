from pydantic import BaseModel, field_validator

class LoginIn(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def email_trim(cls, v: str):
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("invalid email")
        return v

    @field_validator("password")
    @classmethod
    def password_min(cls, v: str):
        if len(v) < 6:
            raise ValueError("password must be at least 6 characters")
        return v

class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: str
