"""Pydantic models for contact capture and lead submission outcomes."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class ContactInfo(BaseModel):
    full_name: str = Field(min_length=1, max_length=200)
    phone: Optional[str] = None
    email: Optional[str] = None
    preferred_contact: Literal["phone", "email", "text"] = "phone"
    best_time: Optional[str] = None
    message: Optional[str] = Field(default=None, max_length=2000)
    # Opaque token supplied by the hosting page; passed through untouched
    csrf_token: Optional[str] = None

    @field_validator("full_name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("full_name must not be blank")
        return v.strip()

    @field_validator("phone")
    @classmethod
    def phone_must_have_digits(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        digits = [c for c in v if c.isdigit()]
        if len(digits) < 10:
            raise ValueError("phone must contain at least 10 digits")
        return v.strip()

    @field_validator("email")
    @classmethod
    def email_must_look_valid(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        s = v.strip()
        local, _, domain = s.partition("@")
        if not local or "." not in domain:
            raise ValueError("email must be a valid address")
        return s

    @model_validator(mode="after")
    def require_a_channel(self) -> "ContactInfo":
        if self.phone is None and self.email is None:
            raise ValueError("either phone or email is required")
        if self.preferred_contact == "email" and self.email is None:
            raise ValueError("preferred_contact is email but no email was given")
        if self.preferred_contact in {"phone", "text"} and self.phone is None:
            raise ValueError(f"preferred_contact is {self.preferred_contact} but no phone was given")
        return self


class SubmissionOutcome(BaseModel):
    status: Literal["ok", "error"]
    message: Optional[str] = None


__all__ = ["ContactInfo", "SubmissionOutcome"]
