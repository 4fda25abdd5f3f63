# ========================================
# applicant_portal/schemas/application.py
# ========================================

import re
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import (
    AnyUrl,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic_core import PydanticCustomError

from applicant_portal.constants import APPLICATION_ERROR_MESSAGES, STATUS_CHANGES_REQUESTED

PHONE_NUMBER_REGEX = re.compile(r"^[+]?[(]?[0-9]{3}[)]?[-\s.]?[0-9]{3}[-\s.]?[0-9]{4,6}$")
MIN_WORD_COUNT = 100

ApplicationRole = Literal["developer", "designer", "product_manager", "project_manager", "qa", "social_media"]
ReviewStatus = Literal["accepted", "rejected", "changes_requested"]

_url_adapter = TypeAdapter(AnyUrl)


def _check_word_count(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value.split()) < MIN_WORD_COUNT:
        raise ValueError(f"must contain at least {MIN_WORD_COUNT} words")
    return value


def _check_uri(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        raise ValueError("must be a valid uri")
    return value


# ===========================
# NESTED INPUTS
# ===========================

class SocialLink(BaseModel):
    model_config = ConfigDict(extra="forbid")

    phone_number: Optional[str] = None
    github: Optional[str] = Field(None, min_length=1)
    instagram: Optional[str] = Field(None, min_length=1)
    linkedin: Optional[str] = Field(None, min_length=1)
    twitter: Optional[str] = Field(None, min_length=1)
    peerlist: Optional[str] = Field(None, min_length=1)
    behance: Optional[str] = Field(None, min_length=1)
    dribbble: Optional[str] = Field(None, min_length=1)

    @field_validator("phone_number", mode="before")
    @classmethod
    def validate_phone_number(cls, v):
        if v is None:
            return v
        v = v.strip() if isinstance(v, str) else v
        if not isinstance(v, str) or not PHONE_NUMBER_REGEX.match(v):
            raise ValueError('"phone_number" must be in a valid format')
        return v


class Professional(BaseModel):
    model_config = ConfigDict(extra="forbid")

    institution: Optional[str] = Field(None, min_length=1)
    skills: Optional[str] = Field(None, min_length=5)


# 1. Input: Create Application
class ApplicationCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    institution: str = Field(..., min_length=1)
    skills: str = Field(..., min_length=5)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    found_from: str = Field(..., min_length=1)
    introduction: str = Field(..., min_length=1)
    for_fun: str
    fun_fact: str
    why_rds: str
    flow_state: Optional[str] = None
    number_of_hours: int = Field(..., ge=1, le=100)
    role: ApplicationRole
    image_url: str
    social_link: Optional[SocialLink] = None

    @field_validator("for_fun", "fun_fact", "why_rds")
    @classmethod
    def validate_word_count(cls, v):
        return _check_word_count(v)

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, v):
        return _check_uri(v)


# 2. Input: Self-service Update
class ApplicationUpdate(BaseModel):
    """Sparse update. Only the fields that were sent are forwarded."""

    model_config = ConfigDict(extra="forbid")

    institution: Optional[str] = Field(None, min_length=1)
    skills: Optional[str] = Field(None, min_length=5)
    city: Optional[str] = Field(None, min_length=1)
    state: Optional[str] = Field(None, min_length=1)
    country: Optional[str] = Field(None, min_length=1)
    role: Optional[ApplicationRole] = None
    image_url: Optional[str] = None
    found_from: Optional[str] = Field(None, min_length=1)
    introduction: Optional[str] = Field(None, min_length=1)
    for_fun: Optional[str] = None
    fun_fact: Optional[str] = None
    why_rds: Optional[str] = None
    number_of_hours: Optional[int] = Field(None, ge=1, le=168)
    professional: Optional[Professional] = None
    social_link: Optional[SocialLink] = None

    @field_validator("for_fun", "fun_fact", "why_rds")
    @classmethod
    def validate_word_count(cls, v):
        return _check_word_count(v)

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, v):
        return _check_uri(v)

    @model_validator(mode="after")
    def check_not_empty(self):
        if not self.to_patch():
            raise PydanticCustomError("empty_payload", APPLICATION_ERROR_MESSAGES["EMPTY_UPDATE_PAYLOAD"])
        return self

    def to_patch(self) -> Dict[str, Any]:
        patch = self.model_dump(exclude_none=True)
        # An empty nested object carries nothing to update
        return {key: value for key, value in patch.items() if value != {}}


# 3. Input: Reviewer Feedback
class ApplicationFeedback(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: ReviewStatus
    feedback: Optional[str] = None

    @model_validator(mode="after")
    def check_feedback(self):
        if self.status == STATUS_CHANGES_REQUESTED and not self.feedback:
            raise PydanticCustomError("feedback_required", "Feedback is required when status is changes_requested")
        return self


# 4. Output: Application
class SocialLinkResponse(BaseModel):
    phone_number: Optional[str] = None
    github: Optional[str] = None
    instagram: Optional[str] = None
    linkedin: Optional[str] = None
    twitter: Optional[str] = None
    peerlist: Optional[str] = None
    behance: Optional[str] = None
    dribbble: Optional[str] = None


class ApplicationResponse(BaseModel):
    id: str
    user_id: str
    biodata: Optional[Dict[str, Any]] = None
    location: Optional[Dict[str, Any]] = None
    professional: Optional[Dict[str, Any]] = None
    intro: Optional[Dict[str, Any]] = None
    found_from: Optional[str] = None
    role: Optional[str] = None
    image_url: Optional[str] = None
    social_link: Optional[SocialLinkResponse] = None
    status: str
    score: int = 0
    nudge_count: int = 0
    last_nudge_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    last_updated_at: Optional[datetime] = None
    feedback: Optional[str] = None
    reviewer_name: Optional[str] = None
    reviewed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ApplicationListResponse(BaseModel):
    message: str
    applications: List[ApplicationResponse]
    next: Optional[str] = None


class NudgeResponse(BaseModel):
    message: str
    nudge_count: int
    last_nudge_at: str
