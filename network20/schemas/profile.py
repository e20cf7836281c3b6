"""Profile Pydantic schemas for work-card records."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class HoursFrequency(str, Enum):
    """Period the available hours refer to."""

    WEEK = "week"
    MONTH = "month"


class PayPreference(str, Enum):
    """How the profile owner prefers to be paid."""

    HOURLY = "hourly"
    PROJECT = "project"
    SALARY = "salary"
    NEGOTIABLE = "negotiable"


class SocialPlatform(str, Enum):
    """Supported social link platforms."""

    TWITTER = "twitter"
    LINKEDIN = "linkedin"
    INSTAGRAM = "instagram"
    GITHUB = "github"
    WEBSITE = "website"
    OTHER = "other"


class SocialLink(BaseModel):
    """A single social profile link."""

    model_config = ConfigDict(from_attributes=True)

    platform: SocialPlatform = Field(description="Social platform")
    handle: str = Field(description="Handle or URL on that platform")


class ProfileBase(BaseModel):
    """Base profile fields shared across schemas."""

    display_name: str = Field(min_length=1, description="Name shown on the card")
    tagline: str | None = Field(default=None, description="One-line headline")
    bio: str | None = Field(default=None, description="Longer free-text description")
    location: str | None = Field(default=None, description="Where the person is based")
    skills: list[str] = Field(default_factory=list, description="Skills in display order")
    hours_available: int | None = Field(default=None, description="Hours available per period")
    hours_frequency: HoursFrequency = Field(default=HoursFrequency.WEEK, description="Period for hours_available")
    pay_preference: PayPreference | None = Field(default=None, description="Preferred pay structure")
    pay_rate: str | None = Field(default=None, description="Free-text pay rate")
    contact_email: str | None = Field(default=None, description="Contact email address")
    contact_phone: str | None = Field(default=None, description="Contact phone number")
    resume_url: str | None = Field(default=None, description="Link to a resume")
    social_links: list[SocialLink] = Field(default_factory=list, description="Social links in display order")
    avatar_url: str | None = Field(default=None, description="URL to the avatar image")
    is_available: bool = Field(default=True, description="Whether the person is open to work")
    is_public: bool = Field(default=True, description="Whether the card is listed in the directory")


class ProfileCreate(ProfileBase):
    """Schema for creating a profile.

    Server-assigned fields (id, user_id, timestamps) are not accepted.
    """

    model_config = ConfigDict(from_attributes=True)


NON_NULLABLE_FIELDS = frozenset(
    {"display_name", "skills", "hours_frequency", "social_links", "is_available", "is_public"}
)


class ProfileUpdate(BaseModel):
    """Schema for updating a profile.

    All fields are optional for partial updates. Only fields explicitly set
    are applied, so passing None clears a nullable field. Fields a stored
    profile cannot hold as null reject an explicit None.
    """

    model_config = ConfigDict(from_attributes=True)

    display_name: str | None = Field(default=None, min_length=1, description="New display name")
    tagline: str | None = None
    bio: str | None = None
    location: str | None = None
    skills: list[str] | None = None
    hours_available: int | None = None
    hours_frequency: HoursFrequency | None = None
    pay_preference: PayPreference | None = None
    pay_rate: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    resume_url: str | None = None
    social_links: list[SocialLink] | None = None
    avatar_url: str | None = None
    is_available: bool | None = None
    is_public: bool | None = None

    @model_validator(mode="after")
    def reject_null_required_fields(self) -> "ProfileUpdate":
        cleared = sorted(
            name for name in self.model_fields_set if name in NON_NULLABLE_FIELDS and getattr(self, name) is None
        )
        if cleared:
            raise ValueError(f"Fields cannot be cleared: {', '.join(cleared)}")
        return self

    def changes(self) -> dict:
        """Return the explicitly supplied fields in storage form."""
        return self.model_dump(mode="json", exclude_unset=True)


class Profile(ProfileBase):
    """A stored work-card profile."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(description="Profile unique identifier")
    user_id: str | None = Field(default=None, description="Owning auth user ID, None for local/anonymous")
    created_at: datetime = Field(description="Profile creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    def matches(self, query: str) -> bool:
        """Check whether a case-insensitive substring query hits this profile.

        Searches display name, tagline, skills, location and bio.
        """
        needle = query.lower()
        fields = [self.display_name, self.tagline, self.location, self.bio, *self.skills]
        return any(needle in value.lower() for value in fields if value)
