"""Record schemas for profiles, jobs and auth identities."""

from network20.schemas.auth import Anonymous, Authenticated, AuthUser, CurrentUser, LocalPointer
from network20.schemas.common import ReadResult
from network20.schemas.job import Job, JobCreate
from network20.schemas.profile import (
    HoursFrequency,
    PayPreference,
    Profile,
    ProfileCreate,
    ProfileUpdate,
    SocialLink,
    SocialPlatform,
)

__all__ = [
    "Anonymous",
    "AuthUser",
    "Authenticated",
    "CurrentUser",
    "HoursFrequency",
    "Job",
    "JobCreate",
    "LocalPointer",
    "PayPreference",
    "Profile",
    "ProfileCreate",
    "ProfileUpdate",
    "ReadResult",
    "SocialLink",
    "SocialPlatform",
]
