"""Job listing Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class JobCreate(BaseModel):
    """Schema for posting a job."""

    model_config = ConfigDict(from_attributes=True)

    company_name: str = Field(min_length=1, description="Hiring company")
    job_title: str = Field(min_length=1, description="Role title")
    contact_email: str = Field(min_length=1, description="Where applications are sent")
    description: str | None = Field(default=None, description="Job description")
    skills_needed: list[str] = Field(default_factory=list, description="Required skills in display order")
    pay_range: str | None = Field(default=None, description="Free-text pay range")
    location: str | None = Field(default=None, description="Job location")
    is_active: bool = Field(default=True, description="Whether the listing is open")


class Job(JobCreate):
    """A stored job listing."""

    id: str = Field(description="Job unique identifier")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")
