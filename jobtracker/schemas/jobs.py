"""
Job posting Pydantic schemas.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

JobStatus = Literal["Applied", "Interview", "Rejected", "Hired", "Open"]
ApplicationStatus = Literal[
    "Not Applied", "Applied", "Interview Scheduled", "Offer Received", "Rejected"
]


class JobCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    company: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    status: JobStatus = "Open"
    applicationStatus: ApplicationStatus = "Not Applied"


class JobUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    company: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, min_length=1)
    status: Optional[JobStatus] = None
    applicationStatus: Optional[ApplicationStatus] = None


class JobOut(BaseModel):
    id: str
    title: str
    description: str
    company: str
    location: str
    status: JobStatus
    applicationStatus: ApplicationStatus
    createdBy: str
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


__all__ = ["JobStatus", "ApplicationStatus", "JobCreate", "JobUpdate", "JobOut"]
