from typing import List, Optional

from pydantic import Field

from skillsage.schemas.base import APIModel


class JobSearchRequest(APIModel):
    query: str = Field(..., min_length=1)
    location: Optional[str] = None


class JobListing(APIModel):
    id: str
    title: str
    company: str
    location: str
    type: str = "Full-time"
    salary: str = ""
    description: str = ""
    requirements: List[str] = []
    posted_date: str = "Recently"
    apply_url: str = ""


class JobSearchResponse(APIModel):
    jobs: List[JobListing]
    query: str
    location: str
