from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field

from skillsage.schemas.base import APIModel


class Difficulty(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class CourseBase(APIModel):
    title: str = Field(..., min_length=1)
    description: str
    image_url: Optional[str] = None
    difficulty: Difficulty
    duration: str
    # Stored x10, e.g. 48 == 4.8 stars
    rating: int = Field(0, ge=0, le=50)
    category: str
    is_recommended: bool = False
    price: str = "Free"


class CourseCreate(CourseBase):
    pass


class CourseUpdate(APIModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    image_url: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    duration: Optional[str] = None
    rating: Optional[int] = Field(None, ge=0, le=50)
    category: Optional[str] = None
    is_recommended: Optional[bool] = None
    price: Optional[str] = None

    def changes(self) -> Dict[str, Any]:
        return {k: v for k, v in self.model_dump(exclude_unset=True).items() if v is not None or k == "image_url"}


class Course(CourseBase):
    id: str


class CourseSearchHit(Course):
    coursera_url: str
    is_paid: bool
    pricing_info: str


class CourseSearchResult(APIModel):
    course: Course
    coursera_url: str
    is_paid: bool
    pricing_info: str


class CourseSearchResults(APIModel):
    courses: List[CourseSearchHit]
    count: int
    search_term: str


class RecommendationRequest(APIModel):
    skills: List[str] = []
    interests: List[str] = []


class RecommendationResponse(APIModel):
    recommendations: List[str]
