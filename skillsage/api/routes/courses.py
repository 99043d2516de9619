from typing import Any, List
from urllib.parse import quote

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from skillsage.api.deps import get_storage
from skillsage.schemas.course import Course, CourseSearchHit, CourseSearchResult, CourseSearchResults
from skillsage.storage.base import Storage

router = APIRouter()

FREE_PRICES = ("", "free", "$0.00", "$0")


def coursera_url(term: str) -> str:
    return f"https://www.coursera.org/search?query={quote(term, safe='')}"


def is_paid(course: Course) -> bool:
    return (course.price or "").strip().lower() not in FREE_PRICES


def pricing_info(course: Course) -> str:
    return f"This course costs {course.price}" if is_paid(course) else "This course is free"


@router.get("", response_model=List[Course])
async def read_courses(storage: Storage = Depends(get_storage)) -> Any:
    return await storage.get_courses()


@router.get("/recommended/{user_id}", response_model=List[Course])
async def read_recommended_courses(user_id: str, storage: Storage = Depends(get_storage)) -> Any:
    return await storage.get_recommended_courses(user_id)


@router.get("/search/{course_name}", response_model=CourseSearchResult)
async def search_course(course_name: str, storage: Storage = Depends(get_storage)) -> Any:
    """Best catalog match for a title, or a Coursera search link when there is none."""
    course = await storage.search_course_by_name(course_name)
    if not course:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={
                "message": "Course not found in our database",
                "courseraUrl": coursera_url(course_name),
                "isPaid": True,
                "pricingInfo": "Pricing information available on Coursera",
            },
        )
    return CourseSearchResult(
        course=course,
        coursera_url=coursera_url(course.title),
        is_paid=is_paid(course),
        pricing_info=pricing_info(course),
    )


@router.get("/search-multiple/{search_term}", response_model=CourseSearchResults)
async def search_courses(search_term: str, storage: Storage = Depends(get_storage)) -> Any:
    courses = await storage.search_courses(search_term)
    hits = [
        CourseSearchHit(
            **course.model_dump(),
            coursera_url=coursera_url(course.title),
            is_paid=is_paid(course),
            pricing_info=pricing_info(course),
        )
        for course in courses
    ]
    return CourseSearchResults(courses=hits, count=len(hits), search_term=search_term)
