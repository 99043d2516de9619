from typing import List

from loguru import logger

from skillsage.schemas.course import CourseCreate, Difficulty
from skillsage.storage.base import Storage

SAMPLE_COURSES: List[CourseCreate] = [
    CourseCreate(
        title="Deep Learning Fundamentals",
        description="Master neural networks and deep learning with hands-on projects.",
        image_url="https://images.unsplash.com/photo-1555949963-aa79dcee981c?auto=format&fit=crop&w=400&h=200",
        difficulty=Difficulty.BEGINNER,
        duration="12 weeks",
        rating=48,
        category="AI/ML",
        is_recommended=True,
    ),
    CourseCreate(
        title="Advanced Python for Data Science",
        description="Learn advanced Python techniques for data analysis and visualization.",
        image_url="https://images.unsplash.com/photo-1551288049-bebda4e38f71?auto=format&fit=crop&w=400&h=200",
        difficulty=Difficulty.INTERMEDIATE,
        duration="8 weeks",
        rating=49,
        category="Data Science",
    ),
    CourseCreate(
        title="Full-Stack Web Development with React",
        description="Build production web apps with React, Node.js and PostgreSQL.",
        difficulty=Difficulty.INTERMEDIATE,
        duration="10 weeks",
        rating=47,
        category="Web Development",
        price="$49.00",
    ),
    CourseCreate(
        title="Cloud Architecture on AWS",
        description="Design resilient, cost-aware systems with core AWS services.",
        difficulty=Difficulty.ADVANCED,
        duration="6 weeks",
        rating=46,
        category="Cloud Computing",
        price="$79.00",
    ),
    CourseCreate(
        title="Communication Skills for Engineers",
        description="Present ideas clearly, write better docs and run effective meetings.",
        difficulty=Difficulty.BEGINNER,
        duration="4 weeks",
        rating=45,
        category="Soft Skills",
        is_recommended=True,
    ),
]


async def seed_courses(storage: Storage) -> int:
    """Insert the sample catalog into an empty store. Returns the number of courses added."""
    if await storage.get_courses():
        return 0
    for course in SAMPLE_COURSES:
        await storage.create_course(course)
    logger.info(f"Seeded {len(SAMPLE_COURSES)} sample courses into {storage.name} storage")
    return len(SAMPLE_COURSES)
