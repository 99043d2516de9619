from skillsage.schemas.base import APIModel
from skillsage.schemas.course import Course


class AdminStats(APIModel):
    total_users: int
    active_users: int
    admin_users: int
    total_courses: int
    recommended_courses: int


class ContentItem(Course):
    type: str = "course"
    is_active: bool = True
