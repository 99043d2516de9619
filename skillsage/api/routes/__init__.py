from fastapi import APIRouter

from skillsage.api.routes import activities, admin, chat, courses, interviews, jobs, recommendations, resume, skills, users

router = APIRouter()

router.include_router(users.router, tags=["users"])
router.include_router(courses.router, prefix="/courses", tags=["courses"])
router.include_router(chat.router, prefix="/chat", tags=["chat"])
router.include_router(skills.router, prefix="/skills", tags=["skills"])
router.include_router(activities.router, prefix="/activities", tags=["activities"])
router.include_router(interviews.router, tags=["interviews"])
router.include_router(recommendations.router, prefix="/recommendations", tags=["recommendations"])
router.include_router(jobs.router, prefix="/jobs", tags=["jobs"])
router.include_router(resume.router, prefix="/resume", tags=["resume"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
