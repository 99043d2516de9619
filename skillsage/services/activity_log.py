from typing import Optional

from loguru import logger

from skillsage.schemas.activity import Activity, ActivityCreate, ActivityType
from skillsage.storage.base import Storage


async def log_activity(
    storage: Storage, user_id: Optional[str], activity_type: ActivityType, description: str
) -> Optional[Activity]:
    """Append to a user's activity trail; users without a record are skipped."""
    if not user_id or await storage.get_user(user_id) is None:
        logger.debug(f"Skipping {activity_type.value} activity for unknown user {user_id}")
        return None
    return await storage.create_activity(ActivityCreate(user_id=user_id, type=activity_type, description=description))
