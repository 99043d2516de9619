from sqlalchemy import Boolean, Column, Integer, String, Text

from skillsage.models.base import Base


class Course(Base):
    __tablename__ = "courses"

    id = Column(String, primary_key=True)
    title = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False)
    image_url = Column(String, nullable=True)
    difficulty = Column(String(20), nullable=False)  # Beginner, Intermediate, Advanced
    duration = Column(String(50), nullable=False)
    rating = Column(Integer, nullable=False, default=0)  # x10
    category = Column(String(100), nullable=False)
    is_recommended = Column(Boolean, nullable=False, default=False)
    price = Column(String(50), nullable=False, default="Free")
