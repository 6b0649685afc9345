from datetime import datetime

from pydantic import BaseModel, Field


class ReviewCreate(BaseModel):
    content: str = Field(min_length=1)
    rating: int = Field(ge=1, le=5)
    userId: str | None = None
    userName: str | None = None


class Review(ReviewCreate):
    id: int
    createdAt: datetime
