"""
Review repository. Reviews are written here and read back only in aggregate.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.base import BaseRepository
from app.models.review import PropertyReview
from app.schemas.review import ReviewCreate, ReviewRecord
import logging

logger = logging.getLogger(__name__)


class ReviewRepository(BaseRepository[PropertyReview]):

    def __init__(self, db: AsyncSession):
        super().__init__(PropertyReview, db)

    async def create_review(self, review_data: ReviewCreate) -> ReviewRecord:
        """Create a review and return the persisted row."""
        review = await self.create(review_data.model_dump())
        logger.info(f"Created review {review.id} for property {review.property_id} (rating {review.rating})")
        return ReviewRecord.model_validate(review)
