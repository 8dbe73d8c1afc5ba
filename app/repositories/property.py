"""
Property repository for listing inserts and filtered search.
Search statements are assembled by QueryBuilder with ordinal placeholders.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.base import BaseRepository
from app.repositories.query_builder import CompiledQuery, QueryBuilder
from app.models.property import Property
from app.schemas.property import PropertyCreate, PropertyRecord, PropertySearchFilters
from app.utils.currency import to_minor_units
from decimal import ROUND_CEILING, ROUND_FLOOR
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10

LIKE_ESCAPE = "\\"


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so the value matches literally."""
    for char in (LIKE_ESCAPE, "%", "_"):
        value = value.replace(char, LIKE_ESCAPE + char)
    return value


PROPERTY_SEARCH_BASE = """
SELECT properties.*, avg(property_reviews.rating) AS average_rating
FROM properties
JOIN property_reviews ON properties.id = property_reviews.property_id
"""


def build_property_search(
    filters: Optional[PropertySearchFilters] = None,
    limit: int = DEFAULT_LIMIT
) -> CompiledQuery:
    """
    Build the filtered property search statement.

    Row-level filters are applied in the order city, owner_id, minimum price,
    maximum price, then the rows are grouped per property, the minimum rating
    is checked against the group average, and the cheapest `limit` rows are
    kept. Parameters are bound in that same order with the limit last.

    Args:
        filters: Search criteria; a criterion applies when it is not None
        limit: Maximum number of properties to return

    Returns:
        Compiled statement and its ordered parameters
    """
    filters = filters or PropertySearchFilters()
    query = QueryBuilder(PROPERTY_SEARCH_BASE)

    if filters.city is not None:
        query.where(
            f"lower(properties.city) LIKE lower({{}}) ESCAPE '{LIKE_ESCAPE}'",
            f"%{escape_like(filters.city)}%"
        )

    if filters.owner_id is not None:
        query.where("properties.owner_id = {}", filters.owner_id)

    # Prices arrive in major units; cost_per_night is stored in minor units.
    # Fractional cents round inward so the bounds never widen.
    if filters.minimum_price_per_night is not None:
        minimum = to_minor_units(filters.minimum_price_per_night, rounding=ROUND_CEILING)
        query.where("properties.cost_per_night >= {}", minimum)

    if filters.maximum_price_per_night is not None:
        maximum = to_minor_units(filters.maximum_price_per_night, rounding=ROUND_FLOOR)
        query.where("properties.cost_per_night <= {}", maximum)

    query.group_by("properties.id")

    if filters.minimum_rating is not None:
        query.having("avg(property_reviews.rating) >= {}", filters.minimum_rating)

    query.order_by("properties.cost_per_night")
    query.limit(limit)

    return query.build()


class PropertyRepository(BaseRepository[Property]):
    """
    Repository for property listings.
    Search results carry each property's average review rating.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)

    async def create_property(self, property_data: PropertyCreate) -> PropertyRecord:
        """
        Create a new property.

        Args:
            property_data: Validated property fields, price in major units

        Returns:
            The persisted property; average_rating is None as it has no reviews yet

        Raises:
            RepositoryError: If the insert fails, e.g. the owner does not exist
        """
        property_obj = await self.create(property_data.to_row())
        logger.info(f"Created property: {property_obj.title} (ID: {property_obj.id})")
        return PropertyRecord.model_validate(property_obj)

    async def search_properties(
        self,
        filters: Optional[PropertySearchFilters] = None,
        limit: int = DEFAULT_LIMIT
    ) -> List[PropertyRecord]:
        """
        Search reviewed properties, cheapest first.

        Args:
            filters: Search criteria
            limit: Maximum number of properties to return

        Returns:
            Matching properties with average_rating, possibly empty

        Raises:
            RepositoryError: If the query fails
        """
        compiled = build_property_search(filters, limit)
        logger.debug(f"Property search: {compiled.sql} {list(compiled.params)}")

        result = await self.execute("search properties", compiled.to_statement())
        properties = [PropertyRecord.model_validate(dict(row)) for row in result.mappings().all()]

        logger.debug(f"Property search returned {len(properties)} results")
        return properties
