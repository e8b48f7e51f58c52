import math
from typing import Callable, TypeVar
from sqlalchemy.orm import Query
from app.schemas.common import PageResponse

T = TypeVar("T")


def paginate(query: Query, page: int, size: int, mapper: Callable[..., T]) -> PageResponse[T]:
    """Slice a query into a zero-based page and map each row to a response."""
    total = query.order_by(None).count()
    rows = query.offset(page * size).limit(size).all()
    total_pages = math.ceil(total / size) if size else 0
    return PageResponse(
        content=[mapper(row) for row in rows],
        number=page,
        size=size,
        totalElements=total,
        totalPages=total_pages,
        first=page == 0,
        last=page >= total_pages - 1,
    )
