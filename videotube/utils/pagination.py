"""페이지네이션 유틸리티 모듈.

Pagination utility module for SQLAlchemy async queries.
Provides a generic paginate function, sort-order resolution and a Page
response model for consistent pagination across all list endpoints.
"""

import math
from typing import Any, Generic, Literal, Sequence, TypeVar

from pydantic import BaseModel
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from videotube.utils.exceptions import BadRequestError

SortType = Literal["asc", "desc"]
ItemT = TypeVar("ItemT")


class Page(BaseModel, Generic[ItemT]):
    """페이지네이션 결과 모델.

    Pagination result model for typed responses.
    Contains the paginated items and metadata for client-side pagination controls.

    Attributes:
        items: 현재 페이지 항목 목록 (Items for the current page)
        total: 전체 항목 수 (Total count across all pages)
        page: 현재 페이지 번호 (Current page number, 1-based)
        per_page: 페이지당 항목 수 (Items per page)
        pages: 전체 페이지 수 (Total number of pages)
    """

    items: list[ItemT]  # 현재 페이지 항목 목록 (Paginated items)
    total: int  # 전체 항목 수 (Total item count)
    page: int  # 현재 페이지 번호 — 1부터 시작 (Current page, 1-indexed)
    per_page: int  # 페이지당 항목 수 (Items per page)
    pages: int  # 전체 페이지 수 (Total pages, computed: ceil(total/per_page))

    @classmethod
    def build(cls, items: list[Any], total: int, page: int, per_page: int) -> "Page":
        """항목과 개수로 Page를 생성합니다 (Build a page, computing the page count)."""
        return cls(
            items=items,
            total=total,
            page=page,
            per_page=per_page,
            pages=math.ceil(total / per_page) if per_page else 0,
        )


def resolve_sort(
    columns: dict[str, InstrumentedAttribute],
    sort_by: str,
    sort_type: str,
) -> Any:
    """정렬 키와 방향을 ORDER BY 절로 변환합니다.

    Map a client-provided sort key and direction onto a whitelisted column.

    Args:
        columns: 허용된 정렬 키 → 컬럼 매핑 (Allowed sort key to column mapping)
        sort_by: 정렬 키 (Sort key)
        sort_type: "asc" 또는 "desc" (Sort direction)

    Returns:
        ORDER BY 절 표현식 (ORDER BY clause expression)

    Raises:
        BadRequestError: 허용되지 않은 정렬 키 또는 방향 (Unknown key or direction)
    """
    column: InstrumentedAttribute | None = columns.get(sort_by)
    if column is None:
        raise BadRequestError(f"Invalid sort key: {sort_by}")
    if sort_type == "asc":
        return column.asc()
    if sort_type == "desc":
        return column.desc()
    raise BadRequestError(f"Invalid sort direction: {sort_type}")


async def paginate(
    db: AsyncSession,
    query: Select[Any],
    page: int = 1,
    per_page: int = 20,
) -> tuple[Sequence[Any], int]:
    """SQLAlchemy 쿼리에 대한 페이지네이션을 수행합니다.

    Execute a paginated SQLAlchemy query, returning items and total count.
    Runs two queries: one for the total count (via subquery) and one for
    the actual page of results with OFFSET/LIMIT. A page past the end
    yields an empty item list with the real total.

    Args:
        db: 비동기 DB 세션 (Async database session)
        query: SQLAlchemy Select 쿼리 (Base query to paginate)
        page: 요청 페이지 번호, 1부터 시작 (Page number, 1-indexed, default: 1)
        per_page: 페이지당 항목 수 (Items per page, default: 20)

    Returns:
        tuple[Sequence[Any], int]: (항목 목록, 전체 개수) 튜플
            (Tuple of paginated items and total count)

    Raises:
        BadRequestError: page 또는 per_page가 1 미만일 때 (page/per_page below 1)
    """
    if page < 1 or per_page < 1:
        raise BadRequestError("page and per_page must be at least 1")

    # 전체 개수 조회 — 서브쿼리로 감싸서 COUNT 실행 (Count total via subquery)
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total: int = (await db.execute(count_query)).scalar() or 0

    # 페이지 항목 조회 — OFFSET/LIMIT 적용 (Fetch page items with offset/limit)
    offset: int = (page - 1) * per_page
    result = await db.execute(query.offset(offset).limit(per_page))
    items: Sequence[Any] = result.scalars().all()

    return items, total
