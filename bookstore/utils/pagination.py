from sqlalchemy import func
from sqlmodel import select


def normalize_page(page: int, limit: int, default_limit: int = 10):
    if page is None or page < 1:
        page = 1

    if limit is None or limit < 1:
        limit = default_limit

    return page, limit


def build_pagination(*, total: int, page: int, limit: int):
    total_pages = (total + limit - 1) // limit
    return {
        "current_page": page,
        "total_pages": total_pages,
        "total_items": total,
        "limit": limit,
        "has_next": page < total_pages,
        "has_prev": page > 1,
    }


def paginate(
    *,
    session,
    query,
    page: int = 1,
    limit: int = 10,
):
    page, limit = normalize_page(page, limit)

    offset = (page - 1) * limit

    total = session.exec(
        select(func.count()).select_from(query.subquery())
    ).one()

    results = session.exec(
        query.offset(offset).limit(limit)
    ).all()

    return {
        "results": results,
        "pagination": build_pagination(total=total, page=page, limit=limit),
    }
