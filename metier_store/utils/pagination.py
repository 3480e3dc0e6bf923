from sqlalchemy import func
from sqlmodel import select

DEFAULT_PER_PAGE = 20


def paginate(*, session, query, page: int = 1, per_page: int = DEFAULT_PER_PAGE):
    """Run ``query`` for one page. Out-of-range page/per_page fall back to defaults."""
    page = max(page, 1)
    if per_page < 1:
        per_page = DEFAULT_PER_PAGE

    total_items = session.exec(select(func.count()).select_from(query.subquery())).one()
    rows = session.exec(query.offset((page - 1) * per_page).limit(per_page)).all()

    return {
        "rows": rows,
        "total_items": total_items,
        "total_pages": max(1, -(-total_items // per_page)),
        "current_page": page,
        "limit": per_page,
    }
