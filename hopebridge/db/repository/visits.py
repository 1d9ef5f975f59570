"""Repository primitives for visitor analytics."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import func
from sqlalchemy import select
from sqlalchemy.orm import Session

from hopebridge.db.models.visit import Visit


def create_visit(
    session: Session,
    *,
    path: str,
    locale: str | None,
    project_id: str | None,
    referrer: str | None,
    user_agent: str | None,
    ip_hash: str | None,
    country: str | None,
) -> Visit:
    """Persist one page visit."""
    visit = Visit(
        path=path,
        locale=locale,
        project_id=project_id,
        referrer=referrer,
        user_agent=user_agent,
        ip_hash=ip_hash,
        country=country,
    )
    session.add(visit)
    session.flush()
    return visit


def count_visits(session: Session) -> int:
    """Count every recorded visit."""
    return session.scalar(select(func.count()).select_from(Visit)) or 0


def list_recent_visits(session: Session, *, limit: int) -> list[Visit]:
    """Return the newest visits first."""
    stmt = select(Visit).order_by(Visit.visited_at.desc()).limit(limit)
    return list(session.scalars(stmt))


def list_visits_since(session: Session, since: datetime) -> list[Visit]:
    """Return visits recorded at or after ``since``."""
    stmt = select(Visit).where(Visit.visited_at >= since).order_by(Visit.visited_at.asc())
    return list(session.scalars(stmt))


def count_visits_by_path(session: Session, *, limit: int = 10) -> list[tuple[str, int]]:
    """Return the most visited paths with their counts."""
    total = func.count(Visit.id)
    stmt = select(Visit.path, total).group_by(Visit.path).order_by(total.desc(), Visit.path.asc()).limit(limit)
    return [(path, count) for path, count in session.execute(stmt)]
