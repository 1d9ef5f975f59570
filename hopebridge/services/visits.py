"""Visitor analytics services."""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping
from datetime import datetime
from datetime import timedelta
from datetime import timezone
import hashlib

from sqlalchemy.orm import Session

from hopebridge.db.models.visit import Visit
from hopebridge.db.repository.visits import count_visits
from hopebridge.db.repository.visits import count_visits_by_path
from hopebridge.db.repository.visits import create_visit
from hopebridge.db.repository.visits import list_recent_visits
from hopebridge.db.repository.visits import list_visits_since
from hopebridge.schemas.visit import DailyCount
from hopebridge.schemas.visit import PathCount
from hopebridge.schemas.visit import RecentVisit
from hopebridge.schemas.visit import VisitPayload
from hopebridge.schemas.visit import VisitSummary


def hash_client_address(value: str | None, secret: str) -> str | None:
    """Return a salted, truncated digest of a client address."""
    if not value or value == "unknown":
        return None
    return hashlib.sha256(f"{value}:{secret}".encode()).hexdigest()[:32]


def clamp_number(raw: str | None, minimum: int, maximum: int, fallback: int) -> int:
    """Parse a query value and clamp it into range; unparsable values fall back."""
    if not raw:
        return fallback
    try:
        parsed = int(float(raw))
    except (ValueError, OverflowError):
        return fallback
    return min(max(parsed, minimum), maximum)


def _client_address(headers: Mapping[str, str]) -> str:
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return headers.get("cf-connecting-ip") or "unknown"


def record_visit_service(
    session: Session,
    payload: VisitPayload,
    headers: Mapping[str, str],
    *,
    hash_secret: str,
) -> Visit:
    """Persist a visit, filling gaps from request headers."""
    referer = headers.get("referer")
    visit = create_visit(
        session,
        path=payload.path or referer or "/",
        locale=payload.locale,
        project_id=payload.project_id,
        referrer=payload.referrer or referer,
        user_agent=headers.get("user-agent"),
        ip_hash=hash_client_address(_client_address(headers), hash_secret),
        country=payload.country or headers.get("x-vercel-ip-country") or headers.get("cf-ipcountry"),
    )
    session.commit()
    return visit


def get_visit_summary_service(
    session: Session,
    *,
    recent_limit: int,
    daily_window: int,
    now: datetime | None = None,
) -> VisitSummary:
    """Summarize visits for the dashboard."""
    current = now or datetime.now(timezone.utc)
    first_day = (current - timedelta(days=daily_window - 1)).date()
    window_start = datetime.combine(first_day, datetime.min.time(), tzinfo=timezone.utc)

    per_day = Counter(visit.visited_at.date() for visit in list_visits_since(session, window_start))
    daily = [
        DailyCount(day=day, count=per_day.get(day, 0))
        for day in (first_day + timedelta(days=offset) for offset in range(daily_window))
    ]

    return VisitSummary(
        total_visits=count_visits(session),
        window_days=daily_window,
        top_paths=[PathCount(path=path, count=count) for path, count in count_visits_by_path(session)],
        daily=daily,
        recent=[RecentVisit.model_validate(visit) for visit in list_recent_visits(session, limit=recent_limit)],
    )
