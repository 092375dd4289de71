"""SQLAlchemy lookups over the shared destination/cooperation tables.

The tables are owned by the CRUD modules; only the columns used for search
and rendering are mapped here.
"""

import logging

from sqlalchemy import Select, String, Text, func, or_, select, true
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from travelbot.storage.base import (
    CooperationLookup,
    CooperationRecord,
    DestinationLookup,
    DestinationRecord,
)

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


class Base(DeclarativeBase):
    pass


class Destination(Base):
    __tablename__ = "destination"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String)
    province: Mapped[str | None] = mapped_column(String, nullable=True)
    specific_address: Mapped[str | None] = mapped_column("specificAddress", String, nullable=True)
    description_viet: Mapped[str | None] = mapped_column("descriptionViet", Text, nullable=True)
    description_eng: Mapped[str | None] = mapped_column("descriptionEng", Text, nullable=True)
    favourite_times: Mapped[int] = mapped_column("favouriteTimes", default=0)


class Cooperation(Base):
    __tablename__ = "cooperations"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String)
    type: Mapped[str] = mapped_column(String, default="hotel")
    address: Mapped[str | None] = mapped_column(String, nullable=True)
    district: Mapped[str | None] = mapped_column(String, nullable=True)
    city: Mapped[str | None] = mapped_column(String, nullable=True)
    province: Mapped[str | None] = mapped_column(String, nullable=True)
    introduction: Mapped[str | None] = mapped_column(Text, nullable=True)
    extension: Mapped[str | None] = mapped_column(String, nullable=True)
    booking_times: Mapped[int] = mapped_column("bookingTimes", default=0)
    active: Mapped[bool] = mapped_column(default=True)


def like_pattern(term: str) -> str:
    """Build a ``%term%`` pattern with LIKE wildcards in ``term`` escaped."""
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )
    return f"%{escaped}%"


def _ilike_any(columns, pattern: str):
    return or_(*(func.coalesce(column, "").ilike(pattern, escape=LIKE_ESCAPE) for column in columns))


def destination_search_statement(terms: list[str], limit: int) -> Select:
    """Select destinations matching any term, most favourited first."""
    stmt = select(Destination)
    if terms:
        columns = (
            Destination.name,
            Destination.province,
            Destination.description_viet,
            Destination.description_eng,
        )
        stmt = stmt.where(or_(*(_ilike_any(columns, like_pattern(term)) for term in terms)))
    return stmt.order_by(Destination.favourite_times.desc()).limit(limit)


def cooperation_search_statement(category: str, terms: list[str], limit: int) -> Select:
    """Select active cooperations of a category matching any term, most booked first."""
    stmt = select(Cooperation).where(
        Cooperation.type == category,
        Cooperation.active.is_(true()),
    )
    if terms:
        columns = (
            Cooperation.name,
            Cooperation.city,
            Cooperation.province,
            Cooperation.introduction,
        )
        stmt = stmt.where(or_(*(_ilike_any(columns, like_pattern(term)) for term in terms)))
    return stmt.order_by(Cooperation.booking_times.desc()).limit(limit)


def _destination_record(row: Destination) -> DestinationRecord:
    return DestinationRecord(
        id=row.id,
        name=row.name,
        province=row.province,
        specific_address=row.specific_address,
        description_vi=row.description_viet,
        description_en=row.description_eng,
        favourite_times=row.favourite_times or 0,
    )


def _cooperation_record(row: Cooperation) -> CooperationRecord:
    return CooperationRecord(
        id=row.id,
        name=row.name,
        type=row.type,
        address=row.address,
        district=row.district,
        city=row.city,
        province=row.province,
        introduction=row.introduction,
        extension=row.extension,
        booking_times=row.booking_times or 0,
        active=bool(row.active),
    )


class SqlDestinationLookup(DestinationLookup):
    """Destination lookup backed by the ``destination`` table."""

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def search(self, terms: list[str], limit: int) -> list[DestinationRecord]:
        async with self.session_factory() as session:
            rows = await session.scalars(destination_search_statement(terms, limit))
            records = [_destination_record(row) for row in rows]
        logger.debug(f"Destination search {terms} returned {len(records)} rows")
        return records


class SqlCooperationLookup(CooperationLookup):
    """Cooperation lookup backed by the ``cooperations`` table."""

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def search(self, category: str, terms: list[str], limit: int) -> list[CooperationRecord]:
        async with self.session_factory() as session:
            rows = await session.scalars(cooperation_search_statement(category, terms, limit))
            records = [_cooperation_record(row) for row in rows]
        logger.debug(f"Cooperation search {category} {terms} returned {len(records)} rows")
        return records


def create_session_factory(database_url: str) -> tuple[AsyncEngine, async_sessionmaker]:
    """Create the async engine and a session factory for ``database_url``."""
    engine = create_async_engine(database_url, pool_pre_ping=True)
    return engine, async_sessionmaker(engine, expire_on_commit=False)
