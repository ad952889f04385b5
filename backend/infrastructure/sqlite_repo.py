"""SQL-backed repository implementation (SQLite by default)."""
from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterable, Iterator, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from domain.errors import PersistenceError
from domain.revenue import RevenueRecord, RevenueSource
from .database import Database
from .models import RevenueModel
from .repository import RevenueRepository


class SQLRevenueRepository(RevenueRepository):
    def __init__(self, database: Database):
        self.database = database
        with self._guard("initialise schema"):
            database.init_db()

    # Writes ---------------------------------------------------------------
    def add(self, record: RevenueRecord) -> None:
        with self._session("insert revenue record") as session, session.begin():
            session.add(self._model_from_record(record))

    def update(self, record: RevenueRecord) -> bool:
        with self._session("update revenue record") as session, session.begin():
            model = session.get(RevenueModel, record.record_id)
            if not model:
                return False
            self._populate_model(model, record)
            session.add(model)
            return True

    def delete(self, record_id: str) -> bool:
        with self._session("delete revenue record") as session, session.begin():
            model = session.get(RevenueModel, record_id)
            if not model:
                return False
            session.delete(model)
            return True

    # Reads ----------------------------------------------------------------
    def get(self, record_id: str) -> Optional[RevenueRecord]:
        with self._session("load revenue record") as session:
            model = session.get(RevenueModel, record_id)
            if not model:
                return None
            return self._record_from_model(model)

    def find(
        self,
        *,
        year: Optional[int] = None,
        month: Optional[str] = None,
        sort_field: str = "created_at",
        descending: bool = True,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> List[RevenueRecord]:
        columns = [getattr(RevenueModel, sort_field)]
        # ties fall back to creation order, then id, so pages never overlap
        if sort_field != "created_at":
            columns.append(RevenueModel.created_at)
        columns.append(RevenueModel.record_id)
        statement = self._filtered(select(RevenueModel), year, month)
        statement = statement.order_by(
            *(column.desc() if descending else column.asc() for column in columns)
        ).offset(offset)
        if limit is not None:
            statement = statement.limit(limit)
        with self._session("query revenue records") as session:
            return [self._record_from_model(model) for model in session.exec(statement).all()]

    def count(self, *, year: Optional[int] = None, month: Optional[str] = None) -> int:
        statement = self._filtered(select(func.count()).select_from(RevenueModel), year, month)
        with self._session("count revenue records") as session:
            return int(session.exec(statement).one())

    def list_records(self, year: Optional[int] = None) -> Iterable[RevenueRecord]:
        statement = self._filtered(select(RevenueModel), year, None)
        with self._session("list revenue records") as session:
            return [self._record_from_model(model) for model in session.exec(statement).all()]

    def ping(self) -> None:
        with self._guard("ping database"):
            self.database.ping()

    # Helpers --------------------------------------------------------------
    @contextmanager
    def _guard(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to {action}: {exc}") from exc

    @contextmanager
    def _session(self, action: str) -> Iterator[Session]:
        with self._guard(action), self.database.session() as session:
            yield session

    @staticmethod
    def _filtered(statement, year: Optional[int], month: Optional[str]):
        if year is not None:
            statement = statement.where(RevenueModel.year == year)
        if month is not None:
            statement = statement.where(RevenueModel.month == month)
        return statement

    def _model_from_record(self, record: RevenueRecord) -> RevenueModel:
        model = RevenueModel(record_id=record.record_id, created_at=record.created_at)
        self._populate_model(model, record)
        return model

    def _populate_model(self, model: RevenueModel, record: RevenueRecord) -> None:
        model.month = record.month
        model.year = record.year
        model.revenue = record.revenue
        model.source = record.source.value
        model.description = record.description
        model.updated_at = record.updated_at

    def _record_from_model(self, model: RevenueModel) -> RevenueRecord:
        return RevenueRecord(
            record_id=model.record_id,
            month=model.month,
            year=model.year,
            revenue=model.revenue,
            source=RevenueSource(model.source),
            description=model.description,
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite drops tzinfo; stored values are always UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
