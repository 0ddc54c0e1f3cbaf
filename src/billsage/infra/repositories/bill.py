"""SQLModel implementation of Bill repository."""

from __future__ import annotations

from datetime import date
from typing import Optional

from sqlmodel import select

from ...models.bill import Bill, BillStatus
from ..database import SessionFactory


class SQLModelBillRepository:
    """SQLModel-based bill repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, bill_id: int, *, user_id: int) -> Optional[Bill]:
        """Retrieve a bill by ID."""
        with self.session_factory() as session:
            obj = session.exec(
                select(Bill).where(Bill.id == bill_id).where(Bill.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_between(self, start: date, end: date, *, user_id: int) -> list[Bill]:
        """List bills dated within [start, end], ordered by date."""
        with self.session_factory() as session:
            statement = (
                select(Bill)
                .where(Bill.user_id == user_id)
                .where(Bill.due_date >= start)
                .where(Bill.due_date <= end)
                .order_by(Bill.due_date, Bill.id)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_for_day(self, day: date, *, user_id: int) -> list[Bill]:
        """List the bills on a single calendar day."""
        return self.list_between(day, day, user_id=user_id)

    def list_upcoming(self, since: date, *, user_id: int, limit: int) -> list[Bill]:
        """List up to ``limit`` bills dated on or after ``since``."""
        with self.session_factory() as session:
            statement = (
                select(Bill)
                .where(Bill.user_id == user_id)
                .where(Bill.due_date >= since)
                .order_by(Bill.due_date, Bill.id)  # type: ignore
                .limit(limit)
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_unpaid_between(self, start: date, end: date, *, user_id: int) -> list[Bill]:
        """List bills within [start, end] whose status is not paid."""
        with self.session_factory() as session:
            statement = (
                select(Bill)
                .where(Bill.user_id == user_id)
                .where(Bill.due_date >= start)
                .where(Bill.due_date <= end)
                .where(Bill.status != BillStatus.PAID.value)
                .order_by(Bill.due_date, Bill.id)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, bill: Bill, *, user_id: int) -> Bill:
        """Create a new bill."""
        with self.session_factory() as session:
            bill.user_id = user_id
            session.add(bill)
            session.commit()
            session.refresh(bill)
            session.expunge(bill)
            return bill

    def update(self, bill: Bill, *, user_id: int) -> Bill:
        """Update an existing bill."""
        with self.session_factory() as session:
            bill.user_id = user_id
            merged = session.merge(bill)
            session.commit()
            session.refresh(merged)
            session.expunge(merged)
            return merged

    def delete(self, bill_id: int, *, user_id: int) -> bool:
        """Delete a bill by ID."""
        with self.session_factory() as session:
            bill = session.exec(
                select(Bill).where(Bill.id == bill_id).where(Bill.user_id == user_id)
            ).first()
            if bill is None:
                return False
            session.delete(bill)
            session.commit()
            return True
