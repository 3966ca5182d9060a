"""Checkout write path and the member's enrollment/payment views.

``checkout`` is the only code that creates payment and enrollment rows. The
payment and all of its enrollments are written in one transaction: either the
payment exists with exactly the submitted classes, or nothing was written.
"""
from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from witti.core.logging import DOMAIN_PAYMENTS, get_domain_logger
from witti.db.database import with_transaction
from witti.models.entities import ClassOffering, Enrollment, Payment, utcnow

logger = get_domain_logger(__name__, DOMAIN_PAYMENTS)

PAYMENT_STATUS_COMPLETED = "completed"
ENROLLMENT_STATUS_ENROLLED = "enrolled"


async def checkout(
    session: AsyncSession,
    *,
    user_id: int,
    order_id: str,
    amount: int,
    method: str,
    class_ids: Sequence[int],
) -> Payment:
    async def _write(db: AsyncSession) -> Payment:
        now = utcnow()
        payment = Payment(
            user_id=user_id,
            order_id=order_id,
            amount=amount,
            payment_method=method,
            payment_status=PAYMENT_STATUS_COMPLETED,
            paid_at=now,
            created_at=now,
        )
        db.add(payment)
        await db.flush()

        for class_id in class_ids:
            db.add(
                Enrollment(
                    user_id=user_id,
                    class_id=class_id,
                    payment_id=payment.id,
                    status=ENROLLMENT_STATUS_ENROLLED,
                    enrolled_at=now,
                )
            )
        await db.flush()
        return payment

    payment = await with_transaction(session, _write)
    logger.info(
        "Checkout recorded: payment_id=%s order_id=%s user_id=%s classes=%s amount=%s",
        payment.id,
        order_id,
        user_id,
        len(class_ids),
        amount,
    )
    return payment


def _iso(value):
    return value.isoformat() if value else None


def _class_summary(c: ClassOffering) -> dict:
    return {
        "id": c.id,
        "title": c.title,
        "instructor_name": c.instructor_name,
        "thumbnail_icon": c.thumbnail_icon,
    }


async def list_enrollments(session: AsyncSession, user_id: int) -> list[dict]:
    stmt = (
        select(Enrollment, ClassOffering)
        .join(ClassOffering, ClassOffering.id == Enrollment.class_id)
        .where(Enrollment.user_id == user_id)
        .order_by(desc(Enrollment.enrolled_at), desc(Enrollment.id))
    )
    rows = (await session.execute(stmt)).all()
    return [
        {
            "id": e.id,
            "class_id": e.class_id,
            "payment_id": e.payment_id,
            "status": e.status,
            "enrolled_at": _iso(e.enrolled_at),
            "completed_at": _iso(e.completed_at),
            "title": c.title,
            "description": c.description,
            "instructor_name": c.instructor_name,
            "instructor_role": c.instructor_role,
            "duration": c.duration,
            "thumbnail_icon": c.thumbnail_icon,
        }
        for e, c in rows
    ]


async def list_payments(session: AsyncSession, user_id: int) -> list[dict]:
    payments = (
        await session.scalars(
            select(Payment)
            .where(Payment.user_id == user_id)
            .order_by(desc(Payment.created_at), desc(Payment.id))
        )
    ).all()
    if not payments:
        return []

    # One join for every payment's classes instead of a query per payment.
    class_rows = (
        await session.execute(
            select(Enrollment.payment_id, ClassOffering)
            .join(ClassOffering, ClassOffering.id == Enrollment.class_id)
            .where(Enrollment.payment_id.in_([p.id for p in payments]))
            .order_by(Enrollment.id)
        )
    ).all()
    classes_by_payment: dict[int, list[dict]] = {}
    for payment_id, c in class_rows:
        classes_by_payment.setdefault(payment_id, []).append(_class_summary(c))

    return [
        {
            "id": p.id,
            "order_id": p.order_id,
            "amount": p.amount,
            "payment_method": p.payment_method,
            "payment_status": p.payment_status,
            "paid_at": _iso(p.paid_at),
            "created_at": _iso(p.created_at),
            "classes": classes_by_payment.get(p.id, []),
        }
        for p in payments
    ]
