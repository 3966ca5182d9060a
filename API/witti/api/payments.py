"""Payment API: checkout of the member's cart."""
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from witti.core.auth import get_current_user
from witti.core.errors import get_request_id
from witti.core.logging import DOMAIN_PAYMENTS, get_domain_logger
from witti.db.database import get_db
from witti.models.entities import User
from witti.schemas.payment import PaymentCreateRequest, PaymentCreateResponse
from witti.services.enrollment import checkout

router = APIRouter(prefix="/api/payment", tags=["payments"])
logger = get_domain_logger(__name__, DOMAIN_PAYMENTS)

PAYMENT_FAILED_MESSAGE = "Payment could not be recorded. Please try again."


@router.post("/create", response_model=PaymentCreateResponse)
async def create_payment(
    payload: PaymentCreateRequest,
    request: Request,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    user_id = user.id
    class_ids = [item.id for item in payload.items]
    try:
        payment = await checkout(
            db,
            user_id=user_id,
            order_id=payload.order_id,
            amount=payload.amount,
            method=payload.payment_method,
            class_ids=class_ids,
        )
    except Exception as exc:
        logger.exception(
            "Checkout failed and was rolled back | request_id=%s user_id=%s order_id=%s",
            get_request_id(request),
            user_id,
            payload.order_id,
            exc_info=exc,
        )
        raise HTTPException(status_code=500, detail=PAYMENT_FAILED_MESSAGE) from exc

    return PaymentCreateResponse(payment_id=payment.id, order_id=payment.order_id)
