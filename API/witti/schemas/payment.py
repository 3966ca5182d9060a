from pydantic import BaseModel, ConfigDict, Field


class CheckoutItem(BaseModel):
    # Cart items carry display fields (title, price, ...); only the class id is persisted.
    model_config = ConfigDict(extra="allow")

    id: int


class PaymentCreateRequest(BaseModel):
    order_id: str = Field(min_length=1, max_length=128)
    amount: int = Field(ge=0)
    payment_method: str = Field(min_length=1, max_length=32)
    items: list[CheckoutItem] = Field(default_factory=list)


class PaymentCreateResponse(BaseModel):
    success: bool = True
    payment_id: int
    order_id: str
