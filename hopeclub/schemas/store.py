from uuid import UUID

from pydantic import BaseModel, ConfigDict


class RedeemItemRequest(BaseModel):
    student_id: UUID
    item_id: UUID


class RedeemItemResponse(BaseModel):
    redemption_id: UUID


class StoreItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    cost: int
    stock: int
    is_active: bool
