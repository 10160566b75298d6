from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from hopeclub.dependencies import get_db, require_capability
from hopeclub.policy import Identity, Operation
from hopeclub.schemas.store import RedeemItemRequest, RedeemItemResponse, StoreItemOut
from hopeclub.services import list_catalog, redeem_item

router = APIRouter(tags=["store"])


@router.get("/store/items", response_model=list[StoreItemOut])
def catalog(
    identity: Identity = Depends(require_capability(Operation.VIEW_CATALOG)),
    session: Session = Depends(get_db),
):
    return list_catalog(session)


@router.post("/rpc/redeem_item", response_model=RedeemItemResponse, status_code=status.HTTP_201_CREATED)
def redeem_item_action(
    payload: RedeemItemRequest,
    identity: Identity = Depends(require_capability(Operation.REDEEM_ITEM)),
    session: Session = Depends(get_db),
):
    redemption_id = redeem_item(session, payload.student_id, payload.item_id, identity.actor_id)
    return RedeemItemResponse(redemption_id=redemption_id)
