"""
Spendings - income and expense entries of one account
"""
from datetime import datetime
from typing import Optional

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from database import DocumentStore, get_store, require_db, serialize, insert_payload, update_payload, delete_payload
from errors import InvalidArgument, NotFound, missing
from schemas import SPENDINGS, Spending, SpendingCreate, SpendingUpdate, SpendingRef

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/spendings", tags=["spendings"])


@router.get("")
def list_spendings(db: str = Depends(require_db), store: DocumentStore = Depends(get_store)):
    store.ensure_collection(db, SPENDINGS)
    return serialize(store.get_documents(db, SPENDINGS))


@router.post("")
def add_spending(
    payload: SpendingCreate,
    db: str = Depends(require_db),
    store: DocumentStore = Depends(get_store),
):
    store.ensure_collection(db, SPENDINGS)
    spending = Spending(spendingId=store.next_id(db, SPENDINGS, "spendingId"), **payload.model_dump())
    result = store.create_document(db, SPENDINGS, spending.to_document())
    logger.info("Spending created", db=db, spending_id=spending.spendingId)
    return insert_payload(result)


@router.put("")
def update_spending(
    payload: SpendingUpdate,
    db: str = Depends(require_db),
    store: DocumentStore = Depends(get_store),
):
    fields = payload.patch()
    if not fields:
        raise InvalidArgument("No fields provided for update")

    store.ensure_collection(db, SPENDINGS)
    result = store.collection(db, SPENDINGS).update_one(
        {"spendingId": payload.spendingId}, {"$set": fields}
    )
    if result.matched_count == 0:
        raise NotFound("Spending not found")
    if result.modified_count == 0:
        return PlainTextResponse("No changes made to spending")

    logger.info("Spending updated", db=db, spending_id=payload.spendingId, fields=sorted(fields))
    return update_payload(result)


@router.delete("")
def delete_spending(
    payload: SpendingRef,
    db: str = Depends(require_db),
    store: DocumentStore = Depends(get_store),
):
    store.ensure_collection(db, SPENDINGS)
    result = store.collection(db, SPENDINGS).delete_one({"spendingId": payload.spendingId})
    if result.deleted_count == 0:
        raise NotFound("Spending not found")
    logger.info("Spending deleted", db=db, spending_id=payload.spendingId)
    return delete_payload(result)


@router.get("/by-date")
def spendings_by_date(
    startDate: Optional[str] = None,
    endDate: Optional[str] = None,
    db: str = Depends(require_db),
    store: DocumentStore = Depends(get_store),
):
    """Spendings whose dateOfSpending lies in [startDate, endDate]"""
    if not startDate:
        raise missing("startDate")
    if not endDate:
        raise missing("endDate")

    store.ensure_collection(db, SPENDINGS)
    # unparseable dates surface as a 500 from the edge handler
    window = {"$gte": datetime.fromisoformat(startDate), "$lte": datetime.fromisoformat(endDate)}
    return serialize(store.get_documents(db, SPENDINGS, {"dateOfSpending": window}))
