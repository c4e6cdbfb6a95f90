"""
Managing - account-level metadata and the list of account databases
"""
import structlog
from fastapi import APIRouter, Depends

from database import DocumentStore, get_store, require_db, update_payload
from errors import NotFound, missing
from schemas import PROPERTIES, Property, PropertyNameUpdate

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/managing", tags=["managing"])


@router.get("/dbs")
def list_databases(store: DocumentStore = Depends(get_store)):
    return store.list_databases()


@router.get("/name")
def get_name(db: str = Depends(require_db), store: DocumentStore = Depends(get_store)):
    # one property document per database
    doc = store.get_document(db, PROPERTIES)
    if not doc or not doc.get("name"):
        raise NotFound("Property not found")
    return doc["name"]


@router.put("/name")
def update_name(
    payload: PropertyNameUpdate,
    db: str = Depends(require_db),
    store: DocumentStore = Depends(get_store),
):
    """Rename the account. The property document must already exist."""
    if not payload.name:
        raise missing("name")

    doc = store.get_document(db, PROPERTIES)
    if not doc:
        raise NotFound("Property not found")
    result = store.collection(db, PROPERTIES).update_one(
        {"_id": doc["_id"]}, {"$set": Property(name=payload.name).model_dump()}
    )
    logger.info("Account renamed", db=db, name=payload.name)
    return update_payload(result)
