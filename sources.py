"""
Sources - where money is kept or paid from (bank accounts, wallets, cards, cash)
"""
from typing import Optional

import structlog
from fastapi import APIRouter, Depends

from database import DocumentStore, get_store, require_db, serialize, insert_payload, update_payload, delete_payload
from errors import InvalidArgument, NotFound, missing
from schemas import SOURCES, SOURCE_TYPES, Source, SourceCreate, SourceUpdate, SourceToggle, SourceRef, utcnow

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/sources", tags=["sources"])


def check_type(value: str) -> str:
    if value not in SOURCE_TYPES:
        raise InvalidArgument("Invalid type parameter. Must be one of: " + ", ".join(SOURCE_TYPES))
    return value


@router.get("")
def list_sources(db: str = Depends(require_db), store: DocumentStore = Depends(get_store)):
    store.ensure_collection(db, SOURCES)
    return serialize(store.get_documents(db, SOURCES))


@router.post("")
def add_source(
    payload: SourceCreate,
    db: str = Depends(require_db),
    store: DocumentStore = Depends(get_store),
):
    if not payload.name:
        raise missing("name")
    if not payload.type:
        raise missing("type")
    check_type(payload.type)

    store.ensure_collection(db, SOURCES)
    now = utcnow()
    source = Source(
        sourceId=store.next_id(db, SOURCES, "sourceId"),
        name=payload.name,
        type=payload.type,
        description=payload.description or "",
        isActive=payload.isActive is not False,
        createdAt=now,
        updatedAt=now,
    )
    result = store.create_document(db, SOURCES, source.model_dump())
    logger.info("Source created", db=db, source_id=source.sourceId, type=source.type)
    return insert_payload(result)


@router.delete("")
def delete_source(
    payload: SourceRef,
    db: str = Depends(require_db),
    store: DocumentStore = Depends(get_store),
):
    store.ensure_collection(db, SOURCES)
    result = store.collection(db, SOURCES).delete_one({"sourceId": payload.sourceId})
    if result.deleted_count == 0:
        raise NotFound("Source not found")
    logger.info("Source deleted", db=db, source_id=payload.sourceId)
    return delete_payload(result)


@router.get("/by-type")
def sources_by_type(
    type: Optional[str] = None,
    db: str = Depends(require_db),
    store: DocumentStore = Depends(get_store),
):
    if not type:
        raise missing("type")
    check_type(type)

    store.ensure_collection(db, SOURCES)
    return serialize(store.get_documents(db, SOURCES, {"type": type}))


@router.get("/active")
def active_sources(db: str = Depends(require_db), store: DocumentStore = Depends(get_store)):
    store.ensure_collection(db, SOURCES)
    return serialize(store.get_documents(db, SOURCES, {"isActive": True}))


@router.put("/update")
def update_source(
    payload: SourceUpdate,
    db: str = Depends(require_db),
    store: DocumentStore = Depends(get_store),
):
    """Sparse patch of a source; updatedAt is refreshed on every accepted call."""
    fields = payload.patch()
    if not fields:
        raise InvalidArgument("No fields provided for update")
    if "type" in fields:
        check_type(fields["type"])
    fields["updatedAt"] = utcnow()

    store.ensure_collection(db, SOURCES)
    result = store.collection(db, SOURCES).update_one({"sourceId": payload.sourceId}, {"$set": fields})
    if result.matched_count == 0:
        raise NotFound("Source not found")

    logger.info("Source updated", db=db, source_id=payload.sourceId, fields=sorted(fields))
    return update_payload(result)


@router.patch("/toggle-status")
def toggle_source_status(
    payload: SourceToggle,
    db: str = Depends(require_db),
    store: DocumentStore = Depends(get_store),
):
    store.ensure_collection(db, SOURCES)
    result = store.collection(db, SOURCES).update_one(
        {"sourceId": payload.sourceId},
        {"$set": {"isActive": payload.isActive, "updatedAt": utcnow()}},
    )
    if result.matched_count == 0:
        raise NotFound("Source not found")

    logger.info("Source status changed", db=db, source_id=payload.sourceId, is_active=payload.isActive)
    return update_payload(result)


@router.get("/{sourceId}")
def get_source(
    sourceId: int,
    db: str = Depends(require_db),
    store: DocumentStore = Depends(get_store),
):
    store.ensure_collection(db, SOURCES)
    source = store.get_document(db, SOURCES, {"sourceId": sourceId})
    if not source:
        raise NotFound("Source not found")
    return serialize(source)
