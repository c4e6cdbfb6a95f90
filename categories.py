"""
Categories - labels spendings can point at through categoryId
"""
import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from database import DocumentStore, get_store, require_db, serialize, insert_payload, update_payload, delete_payload
from errors import NotFound, missing
from schemas import CATEGORIES, Category, CategoryCreate, CategoryUpdate, CategoryRefBody

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("")
def list_categories(db: str = Depends(require_db), store: DocumentStore = Depends(get_store)):
    store.ensure_collection(db, CATEGORIES)
    return serialize(store.get_documents(db, CATEGORIES))


@router.post("")
def add_category(
    payload: CategoryCreate,
    db: str = Depends(require_db),
    store: DocumentStore = Depends(get_store),
):
    if not payload.name:
        raise missing("name")

    store.ensure_collection(db, CATEGORIES)
    category = Category(categoryId=store.next_id(db, CATEGORIES, "categoryId"), name=payload.name)
    result = store.create_document(db, CATEGORIES, category.model_dump())
    logger.info("Category created", db=db, category_id=category.categoryId)
    return insert_payload(result)


@router.put("")
def update_category(
    payload: CategoryUpdate,
    db: str = Depends(require_db),
    store: DocumentStore = Depends(get_store),
):
    if not payload.name:
        raise missing("name")

    store.ensure_collection(db, CATEGORIES)
    result = store.collection(db, CATEGORIES).update_one(
        {"categoryId": payload.categoryId}, {"$set": {"name": payload.name}}
    )
    if result.matched_count == 0:
        raise NotFound("Category not found")
    if result.modified_count == 0:
        return PlainTextResponse("No changes made to category")

    logger.info("Category renamed", db=db, category_id=payload.categoryId)
    return update_payload(result)


@router.delete("")
def delete_category(
    payload: CategoryRefBody,
    db: str = Depends(require_db),
    store: DocumentStore = Depends(get_store),
):
    store.ensure_collection(db, CATEGORIES)
    result = store.collection(db, CATEGORIES).delete_one({"categoryId": payload.categoryId})
    if result.deleted_count == 0:
        raise NotFound("Category not found")
    logger.info("Category deleted", db=db, category_id=payload.categoryId)
    return delete_payload(result)
