"""
Document store access for the accounting API.

One ``DocumentStore`` (and so one ``MongoClient`` connection pool) lives for
the whole process. It is opened in the application lifespan, handed to each
request through the ``get_store`` dependency and closed only at shutdown.
Every account is its own database; every entity type its own collection.
"""
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

import structlog
from bson import ObjectId
from fastapi import Request
from pymongo import DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError
from pymongo.results import DeleteResult, InsertOneResult, UpdateResult

from errors import missing

logger = structlog.get_logger(__name__)


@dataclass
class EnsureResult:
    """Outcome of a best-effort ``ensure_collection`` call.

    ``error`` is set when listing or creating the collection failed. Callers
    carry on regardless and let the main operation fail on its own if the
    store really is unusable.
    """
    collection: str
    existed: bool = False
    created: bool = False
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class DocumentStore:
    def __init__(self, client: MongoClient):
        self.client = client

    @classmethod
    def from_uri(cls, uri: str) -> "DocumentStore":
        return cls(MongoClient(uri))

    def database(self, db_name: str) -> Database:
        return self.client[db_name]

    def collection(self, db_name: str, name: str) -> Collection:
        return self.client[db_name][name]

    def ensure_collection(self, db_name: str, name: str) -> EnsureResult:
        result = EnsureResult(collection=name)
        try:
            db = self.database(db_name)
            if name in db.list_collection_names():
                result.existed = True
                return result
            db.create_collection(name)
            result.created = True
            logger.info("Created empty collection", db=db_name, collection=name)
        except PyMongoError as e:
            result.error = str(e)
            logger.warning("Error ensuring collection", db=db_name, collection=name, error=str(e))
        return result

    def next_id(self, db_name: str, name: str, field: str) -> int:
        # read-max-then-insert: two concurrent creators can get the same id.
        # Non-numeric legacy ids sort above numbers in BSON order, so skip them.
        last = self.collection(db_name, name).find_one({field: {"$type": "number"}}, sort=[(field, DESCENDING)])
        if not last or last.get(field) is None:
            return 1
        return int(last[field]) + 1

    def get_documents(
        self,
        db_name: str,
        name: str,
        filter_dict: Optional[Dict[str, Any]] = None,
        sort: Optional[Sequence[Tuple[str, int]]] = None,
        limit: Optional[int] = None,
    ) -> List[dict]:
        cursor = self.collection(db_name, name).find(filter_dict or {})
        if sort:
            cursor = cursor.sort(list(sort))
        if limit:
            cursor = cursor.limit(limit)
        return list(cursor)

    def get_document(self, db_name: str, name: str, filter_dict: Optional[Dict[str, Any]] = None) -> Optional[dict]:
        return self.collection(db_name, name).find_one(filter_dict or {})

    def create_document(self, db_name: str, name: str, data: dict) -> InsertOneResult:
        return self.collection(db_name, name).insert_one(data)

    def list_databases(self) -> List[dict]:
        return [{"name": name} for name in self.client.list_database_names()]

    def close(self):
        logger.info("Closing document store")
        self.client.close()


def get_store(request: Request) -> DocumentStore:
    """Dependency returning the process-wide store"""
    return request.app.state.store


def require_db(db: Optional[str] = None) -> str:
    """Dependency reading the ``db`` query parameter, the account selector"""
    if not db:
        raise missing("db")
    return db


# ---------------------------
# JSON rendering
# ---------------------------
def serialize(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: serialize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize(v) for v in value]
    return value


def insert_payload(result: InsertOneResult) -> dict:
    return {"acknowledged": result.acknowledged, "insertedId": serialize(result.inserted_id)}


def update_payload(result: UpdateResult) -> dict:
    return {
        "acknowledged": result.acknowledged,
        "matchedCount": result.matched_count,
        "modifiedCount": result.modified_count,
        "upsertedId": serialize(result.upserted_id),
    }


def delete_payload(result: DeleteResult) -> dict:
    return {"acknowledged": result.acknowledged, "deletedCount": result.deleted_count}
