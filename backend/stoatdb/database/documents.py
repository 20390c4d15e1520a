"""
Store boundary: typed records in, MongoDB documents out, and back.

Inserts report an explicit ``InsertResult`` instead of letting driver
exceptions escape, so callers can tell "this record is already there" apart
from a real failure without matching on driver error shapes.
"""
import logging
from enum import Enum
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from stoatdb.database.indexes import unique_fields
from stoatdb.models.base import StoatRecord

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=StoatRecord)


class InsertStatus(str, Enum):
    """Outcome of inserting one record."""
    INSERTED = "inserted"
    ALREADY_EXISTS = "already_exists"
    FAILED = "failed"


class InsertResult(BaseModel):
    """Result of ``insert_record``."""
    collection: str
    status: InsertStatus
    reason: Optional[str] = None
    conflicting_fields: list[str] = []

    @property
    def ok(self) -> bool:
        """True unless the insert failed for a real reason."""
        return self.status != InsertStatus.FAILED


def to_document(record: StoatRecord) -> dict[str, Any]:
    """Serialize a record into the document stored in MongoDB."""
    return record.model_dump(by_alias=True)


def from_document(model: Type[RecordT], document: dict[str, Any]) -> RecordT:
    """
    Validate a stored document back into its record type.

    The store is schema-flexible: fields written by other clients that the
    record doesn't declare are dropped rather than rejected.
    """
    known = set(model.model_fields)
    known.update(f.alias for f in model.model_fields.values() if f.alias)
    return model.model_validate({k: v for k, v in document.items() if k in known})


def missing_reference(db: Database, record: StoatRecord) -> Optional[str]:
    """
    Return the first reference field of ``record`` whose target document
    does not exist, or None if every reference resolves.
    """
    for field, target in record.references.items():
        value = getattr(record, field)
        if value is None:
            continue
        if db[target].find_one({"_id": value}, {"_id": 1}) is None:
            return field
    return None


def _violated_key(
    db: Database,
    record: StoatRecord,
    document: dict[str, Any],
    error: DuplicateKeyError,
) -> Optional[list[str]]:
    """
    Work out which of the record's natural keys an insert collided with.

    The server reports it in ``keyPattern``. Drivers or servers that leave it
    out get a lookup per unique field set instead.
    """
    natural_keys = unique_fields(record.collection_name)
    key_pattern = (error.details or {}).get("keyPattern")
    if key_pattern:
        fields = list(key_pattern)
        return fields if fields in natural_keys else None

    collection = db[record.collection_name]
    for fields in natural_keys:
        query = {field: document.get(field) for field in fields}
        if collection.find_one(query, {"_id": 1}) is not None:
            return fields
    return None


def insert_record(db: Database, record: StoatRecord) -> InsertResult:
    """
    Insert one record into its collection.

    Returns:
        INSERTED on success; ALREADY_EXISTS if a unique index on one of the
        record's natural keys (e.g. username, email) rejected it; FAILED with
        a reason for anything else, including a collision on ``_id``.
        A record whose reference (e.g. a server's owner) points at a missing
        document is FAILED without being written.
    """
    collection_name = record.collection_name
    document = to_document(record)

    try:
        field = missing_reference(db, record)
    except PyMongoError as e:
        return InsertResult(
            collection=collection_name,
            status=InsertStatus.FAILED,
            reason=f"cannot check references: {e}",
        )
    if field is not None:
        return InsertResult(
            collection=collection_name,
            status=InsertStatus.FAILED,
            reason=f"{field} {document[field]} does not exist in {record.references[field]}",
        )

    try:
        db[collection_name].insert_one(document)
    except DuplicateKeyError as e:
        try:
            fields = _violated_key(db, record, document, e)
        except PyMongoError as lookup_error:
            return InsertResult(
                collection=collection_name,
                status=InsertStatus.FAILED,
                reason=f"duplicate key, and lookup of the conflicting key failed: {lookup_error}",
            )
        if fields is None:
            return InsertResult(
                collection=collection_name,
                status=InsertStatus.FAILED,
                reason=f"duplicate key outside the natural keys: {e}",
            )
        return InsertResult(
            collection=collection_name,
            status=InsertStatus.ALREADY_EXISTS,
            reason=f"a document with the same {', '.join(fields)} already exists",
            conflicting_fields=fields,
        )
    except PyMongoError as e:
        return InsertResult(
            collection=collection_name,
            status=InsertStatus.FAILED,
            reason=str(e),
        )

    logger.debug("Inserted %s into %s", record.id, collection_name)
    return InsertResult(collection=collection_name, status=InsertStatus.INSERTED)
