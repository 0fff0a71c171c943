"""
Schemaless document store addressed by collection name and document id.

Documents are JSON objects kept in the ``documents`` table. Queries load a
collection and evaluate predicates in Python, which is plenty for the sizes a
single job seeker's device deals with.
"""
import json
import logging
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterable, NamedTuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from jobseeker.models.document import StoredDocument

logger = logging.getLogger(__name__)

DOCUMENT_ID = "__name__"
OPERATORS = ("==", "!=", "in", "not-in", "array-contains")


class DocumentStoreError(Exception):
    pass


class DocumentNotFoundError(DocumentStoreError):
    pass


class Where(NamedTuple):
    field: str
    op: str
    value: Any


class DocumentSnapshot(NamedTuple):
    id: str
    data: dict


class ArrayUnion:
    def __init__(self, *values):
        self.values = list(values)


class ArrayRemove:
    def __init__(self, *values):
        self.values = list(values)


def array_union(*values) -> ArrayUnion:
    return ArrayUnion(*values)


def array_remove(*values) -> ArrayRemove:
    return ArrayRemove(*values)


def _now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _field_value(snapshot: DocumentSnapshot, field: str) -> Any:
    if field == DOCUMENT_ID:
        return snapshot.id
    return snapshot.data.get(field)


def _matches(snapshot: DocumentSnapshot, where: Where) -> bool:
    value = _field_value(snapshot, where.field)
    if where.op == "==":
        return value == where.value
    if where.op == "!=":
        # Documents without the field never match an inequality
        return value is not None and value != where.value
    if where.op == "in":
        return value in where.value
    if where.op == "not-in":
        return value is not None and value not in where.value
    if where.op == "array-contains":
        return isinstance(value, list) and where.value in value
    raise ValueError(f"Unsupported operator: {where.op}")


def _apply_transforms(current: dict, fields: dict) -> dict:
    merged = dict(current)
    for key, value in fields.items():
        existing = merged.get(key)
        existing = list(existing) if isinstance(existing, list) else []
        if isinstance(value, ArrayUnion):
            merged[key] = existing + [v for v in value.values if v not in existing]
        elif isinstance(value, ArrayRemove):
            merged[key] = [v for v in existing if v not in value.values]
        else:
            merged[key] = value
    return merged


class DocumentStore:
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    @contextmanager
    def _session(self):
        db: Session = self._session_factory()
        try:
            yield db
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            raise DocumentStoreError(str(exc)) from exc
        finally:
            db.close()

    async def get_document(self, collection: str, doc_id: str) -> dict | None:
        with self._session() as db:
            row = db.get(StoredDocument, (collection, doc_id))
            return json.loads(row.data) if row else None

    async def set_document(self, collection: str, doc_id: str, fields: dict) -> None:
        """Create or overwrite a document (last write wins)."""
        now = _now()
        data = _apply_transforms({}, fields)
        with self._session() as db:
            row = db.get(StoredDocument, (collection, doc_id))
            if row:
                row.data = json.dumps(data)
                row.updated_at = now
            else:
                db.add(StoredDocument(
                    collection=collection,
                    id=doc_id,
                    data=json.dumps(data),
                    created_at=now,
                    updated_at=now,
                ))

    async def add_document(self, collection: str, fields: dict) -> str:
        doc_id = uuid.uuid4().hex[:20]
        await self.set_document(collection, doc_id, fields)
        return doc_id

    async def update_document(self, collection: str, doc_id: str, fields: dict) -> None:
        """Merge ``fields`` into an existing document. Missing documents are an error."""
        with self._session() as db:
            row = db.get(StoredDocument, (collection, doc_id))
            if not row:
                raise DocumentNotFoundError(f"No document to update: {collection}/{doc_id}")
            row.data = json.dumps(_apply_transforms(json.loads(row.data), fields))
            row.updated_at = _now()

    async def delete_document(self, collection: str, doc_id: str) -> bool:
        with self._session() as db:
            row = db.get(StoredDocument, (collection, doc_id))
            if not row:
                return False
            db.delete(row)
            return True

    async def query_collection(
        self,
        collection: str,
        predicates: Iterable[Where] = (),
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[DocumentSnapshot]:
        predicates = list(predicates)
        for where in predicates:
            if where.op not in OPERATORS:
                raise ValueError(f"Unsupported operator: {where.op}")

        with self._session() as db:
            rows = (
                db.query(StoredDocument)
                .filter(StoredDocument.collection == collection)
                .order_by(StoredDocument.created_at, StoredDocument.id)
                .all()
            )
            snapshots = [DocumentSnapshot(r.id, json.loads(r.data)) for r in rows]

        results = [s for s in snapshots if all(_matches(s, w) for w in predicates)]

        if order_by:
            present = [s for s in results if _field_value(s, order_by) is not None]
            missing = [s for s in results if _field_value(s, order_by) is None]
            present.sort(key=lambda s: _field_value(s, order_by), reverse=descending)
            results = present + missing

        if limit is not None:
            results = results[:limit]
        return results
