"""
Persistence for application documents.

Stores hand back plain dicts with a string `id` in place of MongoDB's `_id`.
Every write goes through `compare_and_set`, which only applies when the
record's `version` still matches the version the caller read, so a
read-check-write sequence against one application is atomic.
"""

import asyncio
import copy
import logging
from typing import Any, Dict, List, Optional, Protocol, Tuple, runtime_checkable

from bson import ObjectId
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


class ApplicationStoreError(Exception):
    """Raised for any failure of the underlying persistence layer."""


@runtime_checkable
class ApplicationStore(Protocol):

    async def create(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a new application and return it with its assigned id."""

    async def get(self, application_id: str) -> Optional[Dict[str, Any]]:
        """Fetch one application, or None when it does not exist."""

    async def find_by_user(self, user_id: str) -> List[Dict[str, Any]]:
        """All applications owned by a user, newest first."""

    async def list(
        self,
        status: Optional[str] = None,
        user_id: Optional[str] = None,
        size: int = 25,
        next_id: Optional[str] = None,
    ) -> Tuple[List[Dict[str, Any]], Optional[str]]:
        """A page of applications, newest first, plus the cursor of the next page."""

    async def compare_and_set(
        self,
        application_id: str,
        expected_version: int,
        changes: Dict[str, Any],
        increments: Optional[Dict[str, int]] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Apply `changes` ($set, dot-delimited paths) and `increments` ($inc)
        if the stored version equals `expected_version`.

        Returns the updated application, or None when the version moved on.
        """


def _to_application(document: Dict[str, Any]) -> Dict[str, Any]:
    application = dict(document)
    application["id"] = str(application.pop("_id"))
    return application


# ===========================
# MONGODB
# ===========================

class MongoApplicationStore:
    """Application store backed by the `applications` collection."""

    def __init__(self, db):
        self.collection = db.applications

    async def create(self, document):
        document = dict(document)
        try:
            result = await self.collection.insert_one(document)
        except PyMongoError as e:
            raise ApplicationStoreError(f"Could not create application: {e}") from e
        document["_id"] = result.inserted_id
        return _to_application(document)

    async def get(self, application_id):
        if not ObjectId.is_valid(application_id):
            return None
        try:
            document = await self.collection.find_one({"_id": ObjectId(application_id)})
        except PyMongoError as e:
            raise ApplicationStoreError(f"Could not fetch application {application_id}: {e}") from e
        return _to_application(document) if document else None

    async def find_by_user(self, user_id):
        try:
            documents = await self.collection.find({"user_id": user_id}).sort("created_at", DESCENDING).to_list(100)
        except PyMongoError as e:
            raise ApplicationStoreError(f"Could not fetch applications of user {user_id}: {e}") from e
        return [_to_application(document) for document in documents]

    async def list(self, status=None, user_id=None, size=25, next_id=None):
        query = {}
        if status:
            query["status"] = status
        if user_id:
            query["user_id"] = user_id
        if next_id:
            if not ObjectId.is_valid(next_id):
                return [], None
            query["_id"] = {"$lt": ObjectId(next_id)}

        try:
            # One extra document tells us whether another page exists
            documents = await self.collection.find(query).sort("_id", DESCENDING).limit(size + 1).to_list(size + 1)
        except PyMongoError as e:
            raise ApplicationStoreError(f"Could not list applications: {e}") from e

        page = [_to_application(document) for document in documents[:size]]
        next_cursor = page[-1]["id"] if len(documents) > size else None
        return page, next_cursor

    async def compare_and_set(self, application_id, expected_version, changes, increments=None):
        if not ObjectId.is_valid(application_id):
            return None

        query = {"_id": ObjectId(application_id)}
        if expected_version == 0:
            # Documents written before versioning have no version field
            query["version"] = {"$in": [0, None]}
        else:
            query["version"] = expected_version

        update = {"$inc": {"version": 1, **(increments or {})}}
        if changes:
            update["$set"] = changes

        try:
            document = await self.collection.find_one_and_update(
                query,
                update,
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise ApplicationStoreError(f"Could not update application {application_id}: {e}") from e

        return _to_application(document) if document else None


# ===========================
# IN-MEMORY
# ===========================

def _set_path(document: Dict[str, Any], path: str, value: Any):
    *parents, leaf = path.split(".")
    target = document
    for key in parents:
        target = target.setdefault(key, {})
    target[leaf] = value


class InMemoryApplicationStore:
    """
    Dict-backed store for local runs and tests.

    Each call yields to the event loop once before touching data, the way a
    network round trip would. The data access itself never awaits, so a
    compare-and-set is atomic within the loop.
    """

    def __init__(self):
        self.documents: Dict[str, Dict[str, Any]] = {}
        self._counter = 0
        self.writes = 0

    def _next_id(self) -> str:
        self._counter += 1
        # Same width as an ObjectId so ids sort in creation order
        return f"{self._counter:024x}"

    async def create(self, document):
        await asyncio.sleep(0)
        document = copy.deepcopy(document)
        document["_id"] = self._next_id()
        self.documents[document["_id"]] = document
        self.writes += 1
        return _to_application(copy.deepcopy(document))

    async def get(self, application_id):
        await asyncio.sleep(0)
        document = self.documents.get(application_id)
        return _to_application(copy.deepcopy(document)) if document else None

    async def find_by_user(self, user_id):
        await asyncio.sleep(0)
        documents = [d for d in self.documents.values() if d.get("user_id") == user_id]
        documents.sort(key=lambda d: d["created_at"], reverse=True)
        return [_to_application(copy.deepcopy(d)) for d in documents]

    async def list(self, status=None, user_id=None, size=25, next_id=None):
        await asyncio.sleep(0)
        documents = sorted(self.documents.values(), key=lambda d: d["_id"], reverse=True)
        if status:
            documents = [d for d in documents if d.get("status") == status]
        if user_id:
            documents = [d for d in documents if d.get("user_id") == user_id]
        if next_id:
            documents = [d for d in documents if d["_id"] < next_id]

        page = [_to_application(copy.deepcopy(d)) for d in documents[:size]]
        next_cursor = page[-1]["id"] if len(documents) > size else None
        return page, next_cursor

    async def compare_and_set(self, application_id, expected_version, changes, increments=None):
        await asyncio.sleep(0)
        document = self.documents.get(application_id)
        if document is None or document.get("version", 0) != expected_version:
            return None

        for path, value in changes.items():
            _set_path(document, path, value)
        for field, amount in (increments or {}).items():
            document[field] = document.get(field, 0) + amount
        document["version"] = expected_version + 1

        self.writes += 1
        return _to_application(copy.deepcopy(document))
