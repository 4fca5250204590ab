"""MongoDB implementation of UserRepository.

Pure pass-through to the `users` collection: no retries, no transactions.
PyMongoError propagates to the caller untranslated.
"""

from datetime import datetime, timezone
from logging import getLogger

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from adapter.mongodb.connection import USERS_COLLECTION_NAME
from adapter.mongodb.indexes import USER_INDEXES, reconcile_indexes
from domain.model.user import User

logger = getLogger(__name__)

# Domain attribute -> document field
_FIELD_NAMES = {
    'email': 'email',
    'password': 'password',
    'full_name': 'fullName',
    'is_verified': 'isVerified',
    'last_login': 'lastLogin',
}


def _object_id(user_id: str) -> ObjectId | None:
    if isinstance(user_id, ObjectId):
        return user_id
    if not isinstance(user_id, str) or not ObjectId.is_valid(user_id):
        return None
    return ObjectId(user_id)


class MongoUserRepository:
    def __init__(self, db: AsyncDatabase):
        self.collection = db[USERS_COLLECTION_NAME]

    async def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        try:
            await reconcile_indexes(self.collection, USER_INDEXES)
            return True
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=str(doc['_id']),
            email=doc['email'],
            password=doc['password'],
            full_name=doc['fullName'],
            is_verified=doc.get('isVerified', False),
            last_login=doc.get('lastLogin'),
            created_at=doc.get('createdAt'),
            updated_at=doc.get('updatedAt'),
        )

    async def exists(self, email: str) -> bool:
        doc = await self.collection.find_one({'email': email}, projection={'_id': 1})
        return doc is not None

    async def insert(self, email: str, password: str, full_name: str) -> User:
        """Insert a new user and return the User object."""
        now = datetime.now(timezone.utc)
        user_doc = {
            'email': email,
            'password': password,
            'fullName': full_name,
            'isVerified': False,
            'lastLogin': None,
            'createdAt': now,
            'updatedAt': now,
        }
        result = await self.collection.insert_one(user_doc)
        user_doc['_id'] = result.inserted_id

        user = self._to_domain(user_doc)
        logger.info("User created", extra={"userId": user.id})
        return user

    async def find_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        oid = _object_id(user_id)
        if oid is None:
            logger.debug("Malformed user id", extra={"userId": str(user_id)})
            return None
        doc = await self.collection.find_one({'_id': oid})
        return self._to_domain(doc) if doc else None

    async def find_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        doc = await self.collection.find_one({'email': email})
        return self._to_domain(doc) if doc else None

    async def update_by_id(self, user_id: str, fields: dict) -> User | None:
        """Apply a partial update. Return the post-update User or None if not found."""
        oid = _object_id(user_id)
        if oid is None:
            return None

        update = {_FIELD_NAMES[k]: v for k, v in fields.items() if k in _FIELD_NAMES}
        update['updatedAt'] = datetime.now(timezone.utc)

        doc = await self.collection.find_one_and_update(
            {'_id': oid},
            {'$set': update},
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            return None

        logger.debug("User updated", extra={"userId": str(oid), "fields": sorted(fields)})
        return self._to_domain(doc)
