"""User documents: validation, bcrypt password hashing and persistence."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict

import bcrypt
from pydantic import ValidationError
from pymongo.errors import DuplicateKeyError

from .config import BCRYPT_ROUNDS
from .schemas import UserCreate, UserPublic, UserUpdate

logger = logging.getLogger(__name__)

UNIQUE_FIELDS = ("username", "email", "password")


class UserValidationError(ValueError):
    pass


class DuplicateUserError(ValueError):
    pass


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # stored value is not a bcrypt hash
        return False


def ensure_user_indexes(users_col) -> None:
    for name in UNIQUE_FIELDS:
        users_col.create_index(name, unique=True)


def _validate(model, data: Dict[str, Any]):
    try:
        return model(**data)
    except ValidationError as e:
        raise UserValidationError(str(e)) from e


def _now():
    return datetime.now(timezone.utc)


def to_public(doc: Dict[str, Any]) -> UserPublic:
    return UserPublic(
        id=str(doc["_id"]),
        username=doc["username"],
        email=doc["email"],
        role=doc.get("role", "user"),
        profile_pic=doc.get("profilePic", ""),
        created_at=doc.get("created_at"),
        updated_at=doc.get("updated_at"),
    )


def create_user(data: Dict[str, Any], users_col) -> Dict[str, Any]:
    """Validate, hash the password and insert. Returns the stored document."""
    user = _validate(UserCreate, data)
    if users_col.find_one({"$or": [{"username": user.username}, {"email": user.email}]}):
        raise DuplicateUserError("User already exists")

    now = _now()
    doc = user.model_dump(mode="json", by_alias=True)
    doc["password"] = hash_password(user.password)
    doc["created_at"] = now
    doc["updated_at"] = now
    try:
        result = users_col.insert_one(doc)
    except DuplicateKeyError as e:
        raise DuplicateUserError("User already exists") from e
    doc["_id"] = result.inserted_id
    logger.info("created user %s", user.username)
    return doc


def update_user(user_id, changes: Dict[str, Any], users_col) -> Dict[str, Any]:
    """Apply ``changes``; the password is re-hashed only when it is among them."""
    update = _validate(UserUpdate, changes).model_dump(
        mode="json", by_alias=True, exclude_none=True
    )
    if "password" in update:
        update["password"] = hash_password(update["password"])
    update["updated_at"] = _now()
    try:
        result = users_col.update_one({"_id": user_id}, {"$set": update})
    except DuplicateKeyError as e:
        raise DuplicateUserError("User already exists") from e
    if result.matched_count == 0:
        raise KeyError(user_id)
    return users_col.find_one({"_id": user_id})


def authenticate(identifier: str, password: str, users_col):
    """Return the user document for a username/email + password, or None."""
    identifier = identifier.strip()
    user = users_col.find_one({"$or": [{"username": identifier}, {"email": identifier}]})
    if user and verify_password(password, user["password"]):
        return user
    return None
