"""Profile reads and updates for registered users."""

import logging

from pymongo import ReturnDocument
from pymongo.database import Database

from app.auth import get_user_by_id, hash_password, user_object_id, verify_password
from app.errors import NotFound, ValidationFailed
from app.models.auth import ProfileUpdateRequest

logger = logging.getLogger("neighbor_alert.users")

USER_NOT_FOUND = "User not found"


def get_profile(db: Database, user_id: str) -> dict:
    user = get_user_by_id(db, user_id)
    if user is None:
        raise NotFound(USER_NOT_FOUND)
    return user


def update_profile(db: Database, user_id: str, changes: ProfileUpdateRequest) -> dict:
    """Apply only the fields present in the request body."""
    fields = changes.model_dump(exclude_unset=True)
    # name and notificationRadius always hold a value; an explicit null leaves them unchanged.
    for key in ("name", "notificationRadius"):
        if key in fields and fields[key] is None:
            del fields[key]
    oid = user_object_id(user_id)
    if oid is None:
        raise NotFound(USER_NOT_FOUND)
    if not fields:
        return get_profile(db, user_id)

    if isinstance(fields.get("name"), str):
        fields["name"] = fields["name"].strip()
    updated = db["users"].find_one_and_update(
        {"_id": oid},
        {"$set": fields},
        return_document=ReturnDocument.AFTER,
    )
    if updated is None:
        raise NotFound(USER_NOT_FOUND)
    logger.info("Profile %s updated (%s)", user_id, ", ".join(sorted(fields)))
    return updated


def change_password(db: Database, user_id: str, current_password: str, new_password: str) -> None:
    user = get_profile(db, user_id)
    if not verify_password(current_password, user.get("password", "")):
        raise ValidationFailed("Current password is incorrect")
    db["users"].update_one({"_id": user["_id"]}, {"$set": {"password": hash_password(new_password)}})
    logger.info("Password changed for user %s", user_id)
