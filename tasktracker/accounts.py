# No server-side session state: signout only acknowledges

import logging
from typing import Any, Dict

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from .auth import get_password_hash, verify_password
from .database import to_object_id
from .errors import DuplicateEmail, InvalidCredentials, NotFound
from .models import UserPublic

logger = logging.getLogger(__name__)


class AccountService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.users = db.users

    async def register(self, name: str, email: str, password: str) -> Dict[str, Any]:
        if await self.users.find_one({"email": email}):
            raise DuplicateEmail()

        user_doc = {
            "name": name,
            "email": email,
            "password": get_password_hash(password),
        }
        try:
            result = await self.users.insert_one(user_doc)
        except DuplicateKeyError:
            # Lost a race with a concurrent registration for the same email
            raise DuplicateEmail()
        user_doc["_id"] = result.inserted_id

        logger.info("Registered user %s", result.inserted_id)
        return {
            "success": True,
            "message": f"Hello, {name}! Welcome to our platform.",
            "user": UserPublic.from_document(user_doc).model_dump(),
        }

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        user = await self.users.find_one({"email": email})
        if not user or not verify_password(password, user.get("password")):
            logger.warning("Failed login attempt for %s", email)
            raise InvalidCredentials()

        logger.info("User %s logged in", user["_id"])
        return {
            "success": True,
            "message": f"Hello, {user.get('name')}! Welcome back.",
            "user": UserPublic.from_document(user).model_dump(),
        }

    async def update_profile(self, user_id: str, name: str, email: str) -> Dict[str, Any]:
        user_oid = to_object_id(user_id, "user")

        owner = await self.users.find_one({"email": email})
        if owner and owner["_id"] != user_oid:
            raise DuplicateEmail()

        try:
            result = await self.users.update_one({"_id": user_oid}, {"$set": {"name": name, "email": email}})
        except DuplicateKeyError:
            raise DuplicateEmail()
        if result.matched_count == 0:
            raise NotFound("User not found")

        return {"success": True, "message": "User profile updated successfully"}

    async def signout(self) -> Dict[str, Any]:
        return {"success": True, "message": "Signout successful"}
