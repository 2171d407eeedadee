# status is the source of truth; every write keeps completed == (status == "Completed")

import logging
from typing import Any, Dict, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from .database import to_object_id
from .errors import NotFound
from .models import Task, TaskStatus, TaskUpdate

logger = logging.getLogger(__name__)


def owner_value(user_id: str) -> Any:
    # Stored as an ObjectId when it looks like one, same as existing task documents
    return ObjectId(user_id) if ObjectId.is_valid(user_id) else user_id


def owner_query(user_id: str) -> Dict[str, Any]:
    if ObjectId.is_valid(user_id):
        return {"userId": {"$in": [ObjectId(user_id), user_id]}}
    return {"userId": user_id}


def reconcile_status(updates: Dict[str, Any]) -> Dict[str, Any]:
    """Fill in whichever of ``status``/``completed`` the update left out."""
    updates = dict(updates)
    status = updates.get("status")
    if status is not None:
        status = TaskStatus(status)
        updates["status"] = status.value
        updates["completed"] = status is TaskStatus.COMPLETED
    elif updates.get("completed") is not None:
        updates["status"] = (TaskStatus.COMPLETED if updates["completed"] else TaskStatus.NOT_STARTED).value
    else:
        updates.pop("status", None)
        updates.pop("completed", None)
    return updates


class TaskService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.tasks = db.tasks

    async def create_task(
        self,
        user_id: str,
        title: str,
        thingstodo: Optional[str] = None,
        due_date: Optional[str] = None,
    ) -> Dict[str, Any]:
        task_doc = {
            "userId": owner_value(user_id),
            "title": title,
            "thingstodo": thingstodo,
            "dueDate": due_date,
            "completed": False,
            "status": TaskStatus.NOT_STARTED.value,
        }
        result = await self.tasks.insert_one(task_doc)
        task_doc["_id"] = result.inserted_id

        logger.info("Created task %s for user %s", result.inserted_id, user_id)
        return {
            "success": True,
            "message": "Task added successfully",
            "task": Task.from_document(task_doc).model_dump(mode="json"),
        }

    async def list_tasks(self, user_id: str) -> Dict[str, Any]:
        tasks = []
        async for doc in self.tasks.find(owner_query(user_id)):
            tasks.append(Task.from_document(doc).model_dump(mode="json"))
        return {"success": True, "tasks": tasks}

    async def update_task(self, task_id: str, changes: TaskUpdate) -> Dict[str, Any]:
        task_oid = to_object_id(task_id, "task")
        updates = reconcile_status(changes.model_dump(exclude_unset=True))

        if updates:
            result = await self.tasks.update_one({"_id": task_oid}, {"$set": updates})
            matched = result.matched_count
        else:
            matched = await self.tasks.count_documents({"_id": task_oid}, limit=1)
        if not matched:
            raise NotFound("Task not found")

        return {"success": True, "message": "Task updated successfully"}

    async def complete_task(self, task_id: str) -> Dict[str, Any]:
        task_oid = to_object_id(task_id, "task")
        updated = await self.tasks.find_one_and_update(
            {"_id": task_oid},
            {"$set": {"completed": True, "status": TaskStatus.COMPLETED.value}},
            return_document=ReturnDocument.AFTER,
        )
        if updated is None:
            raise NotFound("Task not found")

        return {
            "success": True,
            "message": "Task marked as completed",
            "updatedTask": Task.from_document(updated).model_dump(mode="json"),
        }

    async def delete_task(self, task_id: str) -> Dict[str, Any]:
        task_oid = to_object_id(task_id, "task")
        result = await self.tasks.delete_one({"_id": task_oid})
        # A missing task is not an error: the end state is the same
        if result.deleted_count:
            logger.info("Deleted task %s", task_id)
        return {"success": True, "message": "Task deleted successfully"}
