"""
Job Posting Service

Handles job posting CRUD operations with MongoDB. Every query is scoped to
the owning user, so one user can never see or modify another user's jobs.
"""

from typing import Any, Dict, List, Optional

from pymongo import ReturnDocument
from pymongo.database import Database

from jobtracker.config import Config
from jobtracker.db.mongo import get_database, doc_with_id, to_object_id
from jobtracker.utils.logger import get_logger
from jobtracker.utils.exceptions import AgentError
from jobtracker.utils.datetime_utils import utc_now

logger = get_logger(__name__)


class JobService:
    """Service for managing tracked job postings"""

    def __init__(self, config: Config, db: Optional[Database] = None):
        self.config = config
        self.db = db if db is not None else get_database(config)
        self.col = self.db["jobs"]

    def ensure_indexes(self) -> None:
        self.col.create_index([("createdBy", 1), ("createdAt", -1)])

    def create_job(self, owner_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            now = utc_now()
            job = {
                **data,
                "createdBy": owner_id,
                "createdAt": now,
                "updatedAt": now,
            }
            result = self.col.insert_one(job)
            job["_id"] = result.inserted_id
            logger.info(f"[JobService] ✅ Created job {result.inserted_id} for user {owner_id}")
            return doc_with_id(job)
        except Exception as e:
            logger.error(f"[JobService] Failed to create job: {str(e)}", exc_info=True)
            raise AgentError(f"Failed to create job: {str(e)}", "JobService")

    def list_jobs(self, owner_id: str) -> List[Dict[str, Any]]:
        cursor = self.col.find({"createdBy": owner_id}).sort("createdAt", -1)
        return [doc_with_id(doc) for doc in cursor]

    def update_job(self, owner_id: str, job_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Apply a partial update. Returns None if the job does not exist or belongs to someone else."""
        updates = {k: v for k, v in updates.items() if k not in ("_id", "id", "createdBy", "createdAt")}
        updates["updatedAt"] = utc_now()
        try:
            doc = self.col.find_one_and_update(
                {"_id": to_object_id(job_id), "createdBy": owner_id},
                {"$set": updates},
                return_document=ReturnDocument.AFTER,
            )
        except Exception as e:
            logger.error(f"[JobService] Failed to update job {job_id}: {str(e)}", exc_info=True)
            raise AgentError(f"Failed to update job: {str(e)}", "JobService")
        if doc:
            logger.info(f"[JobService] Updated job {job_id} ({', '.join(sorted(updates))})")
        return doc_with_id(doc)

    def delete_job(self, owner_id: str, job_id: str) -> Optional[Dict[str, Any]]:
        """Delete and return the job, or None if it does not exist or belongs to someone else."""
        doc = self.col.find_one_and_delete({"_id": to_object_id(job_id), "createdBy": owner_id})
        if doc:
            logger.info(f"[JobService] Deleted job {job_id} for user {owner_id}")
        return doc_with_id(doc)
