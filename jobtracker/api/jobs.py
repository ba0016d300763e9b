from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from jobtracker.schemas.jobs import JobCreate, JobOut, JobUpdate
from jobtracker.services.container import get_job_service
from jobtracker.services.job_service import JobService
from jobtracker.utils.auth_dependencies import get_current_user_id
from jobtracker.utils.exceptions import AgentError
from jobtracker.utils.logger import get_logger

logger = get_logger(__name__)

# Job posting CRUD, always scoped to the authenticated user
router = APIRouter(prefix="/api/jobs", tags=["Jobs"])


@router.post("", response_model=JobOut, status_code=status.HTTP_201_CREATED)
async def create_job(
    body: JobCreate,
    user_id: str = Depends(get_current_user_id),
    job_service: JobService = Depends(get_job_service),
):
    try:
        return job_service.create_job(user_id, body.model_dump())
    except AgentError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@router.get("", response_model=List[JobOut])
async def list_jobs(
    user_id: str = Depends(get_current_user_id),
    job_service: JobService = Depends(get_job_service),
):
    try:
        return job_service.list_jobs(user_id)
    except Exception as e:
        logger.error(f"[API] Failed to list jobs: {str(e)}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.patch("/{job_id}", response_model=JobOut)
async def update_job(
    job_id: str,
    body: JobUpdate,
    user_id: str = Depends(get_current_user_id),
    job_service: JobService = Depends(get_job_service),
):
    updates = body.model_dump(exclude_unset=True, exclude_none=True)
    if not updates:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update")
    try:
        job = job_service.update_job(user_id, job_id, updates)
    except AgentError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    if not job:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
    return job


@router.delete("/{job_id}", response_model=JobOut)
async def delete_job(
    job_id: str,
    user_id: str = Depends(get_current_user_id),
    job_service: JobService = Depends(get_job_service),
):
    try:
        job = job_service.delete_job(user_id, job_id)
    except Exception as e:
        logger.error(f"[API] Failed to delete job {job_id}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    if not job:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
    return job
