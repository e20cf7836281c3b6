"""Job listing business logic service."""

import logging
import re
from typing import Any

from supabase import Client

from network20.core.errors import BackendError, BackendNotConfiguredError
from network20.core.supabase import JOBS_TABLE
from network20.schemas.common import ReadResult
from network20.schemas.job import Job, JobCreate

logger = logging.getLogger(__name__)

NOT_CONFIGURED = "Job listings require a configured Supabase backend"

# Characters with meaning inside a PostgREST or=(...) filter
_FILTER_CHARS = re.compile(r'[,(){}"\\*]')


def sanitize_query(query: str) -> str:
    """Strip characters that would break a PostgREST logic filter."""
    return _FILTER_CHARS.sub(" ", query).strip()


def _to_jobs(rows: list[dict[str, Any]] | None) -> list[Job]:
    return [Job.model_validate(row) for row in rows or []]


class JobService:
    """Service for job listings. Jobs only exist on the remote backend."""

    def __init__(self, client: Client | None) -> None:
        """Initialize job service.

        Args:
            client: Supabase client, or None when no backend is configured.
        """
        self.client = client

    async def list_jobs(self) -> ReadResult[list[Job]]:
        """Get active jobs, newest first."""
        if self.client is None:
            return ReadResult.failure(NOT_CONFIGURED, [])

        try:
            response = (
                self.client.table(JOBS_TABLE)
                .select("*")
                .eq("is_active", True)
                .order("created_at", desc=True)
                .execute()
            )
            return ReadResult.success(_to_jobs(response.data))
        except Exception as e:
            logger.warning("Failed to list jobs: %s", e)
            return ReadResult.failure(str(e), [])

    async def search_jobs(self, query: str) -> ReadResult[list[Job]]:
        """Search active jobs by title, company, description or location."""
        if self.client is None:
            return ReadResult.failure(NOT_CONFIGURED, [])

        term = sanitize_query(query)
        if not term:
            return await self.list_jobs()

        pattern = f"%{term}%"
        filters = ",".join(
            f"{column}.ilike.{pattern}" for column in ("job_title", "company_name", "description", "location")
        )

        try:
            response = (
                self.client.table(JOBS_TABLE)
                .select("*")
                .eq("is_active", True)
                .or_(filters)
                .order("created_at", desc=True)
                .execute()
            )
            return ReadResult.success(_to_jobs(response.data))
        except Exception as e:
            logger.warning("Job search for %r failed: %s", query, e)
            return ReadResult.failure(str(e), [])

    async def create_job(self, data: JobCreate) -> Job:
        """Post a job listing.

        Raises:
            BackendNotConfiguredError: If no backend is configured.
            BackendError: If the insert fails.
        """
        if self.client is None:
            raise BackendNotConfiguredError(NOT_CONFIGURED)

        try:
            response = self.client.table(JOBS_TABLE).insert(data.model_dump(mode="json")).execute()
        except Exception as e:
            logger.error("Failed to post job %r: %s", data.job_title, e)
            raise BackendError(f"Failed to post job: {e}") from e

        if not response.data:
            raise BackendError("Failed to post job")

        job = Job.model_validate(response.data[0])
        logger.info("Posted job %s at %s", job.id, job.company_name)
        return job
