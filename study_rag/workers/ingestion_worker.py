"""
In-process ingestion worker pool.

An asyncio queue of pipeline stages consumed by a fixed set of worker
tasks. A successful EXTRACT job enqueues the EMBED job for the same
document; a failing job is logged and never takes its worker down.

Flow: submit_ingestion -> EXTRACT -> (queue) -> EMBED -> completed/failed

Dependencies: asyncio, study_rag.core.document_processing
System role: Background document processing
"""

import asyncio
import logging
import uuid

from study_rag.core.document_processing.models import IngestionJob, IngestionStage
from study_rag.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class IngestionWorkerPool:
    """Run ingestion stages in the background with at most one job per document."""

    def __init__(self, pipeline, worker_count: int = 2) -> None:
        """
        Initialize pool.

        Args:
            pipeline: IngestionPipeline (async extract / chunk_and_embed)
            worker_count: Number of concurrent worker tasks
        """
        self._pipeline = pipeline
        self._worker_count = max(1, worker_count)
        self._queue: asyncio.Queue[IngestionJob] = asyncio.Queue()
        self._workers: list[asyncio.Task[None]] = []
        self._in_flight: set[uuid.UUID] = set()

    @property
    def running(self) -> bool:
        return bool(self._workers)

    def is_active(self, document_id: uuid.UUID) -> bool:
        """Whether a job for the document is queued or running."""
        return document_id in self._in_flight

    def start(self) -> None:
        """Spawn the worker tasks (no-op when already running)."""
        if self._workers:
            return
        self._workers = [
            asyncio.create_task(self._worker(i), name=f"ingestion-worker-{i}")
            for i in range(self._worker_count)
        ]
        logger.info(
            f"{__name__}:start - Worker pool started",
            extra={"worker_count": self._worker_count},
        )

    async def stop(self) -> None:
        """
        Cancel the worker tasks and drop queued jobs.

        Runs cancelled mid-stage record FAILED themselves. A document whose
        extraction finished but whose embedding job never started is
        marked FAILED here so it can be triggered again.
        """
        for task in self._workers:
            task.cancel()
        await asyncio.gather(*self._workers, return_exceptions=True)
        self._workers = []

        dropped = 0
        while not self._queue.empty():
            job = self._queue.get_nowait()
            self._queue.task_done()
            self._in_flight.discard(job.document_id)
            dropped += 1
            if job.stage == IngestionStage.EMBED and not job.new_run:
                try:
                    await self._pipeline.abandon(job.document_id)
                except Exception as e:
                    log_exception_with_context(
                        logger,
                        f"{__name__}:stop - Could not mark dropped job as failed",
                        e,
                        document_id=str(job.document_id),
                    )

        logger.info(
            f"{__name__}:stop - Worker pool stopped",
            extra={"dropped_jobs": dropped},
        )

    async def join(self) -> None:
        """Wait until every queued job, including handoffs, has finished."""
        await self._queue.join()

    def _submit(self, job: IngestionJob) -> bool:
        if job.document_id in self._in_flight:
            logger.warning(
                f"{__name__}:_submit - Document already queued or running",
                extra={"document_id": str(job.document_id), "stage": job.stage.value},
            )
            return False
        self._in_flight.add(job.document_id)
        self._queue.put_nowait(job)
        logger.info(
            f"{__name__}:_submit - Job queued",
            extra={"document_id": str(job.document_id), "stage": job.stage.value},
        )
        return True

    def submit_ingestion(self, document_id: uuid.UUID, file_ref: str) -> bool:
        """
        Queue a full ingestion (extraction, then embedding).

        Args:
            document_id: Document UUID
            file_ref: Storage key of the raw file

        Returns:
            bool: False if the document already has a job queued or running
        """
        return self._submit(
            IngestionJob(
                stage=IngestionStage.EXTRACT,
                document_id=document_id,
                file_ref=file_ref,
            )
        )

    def submit_embedding(self, document_id: uuid.UUID, new_run: bool = True) -> bool:
        """
        Queue a chunk-and-embed run over already extracted content.

        Args:
            document_id: Document UUID
            new_run: Reset the status record before embedding

        Returns:
            bool: False if the document already has a job queued or running
        """
        return self._submit(
            IngestionJob(
                stage=IngestionStage.EMBED,
                document_id=document_id,
                new_run=new_run,
            )
        )

    async def _run_job(self, job: IngestionJob) -> bool:
        """Run one stage; return True when the document was handed to the next stage."""
        if job.stage == IngestionStage.EXTRACT:
            await self._pipeline.extract(job.document_id, job.file_ref)
            self._queue.put_nowait(
                IngestionJob(stage=IngestionStage.EMBED, document_id=job.document_id)
            )
            return True

        await self._pipeline.chunk_and_embed(job.document_id, new_run=job.new_run)
        return False

    async def _worker(self, worker_index: int) -> None:
        while True:
            job = await self._queue.get()
            handed_off = False
            try:
                handed_off = await self._run_job(job)
            except Exception as e:
                log_exception_with_context(
                    logger,
                    f"{__name__}:_worker - Ingestion job failed",
                    e,
                    worker=worker_index,
                    document_id=str(job.document_id),
                    stage=job.stage.value,
                )
            finally:
                if not handed_off:
                    self._in_flight.discard(job.document_id)
                self._queue.task_done()
