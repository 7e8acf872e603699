# src/lambdas/cfn_validate/signals.py
import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

MAX_FAILURE_MESSAGE = 5000
MAX_SUMMARY = 2048


def put_job_success(cp, job_id: str, summary: Optional[str] = None) -> Dict[str, Any]:
    logger.info("Sending success signal to Code Pipeline for job %s", job_id)
    kwargs: Dict[str, Any] = {"jobId": job_id}
    if summary:
        kwargs["executionDetails"] = {"summary": summary[:MAX_SUMMARY], "percentComplete": 100}
    out = cp.put_job_success_result(**kwargs)
    logger.info("Code Pipeline success signal output: %s", out)
    return out


def put_job_failure(cp, job_id: str, message: str) -> Dict[str, Any]:
    logger.info("Sending fail signal to Code Pipeline for job %s", job_id)
    out = cp.put_job_failure_result(
        jobId=job_id,
        failureDetails={"type": "JobFailed", "message": (message or "validation failed")[:MAX_FAILURE_MESSAGE]},
    )
    logger.info("Code Pipeline fail signal output: %s", out)
    return out
