# src/lambdas/cfn_validate/app.py
import logging
import os
import tempfile
from typing import Any, Dict

# import modules (so tests can monkeypatch attributes)
from . import archive
from . import aws_clients
from . import events
from . import signals
from . import validator
from .config import HandlerConfig
from src.utils.s3_handler import S3Handler

logger = logging.getLogger(__name__)

EXTRACT_DIR = "artifact"


def _fetch_and_extract(job: events.PipelineJob, scratch: str, config: HandlerConfig) -> str:
    archive_path = os.path.join(scratch, config.archive_name)
    logger.info("Downloading cloud formation template artifacts")
    S3Handler.for_job(job).download_file(job.artifact.key, archive_path)

    extract_dir = os.path.join(scratch, EXTRACT_DIR)
    archive.unzip(archive_path, extract_dir)
    return extract_dir


def _validate(job: events.PipelineJob, extract_dir: str, config: HandlerConfig, cfn) -> Dict[str, Any]:
    template_file = os.path.join(extract_dir, job.template_path(config.template_path))
    body = validator.read_template(template_file)
    return validator.validate_template(cfn, body)


def run_job(event: Dict[str, Any], config: HandlerConfig, codepipeline=None, cloudformation=None) -> Dict[str, Any]:
    """
    Download the job's input artifact, validate its template and report the
    outcome to CodePipeline. Exactly one of success/failure is signalled,
    always as the last step. Errors from the signal call itself propagate.
    """
    job_id = events.job_id(event)
    cp = codepipeline or aws_clients.codepipeline()
    logger.info("Received CodePipeline job %s", job_id)

    try:
        job = events.parse_job(event)
        os.makedirs(config.scratch_root, exist_ok=True)
        with tempfile.TemporaryDirectory(prefix="cfn-validate-", dir=config.scratch_root) as scratch:
            extract_dir = _fetch_and_extract(job, scratch, config)
            result = _validate(job, extract_dir, config, cloudformation or aws_clients.cloudformation())
        summary = validator.summarize(result)
    except Exception as e:
        logger.exception("Job %s failed", job_id)
        message = f"{type(e).__name__}: {e}"
        signals.put_job_failure(cp, job_id, message)
        return {"jobId": job_id, "status": "Failed", "error": message}

    signals.put_job_success(cp, job_id, summary=summary["description"] or "Template is valid")
    return {"jobId": job_id, "status": "Succeeded", "template": summary}


def lambda_handler(event, _context):
    config = HandlerConfig.from_env()
    logging.getLogger().setLevel(config.log_level)
    return run_job(event, config)
