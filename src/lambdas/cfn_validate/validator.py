# src/lambdas/cfn_validate/validator.py
import logging
import os
from typing import Any, Dict

from botocore.exceptions import BotoCoreError, ClientError

from .errors import TemplateNotFoundError, TemplateValidationError

logger = logging.getLogger(__name__)

# ValidateTemplate rejects larger TemplateBody values, bigger templates need a TemplateURL
MAX_TEMPLATE_BODY_BYTES = 51200


def read_template(path: str) -> str:
    if not os.path.isfile(path):
        raise TemplateNotFoundError(f"template not found in artifact: {os.path.basename(path)}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise TemplateValidationError(f"template is not valid UTF-8: {e}") from e
    except OSError as e:
        raise TemplateNotFoundError(f"template could not be read: {e}") from e


def validate_template(cfn, body: str) -> Dict[str, Any]:
    """
    Submit the template text to CloudFormation ValidateTemplate.
    Returns the structural summary (Description, Parameters, Capabilities, ...).
    """
    size = len(body.encode("utf-8"))
    if size > MAX_TEMPLATE_BODY_BYTES:
        raise TemplateValidationError(
            f"template is {size} bytes, TemplateBody limit is {MAX_TEMPLATE_BODY_BYTES}"
        )

    logger.info("Validating cloud formation template (%d bytes)", size)
    try:
        resp = cfn.validate_template(TemplateBody=body)
    except ClientError as e:
        msg = e.response.get("Error", {}).get("Message") or str(e)
        logger.warning("Template failed validation: %s", msg)
        raise TemplateValidationError(msg) from e
    except BotoCoreError as e:
        logger.error("ValidateTemplate call failed: %s", e, exc_info=True)
        raise TemplateValidationError(f"ValidateTemplate call failed: {e}") from e

    resp.pop("ResponseMetadata", None)
    logger.info("ValidateTemplate result: %s", resp)
    logger.info("Done validating")
    return resp


def summarize(result: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "description": result.get("Description", ""),
        "parameters": [p.get("ParameterKey") for p in result.get("Parameters", [])],
        "capabilities": result.get("Capabilities", []),
    }
