# src/lambdas/cfn_validate/config.py
import logging
import os
from dataclasses import dataclass

DEFAULT_SCRATCH_ROOT = "/tmp"
DEFAULT_ARCHIVE_NAME = "merged.zip"
DEFAULT_TEMPLATE_PATH = "merged.yml"
DEFAULT_LOG_LEVEL = "INFO"


def _log_level(name: str) -> str:
    name = (name or DEFAULT_LOG_LEVEL).strip().upper()
    # getLevelName maps known names to ints and anything else to "Level <name>"
    return name if isinstance(logging.getLevelName(name), int) else DEFAULT_LOG_LEVEL


@dataclass(frozen=True)
class HandlerConfig:
    """Where the handler keeps its per-invocation files."""
    scratch_root: str = DEFAULT_SCRATCH_ROOT
    archive_name: str = DEFAULT_ARCHIVE_NAME
    template_path: str = DEFAULT_TEMPLATE_PATH
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "HandlerConfig":
        return cls(
            scratch_root=os.environ.get("SCRATCH_ROOT", DEFAULT_SCRATCH_ROOT),
            archive_name=os.environ.get("ARTIFACT_ARCHIVE_NAME", DEFAULT_ARCHIVE_NAME),
            template_path=os.environ.get("TEMPLATE_PATH", DEFAULT_TEMPLATE_PATH),
            log_level=_log_level(os.environ.get("LOG_LEVEL", DEFAULT_LOG_LEVEL)),
        )
