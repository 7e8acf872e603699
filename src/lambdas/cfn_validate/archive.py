# src/lambdas/cfn_validate/archive.py
import logging
import os
import shutil
import stat
import zipfile
import zlib
from typing import List, Tuple

from .errors import ArchiveError

logger = logging.getLogger(__name__)

DEFAULT_FILE_MODE = 0o644
DEFAULT_DIR_MODE = 0o755


def _entry_mode(info: zipfile.ZipInfo, default: int) -> int:
    # unix mode lives in the high 16 bits, zips built on windows leave it 0
    mode = stat.S_IMODE(info.external_attr >> 16)
    return mode or default


def _target_path(target: str, name: str) -> str:
    path = os.path.realpath(os.path.join(target, name))
    root = os.path.realpath(target)
    if path != root and not path.startswith(root + os.sep):
        raise ArchiveError(f"archive entry escapes extraction directory: {name!r}")
    return path


def unzip(archive: str, target: str) -> List[str]:
    """
    Extract `archive` into `target`, recreating the directory tree and
    restoring each entry's permission bits. Existing files are overwritten.
    Returns the extracted file paths.
    """
    try:
        os.makedirs(target, mode=DEFAULT_DIR_MODE, exist_ok=True)
        extracted: List[str] = []
        dir_modes: List[Tuple[str, int]] = []
        with zipfile.ZipFile(archive) as zf:
            for info in zf.infolist():
                path = _target_path(target, info.filename)
                if info.is_dir():
                    os.makedirs(path, mode=DEFAULT_DIR_MODE, exist_ok=True)
                    dir_modes.append((path, _entry_mode(info, DEFAULT_DIR_MODE)))
                    continue

                os.makedirs(os.path.dirname(path), mode=DEFAULT_DIR_MODE, exist_ok=True)
                if os.path.lexists(path) and not os.path.isdir(path):
                    os.unlink(path)
                with zf.open(info) as src, open(path, "wb") as dst:
                    shutil.copyfileobj(src, dst)
                os.chmod(path, _entry_mode(info, DEFAULT_FILE_MODE))
                extracted.append(path)

        # directory modes last so a read-only dir doesn't block its own entries
        for path, mode in reversed(dir_modes):
            os.chmod(path, mode)
    except ArchiveError:
        raise
    except (zipfile.BadZipFile, zipfile.LargeZipFile, zlib.error, EOFError) as e:
        logger.error("Artifact %s is not a readable zip: %s", archive, e)
        raise ArchiveError(f"corrupt artifact archive: {e}") from e
    except OSError as e:
        logger.error("Failed extracting %s into %s: %s", archive, target, e, exc_info=True)
        raise ArchiveError(f"failed to extract artifact: {e}") from e

    logger.info("Extracted %d files from %s into %s", len(extracted), archive, target)
    return extracted
