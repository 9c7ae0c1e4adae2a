"""Best-effort ``dotnet restore`` so lock/assets artifacts are present."""

from __future__ import annotations

import subprocess
from pathlib import Path

import structlog

log = structlog.get_logger("repomedic.engine")


def restore_packages(root_path: Path, dotnet: str = "dotnet") -> bool:
    """Run ``dotnet restore`` on *root_path*.

    Returns True when the restore exited cleanly.  Failures are logged and
    never raised; the scan proceeds against whatever artifacts exist.  No
    timeout is applied, the external process bounds itself.
    """
    log.info("restore.started", root=str(root_path))
    try:
        result = subprocess.run(
            [dotnet, "restore", str(root_path)],
            capture_output=True,
            text=True,
        )
    except (FileNotFoundError, PermissionError) as e:
        log.warning("restore.unavailable", executable=dotnet, error=str(e))
        return False
    except OSError as e:
        log.warning("restore.failed", error=str(e))
        return False

    if result.returncode == 0:
        log.info("restore.completed", root=str(root_path))
        return True

    log.warning(
        "restore.completed_with_errors",
        returncode=result.returncode,
        stderr=result.stderr.strip() if result.stderr else "unknown error",
    )
    return False
