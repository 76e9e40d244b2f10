from __future__ import annotations

import logging
import shutil
import subprocess

logger = logging.getLogger(__name__)


def is_rustfmt_available(rustfmt: str = "rustfmt") -> bool:
    return shutil.which(rustfmt) is not None


def format_with_rustfmt(
    text: str,
    edition: str = "2021",
    rustfmt: str = "rustfmt",
) -> str:
    """Run `text` through rustfmt, returning it unchanged if that fails."""
    if not is_rustfmt_available(rustfmt):
        logger.warning("%s not found, leaving imports unformatted", rustfmt)
        return text

    try:
        proc = subprocess.run(
            [rustfmt, "--emit", "stdout", "--edition", edition],
            input=text,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        logger.warning("Failed to run %s: %s", rustfmt, e)
        return text

    if proc.returncode != 0 or not proc.stdout:
        logger.warning("%s failed: %s", rustfmt, proc.stderr.strip())
        return text

    return proc.stdout.strip() + "\n"
