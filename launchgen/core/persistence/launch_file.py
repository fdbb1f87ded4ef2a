"""
Launch file persistence — atomic write of launch.json.

The file is replaced in one step (write to a temp file in the same
directory, then rename) so a failed run never leaves a half-written
document behind: user entries and the previous generated set either
both survive or are both replaced.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from launchgen.core.models.launch import LaunchSpec

logger = logging.getLogger(__name__)


def render_launch_spec(spec: LaunchSpec) -> str:
    """Serialize the document: 2-space indent, trailing newline."""
    return json.dumps(spec.to_document(), indent=2, ensure_ascii=False) + "\n"


def save_launch_spec(spec: LaunchSpec, path: Path) -> None:
    """Overwrite ``path`` with the rendered document (atomic write).

    Raises:
        OSError: If the directory or file cannot be written.
    """
    content = render_launch_spec(spec)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=".launch_", suffix=".tmp")
    os.close(fd)
    tmp = Path(tmp_path)
    try:
        tmp.write_text(content, encoding="utf-8")
        tmp.chmod(0o644)
        tmp.replace(path)
    except OSError as e:
        tmp.unlink(missing_ok=True)
        logger.error("Failed to write %s: %s", path, e)
        raise

    logger.debug("Launch file saved to %s", path)
