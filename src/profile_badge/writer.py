"""Write a group of output files so that either all of them change or none do."""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

log = logging.getLogger(__name__)


def _target_mode(target: Path) -> int:
    """Mode a plain ``open(target, "w")`` would leave behind."""
    try:
        return target.stat().st_mode & 0o777
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


class OutputStage:
    """Temporary files waiting to be moved onto their final names."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory
        self._staged: dict[Path, Path] = {}

    def write(self, name: str, content: str) -> Path:
        target = self.directory / name
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{name}.", suffix=".tmp")
        tmp = Path(tmp_name)
        self._staged[target] = tmp
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        # mkstemp creates 0600 files; keep the permissions of a regular write.
        os.chmod(tmp, _target_mode(target))
        log.debug("Staged %s as %s (%d bytes)", target, tmp, len(content))
        return target

    def commit(self) -> list[Path]:
        written = []
        for target, tmp in list(self._staged.items()):
            os.replace(tmp, target)
            del self._staged[target]
            written.append(target)
        return written

    def discard(self) -> None:
        for tmp in self._staged.values():
            tmp.unlink(missing_ok=True)
        self._staged.clear()


@contextmanager
def atomic_outputs(directory: str | os.PathLike[str]) -> Iterator[OutputStage]:
    """Stage writes in ``directory`` and publish them together on success.

    If the block raises, every staged file is removed and the existing
    outputs are left untouched.
    """
    path = Path(directory)
    path.mkdir(parents=True, exist_ok=True)
    stage = OutputStage(path)
    try:
        yield stage
        written = stage.commit()
    except BaseException:
        stage.discard()
        raise
    for target in written:
        log.info("Wrote %s", target)
