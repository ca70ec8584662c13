"""File output helpers shared by the format writers."""

import os
import tempfile
from pathlib import Path
from typing import Union


def _current_umask() -> int:
    # The umask can only be read by setting it
    umask = os.umask(0)
    os.umask(umask)
    return umask


def write_atomic(path: Union[str, Path], data: bytes) -> Path:
    """
    Write ``data`` to ``path`` so the file is either complete or absent.

    The bytes go to a temporary file in the destination directory, which
    is then renamed over the target. The result gets the permissions a
    plain ``open(path, 'wb')`` would create.
    """
    path = Path(path)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
        # mkstemp always creates 0600
        os.chmod(tmp_name, 0o666 & ~_current_umask())
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
    return path
