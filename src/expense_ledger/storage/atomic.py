import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, TextIO

@contextmanager
def atomic_write(path: Path | str, encoding: str = "utf-8") -> Generator[TextIO, None, None]:
    """
    Context manager that replaces a file's contents all at once.

    Writes go to a temporary file in the target's directory. On success the
    temp file is flushed, fsynced and renamed over the target; on exception
    it is removed and the target is left untouched.

    Usage:
        with atomic_write("expenses.dat") as f:
            f.write("...")
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        dir=target.parent,
        prefix=f".{target.name}.",
        suffix=".tmp",
    )
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="\n") as f:
            yield f
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, target)
    except BaseException:
        # Rename never happened, drop the partial temp file
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
