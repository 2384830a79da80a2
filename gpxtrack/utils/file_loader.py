"""Bounded whole-file reads."""

import os
import stat

from gpxtrack.utils.errors import FileLoadError, FileTooLargeError


MAX_FILE_SIZE = 100 * 1024 * 1024  # 100 MiB


def regular_file_size(path):
    """
    Return the size of `path` without following symlinks.

    Raises FileLoadError when the path is missing or is not a regular file
    (symlinks, directories, devices and fifos are all rejected).
    """
    try:
        info = os.lstat(path)
    except OSError:
        raise FileLoadError("does not exist", path=path)

    if not stat.S_ISREG(info.st_mode):
        raise FileLoadError("is not a regular file", path=path)
    return info.st_size


def load_file_bytes(path, max_size=MAX_FILE_SIZE):
    """
    Read an entire file into memory after checking its size.

    Args:
        path: File to read
        max_size: Size ceiling in bytes

    Returns:
        bytes: The file contents, exactly as large as lstat reported
    """
    file_size = regular_file_size(path)
    if file_size == 0:
        raise FileLoadError("is empty", path=path)
    if file_size > max_size:
        raise FileTooLargeError(
            f"is too big ({file_size} bytes, limit is {max_size})", path=path
        )

    try:
        handle = open(path, 'rb')
    except OSError as exc:
        raise FileLoadError(f"cannot open: {exc.strerror or exc}", path=path)

    with handle:
        try:
            data = handle.read(file_size)
        except OSError as exc:
            raise FileLoadError(f"failed to read: {exc.strerror or exc}", path=path)

    # Size changed between lstat and read.
    if len(data) != file_size:
        raise FileLoadError(
            f"short read ({len(data)} of {file_size} bytes)", path=path
        )
    return data
