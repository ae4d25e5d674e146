import bz2
import gzip
import pathlib
from functools import wraps

_COMPRESSED_OPENERS = {
    ".gz": gzip.open,
    ".bz2": bz2.open,
}


def open_file(path, mode):
    """
    Open a file in binary mode, transparently (de)compressing files with
    the .gz or .bz2 extension.
    """
    opener = _COMPRESSED_OPENERS.get(pathlib.Path(path).suffix.lower(), open)
    return opener(path, mode)


def open_source(path):
    return open_file(path, "rb")


def open_sink(path):
    return open_file(path, "wb")


def takes_stream(i, mode):
    """
    Decorator for functions taking a stream as their i'th argument, making
    them also accept a path (str or pathlib.Path) which is opened with
    open_file for the duration of the call.
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            if (
                len(args) > i
                and args[i] is not None
                and isinstance(args[i], (str, pathlib.Path))
            ):
                with open_file(args[i], mode) as f:
                    return func(*args[:i], f, *args[i + 1 :], **kwargs)
            else:
                return func(*args, **kwargs)

        return wrapper

    return decorator
