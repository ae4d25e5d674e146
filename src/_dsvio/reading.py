import pathlib
from contextlib import contextmanager

from _dsvio.files import open_source
from _dsvio.tokenizer import FieldTokenizer


def read_record(tokenizer):
    """
    Read the fields of the next record from the tokenizer, skipping empty
    lines and line comments.

    :returns: The record as a list of bytes (copies of the fields), or
        None when the stream is exhausted.
    """
    record = []
    for field in tokenizer:
        if field.empty_line:
            continue
        record.append(field.bytes())
        if field.end_of_record:
            return record
    return None


def iter_records(tokenizer):
    while True:
        record = read_record(tokenizer)
        if record is None:
            return
        yield record


def read(filelike, dialect=None, **options):
    """
    Reads a file of delimited text and returns its records,
    ie. records = read("/my/file.csv")

    Each record is a list of fields as bytes. Empty lines and line
    comments are skipped.

    """
    with lazy_read(filelike, dialect, **options) as records:
        return list(records)


@contextmanager
def lazy_read(filelike, dialect=None, **options):
    """
    Context manager giving an iterator of the records in the file, see read.

    :param filelike: A file-like object, (string to path, pathlib.Path or
        opened binary stream). Paths ending with .gz or .bz2 are decompressed.
    :param dialect: The Dialect of the file, defaults to Dialect().
    :param options: Dialect fields overriding those of dialect.
    """
    file_stream = filelike
    did_open = False
    if isinstance(filelike, (str, pathlib.Path)):
        did_open = True
        file_stream = open_source(filelike)

    try:
        tokenizer = FieldTokenizer(file_stream, dialect, **options)
        yield iter_records(tokenizer)
    finally:
        if did_open:
            file_stream.close()
