import warnings

from _dsvio.dialect import make_dialect
from _dsvio.files import takes_stream

# Raised by streams on failed writes, ValueError when the stream is closed.
_SINK_ERRORS = (OSError, ValueError)


class AmbiguousFieldWarning(UserWarning):
    """
    Emitted when a field written without quoting contains the separator or
    a line break, and so will not read back as the same field.
    """

    pass


class Writer:
    """
    Writes delimited text to a binary sink, one field at a time.

    Successive calls to write insert the separator between fields, and
    end_of_record inserts the line terminator. With quoting enabled, fields
    containing the separator, a quote or a line break are enclosed in
    quotes, with embedded quotes doubled. An empty field starting a record
    is written as "" so that a record of one empty field is not read back
    as an empty line.

    The first error raised by the sink is kept. Every later call does
    nothing and returns False, so checking for errors can be deferred to
    the end of a record or of the stream, see Writer.error. Used as a
    context manager, the writer flushes on exit and raises the kept error.

    """

    def __init__(self, sink, dialect=None, encoding="utf-8", **options):
        """
        :param sink: A binary stream.
        :param dialect: The Dialect to write, defaults to Dialect().
        :param encoding: The encoding of fields given as str.
        :param options: Dialect fields overriding those of dialect.
        """
        self.dialect = make_dialect(dialect, **options)
        self.sink = sink
        self.encoding = encoding
        self._separator = self.dialect.separator
        self._terminator = self.dialect.terminator.value
        self._special = (self._separator, b'"', b"\n", b"\r")
        self._buffer = bytearray()
        self._start_of_record = True
        self._error = None

    @property
    def error(self):
        """
        The first error raised by the sink, or None.
        """
        return self._error

    def write(self, field):
        """
        Write one field, preceded by the separator unless it starts a record.

        :param field: bytes, bytearray, memoryview or str.
        :returns: False if an error has occurred.
        """
        if self._error is not None:
            return False
        if isinstance(field, str):
            field = field.encode(self.encoding)
        else:
            field = bytes(field)

        if not self._start_of_record:
            self._buffer += self._separator
        if self.dialect.quoted:
            if any(special in field for special in self._special) or (
                not field and self._start_of_record
            ):
                field = b'"' + field.replace(b'"', b'""') + b'"'
        elif self._separator in field or b"\n" in field or b"\r" in field:
            warnings.warn(
                f"Field {field!r} contains the separator or a line break "
                "and is written without quoting",
                AmbiguousFieldWarning,
                stacklevel=2,
            )
        self._buffer += field
        self._start_of_record = False
        return self._drain_if_full()

    def end_of_record(self):
        """
        Terminate the current record.

        :returns: False if an error has occurred.
        """
        if self._error is not None:
            return False
        self._buffer += self._terminator
        self._start_of_record = True
        return self._drain_if_full()

    def write_record(self, fields):
        """
        Write all the given fields followed by the line terminator.

        :returns: False if an error has occurred.
        """
        for field in fields:
            if not self.write(field):
                return False
        return self.end_of_record()

    def flush(self):
        """
        Write all buffered output to the sink and flush the sink.

        :returns: False if an error has occurred.
        """
        if self._error is not None:
            return False
        self._drain()
        flush = getattr(self.sink, "flush", None)
        if self._error is None and flush is not None:
            try:
                flush()
            except _SINK_ERRORS as err:
                self._set_error(err)
        return self._error is None

    def _drain_if_full(self):
        if len(self._buffer) >= self.dialect.buffer_size:
            self._drain()
        return self._error is None

    def _drain(self):
        if not self._buffer:
            return
        try:
            self.sink.write(bytes(self._buffer))
        except _SINK_ERRORS as err:
            self._set_error(err)
        self._buffer = bytearray()

    def _set_error(self, err):
        if self._error is None:
            self._error = err

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.flush()
        if exc_type is None and self._error is not None:
            raise self._error


@takes_stream(0, "wb")
def write(filelike, records, dialect=None, encoding="utf-8", **options):
    """
    Writes the given records to the file.

    :param filelike: A file-like object, (string to path, pathlib.Path or opened
        binary stream). Paths ending with .gz or .bz2 are compressed.
    :param records: Iterable of records, each an iterable of fields (bytes or
        str).
    :param dialect: The Dialect to write, defaults to Dialect().
    :param options: Dialect fields overriding those of dialect.
    :raises OSError: The first error raised while writing (ValueError when
        the stream is closed).
    """
    with Writer(filelike, dialect, encoding=encoding, **options) as writer:
        for record in records:
            if not writer.write_record(record):
                break
