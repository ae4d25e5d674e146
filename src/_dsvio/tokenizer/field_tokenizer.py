from _dsvio.dialect import make_dialect
from _dsvio.tokenizer.common import (
    CARRIAGE_RETURN,
    NEWLINE,
    QUOTE,
    guess_separator,
    trim_bounds,
)
from _dsvio.tokenizer.errors import (
    NonTerminatedQuote,
    TokenizationError,
    UnescapedQuote,
)
from _dsvio.tokenizer.field import FieldResult
from _dsvio.tokenizer.source_buffer import SourceBuffer

# Returned by the scanners when the buffered bytes do not hold a whole field.
_NEED_MORE = object()
# Returned when a line comment was consumed instead of a field.
_SKIPPED = object()


class FieldTokenizer:
    """
    The field tokenizer splits a byte stream of delimited text into fields,
    one field for each call to advance.

    The lexing follows rfc4180, extended with an arbitrary one byte
    separator, line comments, lazy quotes, trimming of unquoted fields and
    guessing of the separator. Whenever the buffered bytes do not contain
    a whole field, more is read from the stream and scanning continues
    where it stopped, so the lookahead is bounded by the size of the
    largest field (and by max_buffer_size). Line comments are skipped
    and produce no field.

    >>> import io
    >>> tokenizer = FieldTokenizer(io.BytesIO(b'a,"b""c"\\n'))
    >>> [(f.bytes(), f.end_of_record) for f in tokenizer]
    [(b'a', False), (b'b"c', True)]

    """

    def __init__(self, stream, dialect=None, **options):
        """
        :param stream: A binary stream containing delimited text.
        :param dialect: The Dialect of the stream, defaults to Dialect().
        :param options: Dialect fields overriding those of dialect.
        """
        self.dialect = make_dialect(dialect, **options)
        self.buffer = SourceBuffer(
            stream,
            buffer_size=self.dialect.buffer_size,
            max_size=self.dialect.max_buffer_size,
        )
        self.quoted = self.dialect.quoted
        self.lazy_quotes = self.dialect.lazy_quotes
        self.trim = self.dialect.trim
        self._separator = self.dialect.separator[0]
        comment = self.dialect.comment
        self._comment = None if comment is None else comment[0]
        self._guess = self.dialect.guess

        self._eor = True
        self._empty = False
        self._line = 1
        self._line_offset = 0
        self._error = None
        self._resume = 0
        self._escaped = 0
        self.field = None

    @property
    def separator(self):
        """
        The separator, which is the guessed one after the first advance
        when guessing is enabled.
        """
        return bytes([self._separator])

    @property
    def line_number(self):
        """
        The current line number (not record number), starting at 1.
        """
        return self._line

    @property
    def end_of_record(self):
        """
        True when the most recent field was terminated by a line break
        (or the end of the stream) rather than by a separator.
        """
        return self._eor

    @property
    def empty_line(self):
        """
        True when the most recent field was an empty line. Also True when
        the stream ended after a line comment.
        """
        return self._empty and self._eor

    def __iter__(self):
        while True:
            result = self.advance()
            if result is None:
                return
            yield result

    def advance(self):
        """
        Scan the next field.

        :returns: A FieldResult, or None when the stream is exhausted.
        :raises TokenizationError: If the stream is malformed or a field is
            too large. The error is raised again by any following call.
        """
        if self._error is not None:
            raise self._error
        try:
            result = self._advance()
        except TokenizationError as err:
            self._error = err
            raise
        self.field = result
        return result

    def _advance(self):
        buffer = self.buffer
        if self._guess:
            self._guess = False
            buffer.ensure(1)
            self._separator = guess_separator(buffer.view(), self.separator)[0]

        while True:
            result = self._scan()
            if result is _NEED_MORE:
                buffer.ensure(buffer.unread + 1)
            elif result is not _SKIPPED:
                return result

    def _scan(self):
        buffer = self.buffer
        data = buffer.data
        start, end = buffer.start, buffer.end

        if start == end:
            if not buffer.eof:
                return _NEED_MORE
            if self._eor:
                return None
            # The last field was terminated by a separator
            return self._produce(start, start, 0, True, False)

        first = data[start]
        if self._eor and self._comment is not None and first == self._comment:
            return self._scan_comment(data, start, end, buffer.eof)
        if self.quoted and first == QUOTE:
            return self._scan_quoted(data, start, end, buffer.eof)
        return self._scan_unquoted(data, start, end, buffer.eof)

    def _need_more(self, resume, escaped=0):
        """
        Remember how far the current field has been scanned, so that the
        scan continues from there once more data is buffered.
        """
        self._resume = resume
        self._escaped = escaped
        return _NEED_MORE

    def _scan_comment(self, data, start, end, at_eof):
        newline = data.find(NEWLINE, start + self._resume, end)
        if newline >= 0:
            consumed = newline + 1 - start
        elif at_eof:
            consumed = end - start
        else:
            return self._need_more(end - start)
        self._consume(consumed)
        self._eor = True
        self._empty = True
        self._resume = 0
        return _SKIPPED

    def _scan_quoted(self, data, start, end, at_eof):
        """
        Scan a field starting with a quote, which may contain separators,
        line breaks and doubled (escaped) quotes. The field is closed by a
        quote followed by the separator, a line break or the end of stream.
        """
        escaped = self._escaped
        pos = start + max(self._resume, 1)
        while True:
            quote = data.find(QUOTE, pos, end)
            if quote < 0:
                if at_eof:
                    raise NonTerminatedQuote(self._line)
                return self._need_more(end - start, escaped)

            after = quote + 1
            if after == end:
                if at_eof:
                    return self._produce(
                        start + 1, quote, end - start, True, False, escaped
                    )
                return self._need_more(quote - start, escaped)

            following = data[after]
            if following == QUOTE:
                escaped += 1
                pos = after + 1
                continue
            if following == self._separator:
                return self._produce(
                    start + 1, quote, after + 1 - start, False, False, escaped
                )
            if following == NEWLINE:
                return self._produce(
                    start + 1, quote, after + 1 - start, True, False, escaped
                )
            if following == CARRIAGE_RETURN:
                if after + 1 == end and not at_eof:
                    return self._need_more(quote - start, escaped)
                if after + 1 < end and data[after + 1] == NEWLINE:
                    return self._produce(
                        start + 1, quote, after + 2 - start, True, False, escaped
                    )

            if not self.lazy_quotes:
                raise UnescapedQuote(self._line_at(quote), self._column(quote))
            pos = after

    def _scan_unquoted(self, data, start, end, at_eof):
        scan_from = start + self._resume
        separator_at = data.find(self._separator, scan_from, end)
        newline_end = end if separator_at < 0 else separator_at
        newline_at = data.find(NEWLINE, scan_from, newline_end)

        empty = False
        if newline_at >= 0:
            field_end = newline_at
            if field_end > start and data[field_end - 1] == CARRIAGE_RETURN:
                field_end -= 1
            consumed = newline_at + 1 - start
            end_of_record = True
            empty = self._eor and field_end == start
        elif separator_at >= 0:
            field_end = separator_at
            consumed = separator_at + 1 - start
            end_of_record = False
        elif at_eof:
            field_end = end
            consumed = end - start
            end_of_record = True
        else:
            return self._need_more(end - start)

        if self.quoted and not self.lazy_quotes:
            quote = data.find(QUOTE, start, field_end)
            if quote >= 0:
                raise UnescapedQuote(self._line, self._column(quote))

        field_start = start
        if self.trim:
            field_start, field_end = trim_bounds(data, start, field_end)
        return self._produce(field_start, field_end, consumed, end_of_record, empty)

    def _produce(
        self, field_start, field_end, consumed, end_of_record, empty, escaped=0
    ):
        line = self._line
        # Line breaks are counted before the field is unescaped in place
        self._consume(consumed)
        if escaped:
            field_end = self._unescape(field_start, field_end)
        result = FieldResult(
            view=memoryview(self.buffer.data)[field_start:field_end],
            end_of_record=end_of_record,
            empty_line=empty,
            line=line,
        )
        self._eor = end_of_record
        self._empty = empty
        self._resume = 0
        self._escaped = 0
        return result

    def _unescape(self, start, end):
        """
        Replace doubled quotes in data[start:end] by single ones, left to
        right, the same way they were paired when scanning.

        :returns: The new end of the field.
        """
        data = self.buffer.data
        unescaped = bytes(data[start:end]).replace(b'""', b'"')
        new_end = start + len(unescaped)
        data[start:new_end] = unescaped
        return new_end

    def _consume(self, n):
        """
        Consume n buffered bytes, counting the line breaks among them.
        """
        buffer = self.buffer
        data = buffer.data
        start = buffer.start
        newlines = data.count(b"\n", start, start + n)
        if newlines:
            self._line += newlines
            last = data.rfind(b"\n", start, start + n)
            self._line_offset = buffer.offset + (last - start) + 1
        buffer.consume(n)

    def _line_at(self, pos):
        buffer = self.buffer
        return self._line + buffer.data.count(b"\n", buffer.start, pos)

    def _column(self, pos):
        """
        :returns: The 1-based column of the buffered byte at pos.
        """
        buffer = self.buffer
        last = buffer.data.rfind(b"\n", buffer.start, pos)
        if last >= 0:
            return pos - last
        return buffer.offset + (pos - buffer.start) - self._line_offset + 1
