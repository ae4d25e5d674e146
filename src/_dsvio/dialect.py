import dataclasses
from dataclasses import dataclass
from enum import Enum, unique

_FORBIDDEN = (b'"', b"\r", b"\n")


@unique
class Terminator(Enum):
    LF = b"\n"
    CRLF = b"\r\n"


def as_byte(value, name):
    """
    Normalize a single byte given as str, bytes or int to bytes of length 1.
    """
    if isinstance(value, str):
        try:
            value = value.encode("latin-1")
        except UnicodeEncodeError as err:
            raise ValueError(f"{name} has to be a single byte, got {value!r}") from err
    elif isinstance(value, int) and not isinstance(value, bool):
        if not 0 <= value <= 255:
            raise ValueError(f"{name} has to be a single byte, got {value!r}")
        value = bytes([value])
    elif isinstance(value, (bytes, bytearray)):
        value = bytes(value)
    else:
        raise ValueError(f"{name} has to be a single byte, got {value!r}")
    if len(value) != 1:
        raise ValueError(f"{name} has to be a single byte, got {value!r}")
    return value


@dataclass(frozen=True)
class Dialect:
    """
    Settings shared by FieldTokenizer and Writer.

    :param separator: The byte separating fields within a record.
    :param quoted: Whether fields may be quoted (when they contain the
        separator, a quote or a line break).
    :param lazy_quotes: Accept unescaped quotes inside fields as literal
        content instead of raising UnescapedQuote.
    :param trim: Strip whitespace around unquoted fields.
    :param comment: Byte marking the start of a line comment, None
        disables comments.
    :param guess: Guess the separator from the start of the stream.
    :param terminator: Line terminator used when writing.
    :param buffer_size: Initial size of the read/write buffer.
    :param max_buffer_size: Largest lookahead the tokenizer may allocate.
    """

    separator: bytes = b","
    quoted: bool = True
    lazy_quotes: bool = False
    trim: bool = False
    comment: bytes = None
    guess: bool = False
    terminator: Terminator = Terminator.LF
    buffer_size: int = 4096
    max_buffer_size: int = 64 * 1024

    def __post_init__(self):
        separator = as_byte(self.separator, "separator")
        if separator in _FORBIDDEN:
            raise ValueError(f"separator cannot be {separator!r}")
        object.__setattr__(self, "separator", separator)

        if self.comment is not None:
            comment = as_byte(self.comment, "comment")
            if comment in _FORBIDDEN:
                raise ValueError(f"comment cannot be {comment!r}")
            if comment == separator:
                raise ValueError("comment and separator have to differ")
            object.__setattr__(self, "comment", comment)

        if not isinstance(self.terminator, Terminator):
            object.__setattr__(self, "terminator", Terminator(self.terminator))

        if self.buffer_size <= 0 or self.buffer_size > self.max_buffer_size:
            raise ValueError(
                "buffer_size has to be positive and at most max_buffer_size, "
                f"got {self.buffer_size} and {self.max_buffer_size}"
            )

    @property
    def crlf(self):
        return self.terminator == Terminator.CRLF

    def replace(self, **changes):
        return dataclasses.replace(self, **changes)


def make_dialect(dialect=None, **options):
    """
    :returns: The given dialect (or the default one) with the given options
        replaced.
    """
    if dialect is None:
        dialect = Dialect()
    if options:
        dialect = dialect.replace(**options)
    return dialect
