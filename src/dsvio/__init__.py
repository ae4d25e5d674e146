import dsvio.version
from _dsvio.decoding import (
    DecodingError,
    FieldCountError,
    TextDecodable,
    UnsupportedType,
    decode,
    scan_line,
    scan_value,
)
from _dsvio.dialect import Dialect, Terminator
from _dsvio.files import open_sink, open_source
from _dsvio.reading import iter_records, lazy_read, read, read_record
from _dsvio.tokenizer import (
    COLON,
    COMMA,
    PIPE,
    SEMICOLON,
    TAB,
    BufferOverflow,
    DsvError,
    FieldResult,
    FieldTokenizer,
    NonTerminatedQuote,
    SourceBuffer,
    TokenizationError,
    UnescapedQuote,
    deep_copy,
    guess_separator,
    trim,
)
from _dsvio.writing import AmbiguousFieldWarning, Writer, write

__version__ = dsvio.version.version

__all__ = [
    "AmbiguousFieldWarning",
    "BufferOverflow",
    "COLON",
    "COMMA",
    "DecodingError",
    "Dialect",
    "DsvError",
    "FieldCountError",
    "FieldResult",
    "FieldTokenizer",
    "NonTerminatedQuote",
    "PIPE",
    "SEMICOLON",
    "SourceBuffer",
    "TAB",
    "Terminator",
    "TextDecodable",
    "TokenizationError",
    "UnescapedQuote",
    "UnsupportedType",
    "Writer",
    "decode",
    "deep_copy",
    "guess_separator",
    "iter_records",
    "lazy_read",
    "open_sink",
    "open_source",
    "read",
    "read_record",
    "scan_line",
    "scan_value",
    "trim",
    "write",
]
