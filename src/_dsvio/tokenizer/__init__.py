"""
In this module, a tokenizer takes a byte stream of delimited text and
produces its fields one at a time. Records are never materialized: a field
tells whether it ended its record (was terminated by a line break) and the
caller assembles records as needed.

Fields are views into the buffer of the tokenizer, so producing a field
does not copy. The view is only valid until the next call to advance,
callers that keep fields around have to copy them (see deep_copy).

The buffer grows on demand, doubling its size, up to a maximum size. A
field that does not fit raises BufferOverflow, which bounds the memory used
by a huge line or an unterminated quoted field.

Errors are fatal, the tokenizer does not attempt to resynchronize after
a malformed field.
"""

from .common import (
    COLON,
    COMMA,
    PIPE,
    SEMICOLON,
    TAB,
    guess_separator,
    trim,
)
from .errors import (
    BufferOverflow,
    DsvError,
    NonTerminatedQuote,
    TokenizationError,
    UnescapedQuote,
)
from .field import FieldResult, deep_copy
from .field_tokenizer import FieldTokenizer
from .source_buffer import SourceBuffer

__all__ = [
    "BufferOverflow",
    "COLON",
    "COMMA",
    "DsvError",
    "FieldResult",
    "FieldTokenizer",
    "NonTerminatedQuote",
    "PIPE",
    "SEMICOLON",
    "SourceBuffer",
    "TAB",
    "TokenizationError",
    "UnescapedQuote",
    "deep_copy",
    "guess_separator",
    "trim",
]
