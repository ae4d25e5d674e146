"""
Decoding of fields into typed values. Decoding is a convenience on top of
the tokenizer: it only reads the fields produced by FieldTokenizer.advance.

The supported types form a closed table, see DECODERS. Other types can be
decoded by implementing TextDecodable, that is, a from_text classmethod
taking the bytes of the field.
"""

from abc import ABC, abstractmethod

import numpy as np

from _dsvio.tokenizer.errors import DsvError
from _dsvio.tokenizer.field import FieldResult


class UnsupportedType(DsvError, TypeError):
    """
    Raised when decoding into a type which has no decoder.
    """

    pass


class DecodingError(DsvError, ValueError):
    """
    Raised when the text of a field is not a valid value of the requested
    type.
    """

    def __init__(self, message, line=None):
        self.line = line
        if line is not None:
            message = f"{message} at line {line}"
        super().__init__(message)


class FieldCountError(DsvError):
    """
    Raised by scan_line when a record does not have the expected number of
    fields.
    """

    def __init__(self, want, got, line):
        self.want = want
        self.got = got
        self.line = line
        super().__init__(
            f"Unexpected number of fields at line {line}: want {want}, got {got}"
        )


class TextDecodable(ABC):
    """
    Any class with a from_text classmethod, taking the bytes of a field and
    returning an instance, can be decoded into.
    """

    @classmethod
    @abstractmethod
    def from_text(cls, data):
        pass

    @classmethod
    def __subclasshook__(cls, subclass):
        if cls is TextDecodable:
            if any("from_text" in base.__dict__ for base in subclass.__mro__):
                return True
        return NotImplemented


_TRUE = frozenset([b"1", b"t", b"T", b"TRUE", b"true", b"True"])
_FALSE = frozenset([b"0", b"f", b"F", b"FALSE", b"false", b"False"])


def decode_text(data):
    return str(data, "utf-8")


def decode_bytes(data):
    return bytes(data)


def number_text(data):
    """
    The bytes of a number field. Unlike int and float, surrounding
    whitespace and underscores between digits are rejected.
    """
    data = bytes(data)
    if data != data.strip() or b"_" in data:
        raise ValueError(f"Invalid number {data!r}")
    return data


def decode_int(data):
    return int(number_text(data), 10)


def decode_float(data):
    return float(number_text(data))


def decode_bool(data):
    data = bytes(data)
    if data in _TRUE:
        return True
    if data in _FALSE:
        return False
    raise ValueError(f"Invalid boolean {data!r}")


def numpy_integer_decoder(dtype):
    info = np.iinfo(dtype)

    def decoder(data):
        value = decode_int(data)
        if not info.min <= value <= info.max:
            raise ValueError(f"{value} is out of range for {info.dtype}")
        return dtype(value)

    return decoder


def numpy_float_decoder(dtype):
    def decoder(data):
        return dtype(decode_float(data))

    return decoder


DECODERS = {
    str: decode_text,
    bytes: decode_bytes,
    int: decode_int,
    bool: decode_bool,
    float: decode_float,
    np.bool_: lambda data: np.bool_(decode_bool(data)),
    np.float32: numpy_float_decoder(np.float32),
    np.float64: numpy_float_decoder(np.float64),
}
DECODERS.update(
    {
        dtype: numpy_integer_decoder(dtype)
        for dtype in (
            np.int8,
            np.int16,
            np.int32,
            np.int64,
            np.uint8,
            np.uint16,
            np.uint32,
            np.uint64,
        )
    }
)


def find_decoder(typ):
    decoder = DECODERS.get(typ)
    if decoder is not None:
        return decoder
    if isinstance(typ, type) and issubclass(typ, TextDecodable):
        return lambda data: typ.from_text(bytes(data))
    raise UnsupportedType(f"Unsupported type {typ!r}")


def decode(field, typ, line=None):
    """
    Decode a field into a value of the given type.

    :param field: A FieldResult, or the bytes of a field.
    :param typ: The type of the returned value, see DECODERS and
        TextDecodable.
    :param line: Line number used in error messages, defaults to the line
        of the FieldResult.
    :raises UnsupportedType: If there is no decoder for typ.
    :raises DecodingError: If the field is not a valid typ value.
    """
    if isinstance(field, FieldResult):
        if line is None:
            line = field.line
        field = field.view
    decoder = find_decoder(typ)
    try:
        return decoder(field)
    except ValueError as err:
        name = getattr(typ, "__name__", repr(typ))
        message = f"Could not decode {bytes(field)!r} as {name}"
        raise DecodingError(message, line) from err


def scan_value(tokenizer, typ):
    """
    Advance the tokenizer and decode the field.

    :param typ: The type to decode into, None skips the field.
    :returns: The decoded value, None at the end of the stream.
    """
    field = tokenizer.advance()
    if field is None or typ is None:
        return None
    return decode(field, typ)


def scan_line(tokenizer, *types):
    """
    Decode all the fields of the next record, one type for each field.
    Empty lines and line comments before the record are skipped.

    >>> import io
    >>> from _dsvio.tokenizer import FieldTokenizer
    >>> scan_line(FieldTokenizer(io.BytesIO(b"a,1,true\\n")), str, int, bool)
    ['a', 1, True]

    :param types: The type of each field, None skips the field.
    :returns: The list of decoded values, None at the end of the stream.
    :raises FieldCountError: If the record does not have len(types) fields,
        in which case the rest of the record is consumed.
    """
    values = []
    for i, typ in enumerate(types):
        field = tokenizer.advance()
        if i == 0:
            while field is not None and field.empty_line:
                field = tokenizer.advance()
            if field is None:
                return None
        values.append(None if typ is None else decode(field, typ))

        if field.end_of_record and i < len(types) - 1:
            raise FieldCountError(len(types), i + 1, field.line)
        if not field.end_of_record and i == len(types) - 1:
            line = field.line
            got = len(types)
            for field in tokenizer:
                got += 1
                if field.end_of_record:
                    break
            raise FieldCountError(len(types), got, line)
    return values
