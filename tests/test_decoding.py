import io
from fractions import Fraction

import hypothesis.strategies as st
import numpy as np
import pytest
from hypothesis import given

from _dsvio.decoding import (
    DecodingError,
    FieldCountError,
    TextDecodable,
    UnsupportedType,
    decode,
    scan_line,
    scan_value,
)
from _dsvio.tokenizer import FieldTokenizer


def make_tokenizer(contents, **options):
    return FieldTokenizer(io.BytesIO(contents), **options)


class Point:
    def __init__(self, x, y):
        self.x = x
        self.y = y

    @classmethod
    def from_text(cls, data):
        x, y = data.split(b"/")
        return cls(int(x), int(y))


@pytest.mark.parametrize(
    "text, typ, expected",
    [
        (b"abc", str, "abc"),
        ("é".encode(), str, "é"),
        (b"abc", bytes, b"abc"),
        (b"-12", int, -12),
        (b"+7", int, 7),
        (b"2.5", float, 2.5),
        (b"1e3", float, 1000.0),
        (b"true", bool, True),
        (b"T", bool, True),
        (b"1", bool, True),
        (b"False", bool, False),
        (b"0", bool, False),
        (b"127", np.int8, np.int8(127)),
        (b"255", np.uint8, np.uint8(255)),
        (b"-5", np.int64, np.int64(-5)),
        (b"1.5", np.float32, np.float32(1.5)),
        (b"t", np.bool_, np.bool_(True)),
    ],
)
def test_decode(text, typ, expected):
    value = decode(text, typ)
    assert value == expected
    assert type(value) is type(expected)


@pytest.mark.parametrize(
    "text, typ",
    [
        (b"abc", int),
        (b"1.5", int),
        (b"yes", bool),
        (b"", float),
        (b"128", np.int8),
        (b"-1", np.uint32),
        (b"\xff", str),
        (b" 1", int),
        (b"1\n", int),
        (b"1_000", int),
        (b"1_0.5", float),
        (b" 2.5 ", float),
        (b"1_000", np.int64),
    ],
)
def test_decode_invalid(text, typ):
    with pytest.raises(DecodingError):
        decode(text, typ)


@given(st.integers(min_value=-(2**31), max_value=2**31 - 1))
def test_decode_int32(value):
    assert decode(str(value).encode(), np.int32) == value


def test_unsupported_type():
    with pytest.raises(UnsupportedType):
        decode(b"1/2", Fraction)
    with pytest.raises(TypeError):
        decode(b"1", "int")


def test_text_decodable():
    assert issubclass(Point, TextDecodable)
    point = decode(memoryview(b"1/2"), Point)
    assert (point.x, point.y) == (1, 2)


def test_decoding_error_has_line():
    tokenizer = make_tokenizer(b"1\nx\n")
    assert scan_value(tokenizer, int) == 1
    with pytest.raises(DecodingError, match="line 2") as excinfo:
        scan_value(tokenizer, int)
    assert excinfo.value.line == 2


def test_scan_value():
    tokenizer = make_tokenizer(b"a,2")
    assert scan_value(tokenizer, None) is None
    assert scan_value(tokenizer, int) == 2
    assert scan_value(tokenizer, int) is None


def test_scan_line():
    tokenizer = make_tokenizer(b"# header\n\na,1,true,2.5\nb,2,false,0\n", comment="#")
    assert scan_line(tokenizer, str, int, bool, float) == ["a", 1, True, 2.5]
    assert scan_line(tokenizer, str, None, bool, None) == ["b", None, False, None]
    assert scan_line(tokenizer, str, int, bool, float) is None


def test_scan_line_too_few_fields():
    tokenizer = make_tokenizer(b"a,1\nb,2,3\n")
    with pytest.raises(FieldCountError) as excinfo:
        scan_line(tokenizer, str, int, int)
    assert (excinfo.value.want, excinfo.value.got) == (3, 2)
    assert scan_line(tokenizer, str, int, int) == ["b", 2, 3]


def test_scan_line_too_many_fields():
    tokenizer = make_tokenizer(b"a,1,2,3\nb,2\n")
    with pytest.raises(FieldCountError, match="want 2, got 4"):
        scan_line(tokenizer, str, int)
    assert scan_line(tokenizer, str, int) == ["b", 2]
