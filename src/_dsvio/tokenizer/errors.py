class DsvError(Exception):
    """
    Base class for all errors raised by dsvio.
    """

    pass


class TokenizationError(DsvError):
    """
    A tokenizer raises a TokenizationError when the stream can not be split
    into fields. Tokenization errors are fatal: the tokenizer does not try to
    resynchronize and re-raises the same error on every following advance.
    """

    pass


class BufferOverflow(TokenizationError):
    """
    Raised when resolving the current field would need more lookahead than
    the maximum buffer size allows, typically a huge line or an unterminated
    quoted field.
    """

    def __init__(self, size, max_size):
        self.size = size
        self.max_size = max_size
        super().__init__(
            f"Field requires a buffer of {size} bytes, "
            f"exceeding the maximum of {max_size} bytes"
        )


class UnescapedQuote(TokenizationError):
    """
    Raised on a quote character which is neither doubled nor closing a
    quoted field, unless lazy quotes are enabled.
    """

    def __init__(self, line, column):
        self.line = line
        self.column = column
        super().__init__(f'Unescaped " character at line {line}, column {column}')


class NonTerminatedQuote(TokenizationError):
    """
    Raised when the stream ends inside a quoted field.
    """

    def __init__(self, line):
        self.line = line
        super().__init__(f"Non-terminated quoted field starting at line {line}")
