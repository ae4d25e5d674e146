QUOTE = ord('"')
NEWLINE = ord("\n")
CARRIAGE_RETURN = ord("\r")

COMMA = b","
SEMICOLON = b";"
TAB = b"\t"
PIPE = b"|"
COLON = b":"

SEPARATOR_CANDIDATES = (COMMA, SEMICOLON, TAB, PIPE, COLON)

_WHITESPACE = frozenset(b" \t\n\r\x0b\x0c")


def guess_separator(data, default):
    """
    Guess the separator of some delimited text by counting each of the
    candidates (comma, semicolon, tab, pipe and colon).

    :param data: A bytes-like sample, typically the first buffered chunk.
    :param default: The separator returned when no candidate occurs, or
        when several candidates share the highest count and default is not
        among them.
    :returns: The candidate with the highest count, or default.

    >>> guess_separator(b"a,b;c\\td:e|f;g", b",")
    b';'
    """
    data = bytes(data)
    counts = [0] * len(SEPARATOR_CANDIDATES)
    for i, candidate in enumerate(SEPARATOR_CANDIDATES):
        counts[i] = data.count(candidate)

    highest = max(counts)
    if highest == 0:
        return default
    winners = [
        candidate
        for candidate, count in zip(SEPARATOR_CANDIDATES, counts)
        if count == highest
    ]
    if default in winners or len(winners) > 1:
        return default
    return winners[0]


def trim_bounds(data, start, end):
    """
    Find the bounds of data[start:end] without leading and trailing
    ascii whitespace.

    :returns: The pair (start, end) of the trimmed slice.
    """
    while start < end and data[start] in _WHITESPACE:
        start += 1
    while end > start and data[end - 1] in _WHITESPACE:
        end -= 1
    return start, end


def trim(field):
    """
    Strip leading and trailing ascii whitespace from a field, without
    copying when given a memoryview.
    """
    start, end = trim_bounds(field, 0, len(field))
    return field[start:end]
