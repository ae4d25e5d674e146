from dataclasses import dataclass


@dataclass(frozen=True)
class FieldResult:
    """
    A field produced by FieldTokenizer.advance.

    view is borrowed from the buffer of the tokenizer and only valid until
    the next call to advance. Use bytes() or text() to keep the value.
    """

    view: memoryview
    end_of_record: bool
    empty_line: bool
    line: int

    def bytes(self):
        return bytes(self.view)

    def text(self, encoding="utf-8"):
        return str(self.view, encoding)

    def __len__(self):
        return len(self.view)


def deep_copy(record):
    """
    Copy every field of a record, so that it outlives the buffer the fields
    were borrowed from.

    :param record: A sequence of memoryviews, bytes or FieldResults.
    :returns: A list of bytes.
    """
    return [
        field.bytes() if isinstance(field, FieldResult) else bytes(field)
        for field in record
    ]
