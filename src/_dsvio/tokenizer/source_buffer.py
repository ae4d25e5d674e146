from _dsvio.tokenizer.errors import BufferOverflow


class SourceBuffer:
    """
    Lookahead buffer over a byte stream.

    Unread bytes live in data[start:end]. The buffer starts at buffer_size
    bytes and doubles on demand, but never beyond max_size, so a single
    field can not make memory usage grow without bound.

    The buffer is never resized in place: growing allocates a new bytearray,
    and compaction only rewrites bytes. Memoryviews handed out over data
    stay valid objects, although their contents change once the bytes they
    cover have been consumed and the buffer is refilled.
    """

    def __init__(self, stream, buffer_size=4096, max_size=64 * 1024):
        """
        :param stream: A binary stream, read with readinto when available,
            otherwise with read.
        :param buffer_size: The initial size of the buffer.
        :param max_size: The hard limit on the size of the buffer.
        """
        if buffer_size <= 0 or buffer_size > max_size:
            raise ValueError(
                "buffer_size has to be positive and at most max_size, "
                f"got {buffer_size} and {max_size}"
            )
        self.stream = stream
        self.max_size = max_size
        self.data = bytearray(buffer_size)
        self.start = 0
        self.end = 0
        self.offset = 0
        self.eof = False

    @property
    def unread(self):
        return self.end - self.start

    def view(self):
        return memoryview(self.data)[self.start : self.end]

    def consume(self, n):
        """
        Mark the next n unread bytes as read.
        """
        if n > self.unread:
            raise ValueError(f"Cannot consume {n} bytes, only {self.unread} unread")
        self.start += n
        self.offset += n

    def compact(self):
        """
        Slide the unread bytes to the start of the buffer.
        """
        if self.start == 0:
            return
        unread = self.unread
        self.data[0:unread] = self.data[self.start : self.end]
        self.start = 0
        self.end = unread

    def grow(self):
        new_size = min(len(self.data) * 2, self.max_size)
        if new_size <= len(self.data):
            raise BufferOverflow(len(self.data) + 1, self.max_size)
        new_data = bytearray(new_size)
        new_data[0 : self.end] = self.data[0 : self.end]
        self.data = new_data

    def ensure(self, n):
        """
        Read from the stream until at least n bytes are unread or the stream
        is exhausted.

        :raises BufferOverflow: If n is larger than the maximum buffer size.
        """
        if n > self.max_size:
            raise BufferOverflow(n, self.max_size)
        while self.unread < n and not self.eof:
            if self.end == len(self.data):
                if self.start > 0:
                    self.compact()
                else:
                    self.grow()
            self.fill()

    def fill(self):
        """
        Do one read from the stream into the free space at the end of the
        buffer.

        :returns: The number of bytes read, 0 means the stream is exhausted.
        """
        free = len(self.data) - self.end
        readinto = getattr(self.stream, "readinto", None)
        if readinto is not None:
            read = readinto(memoryview(self.data)[self.end :])
        else:
            chunk = self.stream.read(free)
            read = len(chunk)
            self.data[self.end : self.end + read] = chunk
        if not read:
            self.eof = True
            return 0
        self.end += read
        return read
