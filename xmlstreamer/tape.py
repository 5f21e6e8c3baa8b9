"""
Tape: a byte buffer for streaming operations.

Data is written to the end of the buffer and consumed from the beginning, so a feed of any size can be handed
to the tokenizer in bounded slices.
"""


class Tape:
    """
    Allows writing to end of a byte buffer while maintaining the read pointer accurately.
    The read operation actually removes the bytes read from the buffer.
    """

    def __init__(self, initial_value: bytes = b"") -> None:
        self._buffer = bytearray(initial_value)

    def read(self, size: int = None) -> bytes:
        """Read and consume data from the beginning of the buffer.

        Args:
            size: Number of bytes to read. If None, reads entire buffer. (default: None)

        Returns:
            The bytes that were read from the buffer. The read portion is removed from the buffer.

        Examples:
            >>> tape = Tape(b"hello world")
            >>> tape.read(5)
            b'hello'
            >>> tape.read()
            b' world'
        """
        if size:
            result = bytes(self._buffer[0:size])
            del self._buffer[0:size]
        else:
            result = bytes(self._buffer)
            self._buffer.clear()
        return result

    def write(self, data: bytes) -> int:
        """Write data to the end of the tape buffer.

        Returns:
            The number of bytes written
        """
        self._buffer += data
        return len(data)

    def clear(self) -> None:
        self._buffer.clear()

    def __len__(self) -> int:
        return len(self._buffer)

    def __bytes__(self) -> bytes:
        return bytes(self._buffer)
