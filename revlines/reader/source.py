import os


class ByteSource:
    """Random access to the bytes of a file, read from the end towards the start"""

    name: str = ""

    def length(self) -> int:
        raise NotImplementedError

    def readBlock(self, endOffset: int, maxLen: int) -> bytes:
        """Return up to `maxLen` bytes ending at `endOffset` (exclusive),
        fewer only at the start of the file"""
        raise NotImplementedError

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.name}>"


class FileByteSource(ByteSource):
    def __init__(self, path):
        self.name = os.fspath(path)
        self.fh = open(path, "rb")
        self.size = os.fstat(self.fh.fileno()).st_size

    def length(self) -> int:
        return self.size

    def readBlock(self, endOffset: int, maxLen: int) -> bytes:
        start = max(0, endOffset - maxLen)
        self.fh.seek(start)
        return self.fh.read(endOffset - start)

    def close(self) -> None:
        self.fh.close()


class BytesByteSource(ByteSource):
    def __init__(self, data: bytes, name="<bytes>"):
        self.name = name
        self.data = bytes(data)

    def length(self) -> int:
        return len(self.data)

    def readBlock(self, endOffset: int, maxLen: int) -> bytes:
        return self.data[max(0, endOffset - maxLen) : endOffset]
