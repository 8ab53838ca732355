import struct

from itemsdat.core.errors import OutOfBounds

BytesLike = bytes | bytearray | memoryview


class Buffer:
    def __init__(self, data: BytesLike = b"", endian: str = "<") -> None:
        if endian not in ("<", ">", "="):
            raise ValueError("endian must be '<', '>' or '='")

        self.buffer = bytes(data)
        self.rpos = 0
        self.endian = endian

    def _check(self, n: int) -> None:
        if n < 0:
            raise ValueError(f"negative length {n}")
        if self.rpos + n > len(self.buffer):
            raise OutOfBounds(self.rpos, n, len(self.buffer))

    def _read_raw(self, n: int) -> bytes:
        self._check(n)
        data = self.buffer[self.rpos : self.rpos + n]
        self.rpos += n

        return data

    def read_fmt(self, fmt: str) -> int:
        full_fmt = self.endian + fmt
        size = struct.calcsize(full_fmt)
        self._check(size)
        (val,) = struct.unpack_from(full_fmt, self.buffer, self.rpos)
        self.rpos += size

        return val

    def read_u8(self) -> int:
        return self.read_fmt("B")

    def read_i8(self) -> int:
        return self.read_fmt("b")

    def read_u16(self) -> int:
        return self.read_fmt("H")

    def read_i16(self) -> int:
        return self.read_fmt("h")

    def read_u32(self) -> int:
        return self.read_fmt("I")

    def read_i32(self) -> int:
        return self.read_fmt("i")

    def read_bytes(self, n: int) -> bytes:
        return self._read_raw(n)

    def read_pascal_bytes(self, prefix_fmt: str = "H") -> bytes:
        length = self.read_fmt(prefix_fmt)
        return self.read_bytes(length)

    def skip(self, n: int) -> None:
        self._check(n)
        self.rpos += n

    def peek(self, n: int) -> bytes:
        end = min(self.rpos + n, len(self.buffer))
        return self.buffer[self.rpos : end]

    def tell(self) -> int:
        return self.rpos

    def remaining(self) -> int:
        return max(0, len(self.buffer) - self.rpos)

    def __len__(self) -> int:
        return len(self.buffer)
