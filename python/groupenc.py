"""
Name: groupenc
Description: encode a byte stream as fixed-width groups of alphabet symbols
License: perl

A base2^k encoder works on chunks of lcm(k, 8) / 8 bytes: that is the
smallest number of bytes whose bits split evenly into k-bit groups.
    base2  ->  k=1, lcm(1, 8) =  8 -> 1 byte  -> 8 symbols
    base8  ->  k=3, lcm(3, 8) = 24 -> 3 bytes -> 8 symbols
    base16 ->  k=4, lcm(4, 8) =  8 -> 1 byte  -> 2 symbols
    base64 ->  k=6, lcm(6, 8) = 24 -> 3 bytes -> 4 symbols

A short final chunk is zero-filled, and the symbols that came only from
the fill are replaced by the pad character. For example {0, 0} encodes
as "000000==" in base8, and {0} as "000=====".
"""

import io
import math

BITS_PER_BYTE = 8

BASE64_ALPHABET = ("ABCDEFGHIJKLMNOPQRSTUVWXYZ"
                   "abcdefghijklmnopqrstuvwxyz"
                   "0123456789"
                   "+/")
MIME_LINE_WIDTH = 76


class ConfigError(ValueError):
    """Raised when an encoder is built from an unusable configuration."""


class GroupEncoder:
    """
    Repacks bytes into k-bit symbols, padding the final chunk and
    optionally wrapping lines after a fixed number of symbols.
    """

    def __init__(self, bit_width: int, alphabet, pad_symbol=None, line_wrap=None):
        if isinstance(bit_width, bool) or not isinstance(bit_width, int):
            raise ConfigError(f"bit width must be an integer, not {bit_width!r}")
        if bit_width < 1:
            raise ConfigError(f"bit width must be positive, not {bit_width}")

        if not isinstance(alphabet, str):
            try:
                symbols = list(alphabet)
            except TypeError:
                raise ConfigError(f"alphabet must be a sequence of symbols, not {alphabet!r}") from None
            if not all(isinstance(s, str) and len(s) == 1 for s in symbols):
                raise ConfigError(f"alphabet symbols must be single characters: {alphabet!r}")
            alphabet = ''.join(symbols)
        if len(alphabet) != 1 << bit_width:
            raise ConfigError(
                f"a {bit_width}-bit alphabet needs {1 << bit_width} symbols, got {len(alphabet)}")
        if len(set(alphabet)) != len(alphabet):
            raise ConfigError(f"alphabet {alphabet!r} repeats a symbol")

        if pad_symbol is not None:
            if not isinstance(pad_symbol, str) or len(pad_symbol) != 1:
                raise ConfigError(f"pad symbol must be a single character, not {pad_symbol!r}")
            if pad_symbol in alphabet:
                raise ConfigError(f"pad symbol {pad_symbol!r} is part of the alphabet")

        if line_wrap is not None:
            if isinstance(line_wrap, bool) or not isinstance(line_wrap, int) or line_wrap < 1:
                raise ConfigError(f"line wrap must be a positive integer, not {line_wrap!r}")

        self._bit_width = bit_width
        self._alphabet = alphabet
        self._pad_symbol = pad_symbol
        self._line_wrap = line_wrap

        chunk_bits = bit_width * BITS_PER_BYTE // math.gcd(bit_width, BITS_PER_BYTE)
        self._chunk_bytes = chunk_bits // BITS_PER_BYTE
        self._symbols_per_chunk = chunk_bits // bit_width

    def __repr__(self):
        return (f"GroupEncoder(bit_width={self._bit_width}, alphabet={self._alphabet!r}, "
                f"pad_symbol={self._pad_symbol!r}, line_wrap={self._line_wrap!r})")

    @property
    def bit_width(self):
        return self._bit_width

    @property
    def alphabet(self):
        return self._alphabet

    @property
    def pad_symbol(self):
        return self._pad_symbol

    @property
    def line_wrap(self):
        return self._line_wrap

    @property
    def chunk_bytes(self):
        return self._chunk_bytes

    @property
    def symbols_per_chunk(self):
        return self._symbols_per_chunk

    def encode_chunk(self, chunk: bytes, count: int) -> str:
        """
        Encodes one chunk. Only the first `count` bytes of `chunk` are real
        input; anything after them is treated as zero fill.
        """
        if not 0 < count <= self._chunk_bytes:
            raise ValueError(f"chunk holds 1 to {self._chunk_bytes} bytes, not {count}")

        k = self._bit_width
        width = self._chunk_bytes * BITS_PER_BYTE
        # Zero-fill the unread positions, then pack most significant byte first.
        buf = bytes(chunk[:count]).ljust(self._chunk_bytes, b'\0')
        bits = int.from_bytes(buf, 'big')

        real = -(-count * BITS_PER_BYTE // k)
        mask = (1 << k) - 1
        symbols = []
        for j in range(self._symbols_per_chunk):
            if j >= real:
                if self._pad_symbol is None:
                    break
                symbols.append(self._pad_symbol)
                continue
            idx = (bits >> (width - (j + 1) * k)) & mask
            symbols.append(self._alphabet[idx])
        return ''.join(symbols)

    def _read_chunk(self, source):
        """Reads up to chunk_bytes bytes; a short result means end of stream."""
        buf = b''
        while len(buf) < self._chunk_bytes:
            data = source.read(self._chunk_bytes - len(buf))
            if data is None:
                raise IOError("source has no data available (non-blocking read)")
            if not data:
                break
            buf += data
        return buf

    def iter_encode(self, source):
        """
        Yields the encoded text chunk by chunk, newlines included. The
        source only needs a read(n) method returning bytes.
        """
        column = 0
        while True:
            chunk = self._read_chunk(source)
            nread = len(chunk)
            if nread == 0:
                break

            symbols = self.encode_chunk(chunk, nread)
            if self._line_wrap is None:
                out = symbols
            else:
                pieces = []
                for symbol in symbols:
                    pieces.append(symbol)
                    column += 1
                    if column == self._line_wrap:
                        pieces.append('\n')
                        column = 0
                out = ''.join(pieces)
            yield out

            if nread < self._chunk_bytes:
                break

        if column != 0:
            yield '\n'

    def encode(self, source, sink):
        """
        Encodes everything readable from `source` and writes it to `sink`.

        The sink is flushed after each chunk when it can be. Errors from
        either side propagate; the chunk being worked on is not written.
        Returns the number of symbols written, not counting newlines.
        """
        flush = getattr(sink, 'flush', None)
        total = 0
        for text in self.iter_encode(source):
            sink.write(text)
            if flush is not None:
                flush()
            total += len(text) - text.count('\n')
        return total

    def encode_bytes(self, data) -> str:
        """Encodes an in-memory bytes-like value and returns the text."""
        return ''.join(self.iter_encode(io.BytesIO(bytes(data))))


# name -> (bit width, alphabet, pad symbol, default line wrap)
ENCODINGS = {
    'base2': (1, "01", None, None),
    'base8': (3, "01234567", '=', None),
    'base16': (4, "0123456789abcdef", None, None),
    'base64': (6, BASE64_ALPHABET, '=', MIME_LINE_WIDTH),
}

_DEFAULT = object()


def get_encoder(name, line_wrap=_DEFAULT):
    """
    Returns a new GroupEncoder for one of the ENCODINGS presets. Passing
    line_wrap overrides the preset's width; 0 or None turns wrapping off.
    """
    try:
        bit_width, alphabet, pad_symbol, wrap = ENCODINGS[name]
    except KeyError:
        raise ConfigError(f"unknown encoding '{name}'") from None
    if line_wrap is not _DEFAULT:
        wrap = line_wrap or None
    return GroupEncoder(bit_width, alphabet, pad_symbol=pad_symbol, line_wrap=wrap)
