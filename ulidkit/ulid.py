from __future__ import annotations

from datetime import datetime, timedelta, timezone
from functools import total_ordering
from typing import Callable, Union

import orjson as json

from ulidkit.exceptions import InvalidCharacter, InvalidLength

# Crockford's base32
ENCODING = '0123456789ABCDEFGHJKMNPQRSTVWXYZ'
INVALID = 0xFF

TIMESTAMP_LEN = 6
ENTROPY_LEN = 10
BYTES_LEN = TIMESTAMP_LEN + ENTROPY_LEN
STRING_LEN = 26
MAX_TIMESTAMP = (1 << 48) - 1

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

Text = Union[str, bytes, bytearray, memoryview]


def _decoding_table() -> bytes:
    """byte value --> 5-bit value, lowercase letters decode like uppercase"""
    table = bytearray([INVALID] * 256)
    for value, character in enumerate(ENCODING):
        table[ord(character)] = value
        table[ord(character.lower())] = value
    return bytes(table)


DECODING = _decoding_table()


@total_ordering
class ULID:
    """https://github.com/ulid/spec"""

    __slots__ = ('_bytes',)

    def __init__(self, value: bytes | bytearray | memoryview):
        value = bytes(memoryview(value))
        if len(value) != BYTES_LEN:
            error = f'ULID Needs {BYTES_LEN} Bytes, Got {len(value)}'
            raise InvalidLength(error)
        object.__setattr__(self, '_bytes', value)

    def __setattr__(self, key, value):
        error = f'{self.__class__.__name__} Is Immutable'
        raise AttributeError(error)

    def __str__(self) -> str:
        return self.marshal()

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}({self.marshal()})'

    def __bytes__(self) -> bytes:
        return self._bytes

    def __eq__(self, other) -> bool:
        if not isinstance(other, ULID):
            return NotImplemented
        return self._bytes == other._bytes

    def __lt__(self, other) -> bool:
        if not isinstance(other, ULID):
            return NotImplemented
        return self._bytes < other._bytes

    def __hash__(self) -> int:
        return hash(self._bytes)

    def __reduce__(self):
        return self.__class__, (self._bytes,)

    @classmethod
    def new(cls, timestamp: int, entropy: Callable[[], int]) -> ULID:
        """Low 48 bits of `timestamp` + 10 calls of `entropy`"""
        return cls(cls.encode_time(timestamp) + cls.encode_entropy(entropy))

    @classmethod
    def from_bytes(cls, value: bytes | bytearray | memoryview) -> ULID:
        return cls(value)

    @classmethod
    def from_str(cls, value: str) -> ULID:
        return cls.unmarshal(value)

    @staticmethod
    def encode_time(timestamp: int) -> bytes:
        """Big-endian, anything above 48 bits is dropped"""
        return (timestamp & MAX_TIMESTAMP).to_bytes(TIMESTAMP_LEN, 'big')

    @staticmethod
    def encode_entropy(entropy: Callable[[], int]) -> bytes:
        # One call per byte, in order
        return bytes(entropy() & 0xFF for _ in range(ENTROPY_LEN))

    def to_bytes(self) -> bytes:
        return self._bytes

    def entropy(self) -> bytes:
        return self._bytes[TIMESTAMP_LEN:]

    def timestamp(self) -> int:
        val = self._bytes
        return (val[0] << 40) | (val[1] << 32) | (val[2] << 24) | (val[3] << 16) | (val[4] << 8) | val[5]

    def datetime(self) -> datetime:
        return EPOCH + timedelta(milliseconds=self.timestamp())

    def json(self) -> str:
        return json.dumps(self.marshal()).decode()

    def marshal(self) -> str:
        """
        128 bits --> 26 symbols of 5 bits,
        the first symbol only carries 3 bits so it is always 0-7
        """
        val = self._bytes
        lut = ENCODING
        return ''.join((
            # timestamp
            lut[(val[0] & 224) >> 5],
            lut[val[0] & 31],
            lut[(val[1] & 248) >> 3],
            lut[((val[1] & 7) << 2) | ((val[2] & 192) >> 6)],
            lut[(val[2] & 62) >> 1],
            lut[((val[2] & 1) << 4) | ((val[3] & 240) >> 4)],
            lut[((val[3] & 15) << 1) | ((val[4] & 128) >> 7)],
            lut[(val[4] & 124) >> 2],
            lut[((val[4] & 3) << 3) | ((val[5] & 224) >> 5)],
            lut[val[5] & 31],
            # entropy
            lut[(val[6] & 248) >> 3],
            lut[((val[6] & 7) << 2) | ((val[7] & 192) >> 6)],
            lut[(val[7] & 62) >> 1],
            lut[((val[7] & 1) << 4) | ((val[8] & 240) >> 4)],
            lut[((val[8] & 15) << 1) | ((val[9] & 128) >> 7)],
            lut[(val[9] & 124) >> 2],
            lut[((val[9] & 3) << 3) | ((val[10] & 224) >> 5)],
            lut[val[10] & 31],
            lut[(val[11] & 248) >> 3],
            lut[((val[11] & 7) << 2) | ((val[12] & 192) >> 6)],
            lut[(val[12] & 62) >> 1],
            lut[((val[12] & 1) << 4) | ((val[13] & 240) >> 4)],
            lut[((val[13] & 15) << 1) | ((val[14] & 128) >> 7)],
            lut[(val[14] & 124) >> 2],
            lut[((val[14] & 3) << 3) | ((val[15] & 224) >> 5)],
            lut[val[15] & 31],
        ))

    @classmethod
    def unmarshal(cls, text: Text) -> ULID:
        """
        26 symbols --> 16 bytes.
        The 2 overflow bits of the first symbol are masked away, not rejected.
        """
        codes = [ord(c) for c in text] if isinstance(text, str) else bytes(text)
        if len(codes) != STRING_LEN:
            error = f'Invalid Length For Unmarshal: {len(codes)}'
            raise InvalidLength(error)

        s = [cls._unmarshal_word(position, code) for position, code in enumerate(codes)]

        val = (
            # timestamp
            (s[0] << 5) | s[1],
            (s[2] << 3) | (s[3] >> 2),
            (s[3] << 6) | (s[4] << 1) | (s[5] >> 4),
            (s[5] << 4) | (s[6] >> 1),
            (s[6] << 7) | (s[7] << 2) | (s[8] >> 3),
            (s[8] << 5) | s[9],
            # entropy
            (s[10] << 3) | (s[11] >> 2),
            (s[11] << 6) | (s[12] << 1) | (s[13] >> 4),
            (s[13] << 4) | (s[14] >> 1),
            (s[14] << 7) | (s[15] << 2) | (s[16] >> 3),
            (s[16] << 5) | s[17],
            (s[18] << 3) | (s[19] >> 2),
            (s[19] << 6) | (s[20] << 1) | (s[21] >> 4),
            (s[21] << 4) | (s[22] >> 1),
            (s[22] << 7) | (s[23] << 2) | (s[24] >> 3),
            (s[24] << 5) | s[25],
        )
        return cls(bytes(b & 0xFF for b in val))

    @staticmethod
    def _unmarshal_word(position: int, code: int) -> int:
        word = DECODING[code] if code < 256 else INVALID
        if word == INVALID:
            raise InvalidCharacter(position=position, character=chr(code))
        return word
