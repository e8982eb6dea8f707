from ulidkit.exceptions import InvalidCharacter, InvalidLength, ULIDException
from ulidkit.generator import Generator, current_timestamp, new, random_byte
from ulidkit.ulid import ULID

__version__ = '0.1.0'
