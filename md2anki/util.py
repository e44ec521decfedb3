import hashlib
import logging

logger = logging.getLogger(__name__)

# Digit alphabet Anki uses for note GUIDs
BASE91_TABLE = [
    'a', 'b', 'c', 'd', 'e', 'f', 'g', 'h', 'i', 'j', 'k', 'l', 'm', 'n', 'o', 'p', 'q', 'r', 's',
    't', 'u', 'v', 'w', 'x', 'y', 'z', 'A', 'B', 'C', 'D', 'E', 'F', 'G', 'H', 'I', 'J', 'K', 'L',
    'M', 'N', 'O', 'P', 'Q', 'R', 'S', 'T', 'U', 'V', 'W', 'X', 'Y', 'Z', '0', '1', '2', '3', '4',
    '5', '6', '7', '8', '9', '!', '#', '$', '%', '&', '(', ')', '*', '+', ',', '-', '.', '/', ':',
    ';', '<', '=', '>', '?', '@', '[', ']', '^', '_', '`', '{', '|', '}', '~'
]


class IdGenerator:
    """Hands out strictly increasing integer ids, starting at `start`.

    One instance is shared by every note and card written into a package so
    that no two rows in the collection end up with the same id.
    """

    def __init__(self, start: int):
        self._next = int(start)

    def next_id(self) -> int:
        value = self._next
        self._next += 1
        return value

    def __repr__(self):
        return f'IdGenerator(next={self._next})'


def guid_for(*values) -> str:
    """
    Content-addressed note GUID, identical to the one Anki itself derives.

    - The values are stringified and joined with "__".
    - The first 8 bytes of the SHA-256 digest are read as a big-endian
      unsigned 64-bit integer.
    - That integer is written out in base 91 using BASE91_TABLE,
      most significant digit first.
    """
    hash_str = '__'.join(str(value) for value in values)
    digest = hashlib.sha256(hash_str.encode('utf-8')).digest()
    hash_int = int.from_bytes(digest[:8], 'big')
    guid = to_base91(hash_int)
    logger.debug(f'GUID {guid} for {len(values)} value(s)')
    return guid


def to_base91(value: int) -> str:
    base = len(BASE91_TABLE)
    digits = []
    while value > 0:
        value, index = divmod(value, base)
        digits.append(BASE91_TABLE[index])
    return ''.join(reversed(digits))
