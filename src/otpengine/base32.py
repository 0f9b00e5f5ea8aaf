import logging

from .exceptions import DecodingError

logger = logging.getLogger(__name__)

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
PAD = "="

# lower case letters map to the same values; nothing outside A-Z, a-z, 2-7 is accepted
_VALUES = {char: index for index, char in enumerate(ALPHABET)}
_VALUES.update({char.lower(): value for char, value in _VALUES.items()})

# Number of "=" a well-formed final block may carry, keyed by the number of
# bytes left over in it (RFC 4648 section 6).
_PADDING_FOR_TAIL = {0: 0, 1: 6, 2: 4, 3: 3, 4: 1}
_VALID_PAD_COUNTS = frozenset(_PADDING_FOR_TAIL.values())


def encode(data: bytes) -> str:
    """
    Encodes bytes as RFC 4648 Base32, padded with "=" to a multiple of
    8 characters. Empty input encodes to the empty string.
    """
    chars = []
    buffer = 0
    bits = 0
    for byte in bytearray(data):
        buffer = ((buffer << 8) | byte) & 0x1FFF
        bits += 8
        while bits >= 5:
            bits -= 5
            chars.append(ALPHABET[(buffer >> bits) & 0x1F])
    if bits:
        chars.append(ALPHABET[(buffer << (5 - bits)) & 0x1F])
    # 8 characters carry 5 bytes
    chars.append(PAD * _PADDING_FOR_TAIL[len(data) % 5])
    return "".join(chars)


def decode(text: str) -> bytes:
    """
    Decodes RFC 4648 Base32 text.

    Lower case letters are accepted. Trailing "=" padding is optional, but if
    present it has to be well formed (total length a multiple of 8, and a
    legal pad count). Bits left over in the final symbol are ignored.
    Rejections are recorded at DEBUG level by position only, never by content.

    :param text: Base32 string
    :returns: decoded bytes
    :raises DecodingError: on a character outside the alphabet, malformed
        padding, or an impossible symbol count
    """
    return bytes(decode_into(text))


def decode_into(text: str) -> bytearray:
    """
    Same as :func:`decode` but returns a mutable buffer, so that callers holding
    key material can overwrite it once they are done.
    """
    if not isinstance(text, str):
        raise DecodingError("Base32 input must be a string, not {}".format(type(text).__name__))

    symbols = text.rstrip(PAD)
    pad_count = len(text) - len(symbols)
    if pad_count:
        if len(text) % 8 != 0 or pad_count not in _VALID_PAD_COUNTS:
            logger.debug("rejected Base32 input with %d padding characters", pad_count)
            raise DecodingError("Malformed Base32 padding")

    # 5 bytes per 8 symbols; remainders of 1, 3 and 6 symbols encode nothing
    remainder = len(symbols) % 8
    if remainder in (1, 3, 6):
        raise DecodingError("Invalid Base32 length: {} symbols".format(len(symbols)))
    if pad_count and _PADDING_FOR_TAIL[remainder * 5 // 8] != pad_count:
        raise DecodingError("Malformed Base32 padding")

    out = bytearray(len(symbols) * 5 // 8)
    buffer = 0
    bits = 0
    index = 0
    for position, char in enumerate(symbols):
        value = _VALUES.get(char)
        if value is None:
            out[:] = bytes(len(out))
            logger.debug("rejected Base32 input at position %d", position)
            raise DecodingError("Invalid Base32 character at position {}".format(position))
        buffer = ((buffer << 5) | value) & 0x1FFF
        bits += 5
        if bits >= 8:
            bits -= 8
            out[index] = (buffer >> bits) & 0xFF
            index += 1
    return out
