import hmac
from typing import Union

from .params import Algorithm

# Counters are serialized as unsigned 64-bit values.
COUNTER_MASK = 0xFFFFFFFFFFFFFFFF
MIN_DIGEST_SIZE = 20


def number_to_buffer(n: int, padding: int = 8) -> bytes:
    """
    Turns an integer into the OATH specified big-endian bytestring, which is
    fed to the HMAC along with the secret.

    Counters above 2**64 - 1 wrap around modulo 2**64.

    :raises ValueError: if ``n`` is negative
    """
    if n < 0:
        raise ValueError("counter must be a non-negative integer")
    n &= COUNTER_MASK
    result = bytearray()
    while n != 0:
        result.append(n & 0xFF)
        n >>= 8
    # bytes come out least significant first
    return bytes(bytearray(reversed(result)).rjust(padding, b"\0"))


def hmac_digest(algorithm: Union[Algorithm, str], key: Union[bytes, bytearray], message: bytes) -> bytes:
    """
    HMAC of ``message`` under ``key`` with the given hash algorithm.

    :raises ConfigurationError: if the algorithm is not supported
    """
    algorithm = Algorithm.from_name(algorithm)
    digest = hmac.new(key, message, algorithm.hash_factory).digest()
    if len(digest) != algorithm.digest_size:
        raise ValueError("unexpected {} digest size {}".format(algorithm.value, len(digest)))
    return digest


def truncate(digest: bytes) -> int:
    """
    RFC 4226 dynamic truncation: picks 4 bytes at the offset given by the low
    nibble of the last byte and reads them as a 31-bit big-endian integer.
    """
    if len(digest) < MIN_DIGEST_SIZE:
        raise ValueError("digest size is lower than {} bytes".format(MIN_DIGEST_SIZE))
    hmac_hash = bytearray(digest)
    # offset <= 15, so offset + 3 <= 18 stays inside every supported digest
    offset = hmac_hash[-1] & 0xF
    return (
        (hmac_hash[offset] & 0x7F) << 24
        | (hmac_hash[offset + 1] & 0xFF) << 16
        | (hmac_hash[offset + 2] & 0xFF) << 8
        | (hmac_hash[offset + 3] & 0xFF)
    )


def reduce(code: int, digits: int) -> int:
    return code % 10**digits


def truncate_and_reduce(digest: bytes, digits: int) -> int:
    return reduce(truncate(digest), digits)


def pad(otp: int, digits: int) -> str:
    """
    Renders ``otp`` as a decimal string of exactly ``digits`` characters,
    left-padded with zeros.
    """
    if not 1 <= digits <= 10:
        raise ValueError("digits must be between 1 and 10")
    if otp < 0 or otp >= 10**digits:
        raise ValueError("{} does not fit in {} digits".format(otp, digits))
    # Prefixing with 10**10 keeps the leading zeros when slicing the tail off.
    str_code = str(10_000_000_000 + otp)
    return str_code[-digits:]


def generate_otp(secret: Union[bytes, bytearray], counter: int, algorithm: Union[Algorithm, str], digits: int) -> str:
    """
    Implements RFC 4226 for an already decoded secret.

    :param secret: raw key bytes
    :param counter: the HMAC counter value to use as the OTP input.
        Usually either a stored counter, or the time step computed from the
        Unix timestamp
    :param algorithm: hash algorithm for the HMAC
    :param digits: token length
    :returns: zero-padded token
    """
    digest = hmac_digest(algorithm, secret, number_to_buffer(counter))
    return pad(truncate_and_reduce(digest, digits), digits)
