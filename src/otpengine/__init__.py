import logging
import secrets
from typing import Sequence

from . import hotp as hotp
from .base32 import decode as decode_base32
from .base32 import encode as encode_base32
from .exceptions import ConfigurationError as ConfigurationError
from .exceptions import DecodingError as DecodingError
from .exceptions import OTPError as OTPError
from .params import Algorithm as Algorithm
from .params import OTPParameters as OTPParameters
from .totp import GeneratedToken as GeneratedToken
from .totp import generate_default_token as generate_default_token
from .totp import generate_token as generate_token
from .totp import timecode as timecode
from .totp import validate_default_token as validate_default_token
from .totp import validate_token as validate_token
from .utils import strings_equal as timing_safe_equal

__all__ = [
    "Algorithm",
    "ConfigurationError",
    "DecodingError",
    "GeneratedToken",
    "OTPError",
    "OTPParameters",
    "decode_base32",
    "encode_base32",
    "generate_default_token",
    "generate_token",
    "hotp",
    "random_base32",
    "timecode",
    "timing_safe_equal",
    "validate_default_token",
    "validate_token",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())

_random = secrets.SystemRandom()


def random_base32(length: int = 32, chars: Sequence[str] = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567") -> str:
    # Note: the otpauth scheme DOES NOT use base32 padding for secret lengths not divisible by 8.
    # Some third-party tools have bugs when dealing with such secrets.
    if length < 32:
        raise ValueError("Secrets should be at least 160 bits")

    return "".join(_random.choice(chars) for _ in range(length))
