import hashlib
from enum import Enum
from typing import Any, Callable, Union

from .exceptions import ConfigurationError


class Algorithm(Enum):
    """
    HMAC hash functions allowed for OTP generation.
    """

    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    @property
    def hash_factory(self) -> Callable[..., Any]:
        return _HASH_FACTORIES[self]

    @property
    def digest_size(self) -> int:
        return _DIGEST_SIZES[self]

    @classmethod
    def from_name(cls, value: Union["Algorithm", str]) -> "Algorithm":
        """
        Resolves an algorithm from a member or a case-insensitive name such as
        "sha256" or "SHA-256".

        :raises ConfigurationError: if the algorithm is not supported
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            name = value.upper().replace("-", "")
            for member in cls:
                if member.value == name:
                    return member
        raise ConfigurationError("Invalid value for algorithm, must be SHA1, SHA256 or SHA512")


_HASH_FACTORIES = {
    Algorithm.SHA1: hashlib.sha1,
    Algorithm.SHA256: hashlib.sha256,
    Algorithm.SHA512: hashlib.sha512,
}

_DIGEST_SIZES = {
    Algorithm.SHA1: 20,
    Algorithm.SHA256: 32,
    Algorithm.SHA512: 64,
}

DEFAULT_ALGORITHM = Algorithm.SHA1
DEFAULT_DIGITS = 6
DEFAULT_PERIOD = 30
MIN_DIGITS = 6
MAX_DIGITS = 10


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class OTPParameters(object):
    """
    Settings shared by token generation and validation.

    Built fresh for each operation and checked on construction, so a bad
    algorithm, digit count or period fails before any secret is touched.
    """

    def __init__(
        self,
        secret: str,
        issuer: str = "",
        label: str = "",
        algorithm: Union[Algorithm, str] = DEFAULT_ALGORITHM,
        digits: int = DEFAULT_DIGITS,
        period: int = DEFAULT_PERIOD,
    ) -> None:
        """
        :param secret: shared secret in base32 format
        :param issuer: the name of the OTP issuer, shown as the organization
            title in authenticator apps
        :param label: account name the OTP belongs to
        :param algorithm: an :class:`Algorithm` or its name
        :param digits: number of digits in the token, 6 to 10
        :param period: the time step in seconds
        :raises ConfigurationError: if any of the values is unusable
        """
        if not isinstance(secret, str):
            raise ConfigurationError("secret must be a base32 string")
        if not _is_int(digits) or not MIN_DIGITS <= digits <= MAX_DIGITS:
            raise ConfigurationError("digits must be between {} and {}".format(MIN_DIGITS, MAX_DIGITS))
        if not _is_int(period) or period <= 0:
            raise ConfigurationError("period must be a positive number of seconds")

        self.algorithm = Algorithm.from_name(algorithm)
        self.digits = digits
        self.period = period
        self.secret = secret
        self.issuer = issuer or ""
        self.label = label or ""

    def __repr__(self) -> str:
        return "OTPParameters(issuer={!r}, label={!r}, algorithm={}, digits={}, period={})".format(
            self.issuer, self.label, self.algorithm.value, self.digits, self.period
        )
