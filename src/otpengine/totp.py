import calendar
import datetime
import logging
import math
import time
from typing import NamedTuple, Optional, Union

from . import hotp, utils
from .params import DEFAULT_ALGORITHM, DEFAULT_DIGITS, DEFAULT_PERIOD, OTPParameters

logger = logging.getLogger(__name__)

# Time steps tolerated on either side of the current one by the default validator.
DEFAULT_WINDOW = 2

TimeLike = Union[int, float, datetime.datetime]


class GeneratedToken(NamedTuple):
    token: str
    uri: str


def timecode(period: int, for_time: Optional[TimeLike] = None) -> int:
    """
    Accepts either a Unix timestamp or a datetime and returns the TOTP counter
    for it, ``floor(seconds / period)``. Defaults to the current time.

    Naive datetimes are taken as local time.
    """
    if for_time is None:
        seconds = int(time.time())
    elif isinstance(for_time, datetime.datetime):
        if for_time.tzinfo:
            seconds = calendar.timegm(for_time.utctimetuple())
        else:
            seconds = int(time.mktime(for_time.timetuple()))
    else:
        seconds = math.floor(for_time)
    if seconds < 0:
        raise ValueError("time must not be before the Unix epoch")
    # integer division, so no precision is lost for large timestamps
    return seconds // period


def generate_token(
    params: OTPParameters,
    counter: Optional[int] = None,
    for_time: Optional[TimeLike] = None,
) -> GeneratedToken:
    """
    Generates the token for ``counter`` along with the provisioning URI.

    :param params: OTP parameters
    :param counter: explicit HMAC counter; when omitted it is derived from
        ``for_time`` (or the current time) and the period
    :param for_time: time to derive the counter from
    :returns: token and provisioning URI
    :raises DecodingError: if the secret is not valid base32; raised before
        any digest is computed
    """
    if counter is None:
        counter = timecode(params.period, for_time)
    token = hotp.at(params, counter)
    uri = utils.build_uri(
        params.secret,
        issuer=params.issuer,
        label=params.label,
        algorithm=params.algorithm.value,
        digits=params.digits,
        period=params.period,
    )
    return GeneratedToken(token, uri)


def validate_token(
    token: str,
    window: int,
    params: OTPParameters,
    for_time: Optional[TimeLike] = None,
) -> bool:
    """
    Verifies the token against the current time, accepting any time step in
    ``[current - window, current + window]``.

    A token that does not match is ``False``, never an exception. Candidates
    are tried from the oldest step to the newest and the first match wins.

    The outcome is recorded at DEBUG level on this module's logger, which is
    silent unless the application configures logging. Secrets and candidate
    tokens are never logged.

    :param token: the token to check
    :param window: number of time steps tolerated on either side, to absorb
        clock drift
    :param params: OTP parameters
    :param for_time: time to check against, defaults to now
    :raises DecodingError: if the secret is not valid base32
    """
    if window < 0:
        raise ValueError("window must be a non-negative integer")
    token = str(token)
    if len(token) != params.digits:
        logger.debug("rejected token of length %d, expected %d", len(token), params.digits)
        return False

    current = timecode(params.period, for_time)
    for i in range(-window, window + 1):
        candidate = current + i
        if candidate < 0:
            continue
        if utils.strings_equal(token, generate_token(params, candidate).token):
            logger.debug("token accepted at time step offset %d", i)
            return True
    logger.debug("token rejected within a window of %d", window)
    return False


def generate_default_token(issuer: str, label: str, secret: str) -> GeneratedToken:
    """
    Generates the current token with the settings authenticator apps assume:
    SHA1, 6 digits, 30 second period.
    """
    params = OTPParameters(
        secret,
        issuer=issuer,
        label=label,
        algorithm=DEFAULT_ALGORITHM,
        digits=DEFAULT_DIGITS,
        period=DEFAULT_PERIOD,
    )
    return generate_token(params)


def validate_default_token(issuer: str, token: str, secret: str, window: int = DEFAULT_WINDOW) -> bool:
    params = OTPParameters(secret, issuer=issuer)
    return validate_token(token, window, params)
