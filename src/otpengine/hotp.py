from . import base32, utils
from .otp import generate_otp
from .params import OTPParameters


def at(params: OTPParameters, counter: int) -> str:
    """
    Generates the OTP for the given count.

    The caller owns the counter; nothing here stores or advances it.

    :param params: OTP parameters holding the base32 secret
    :param counter: the OTP HMAC counter
    :returns: OTP
    :raises DecodingError: if the secret is not valid base32
    """
    secret = base32.decode_into(params.secret)
    try:
        return generate_otp(secret, counter, params.algorithm, params.digits)
    finally:
        # wipe the key material before handing it back to the allocator
        secret[:] = bytes(len(secret))


def verify(token: str, counter: int, params: OTPParameters) -> bool:
    """
    Verifies the OTP passed in against the OTP for exactly ``counter``.

    :param token: the OTP to check against
    :param counter: the OTP HMAC counter
    :param params: OTP parameters holding the base32 secret
    """
    token = str(token)
    if len(token) != params.digits:
        return False
    return utils.strings_equal(token, at(params, counter))
