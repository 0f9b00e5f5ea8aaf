import unicodedata
from hmac import compare_digest
from typing import Dict, Union
from urllib.parse import quote, urlencode


def build_uri(
    secret: str,
    issuer: str,
    label: str,
    algorithm: str,
    digits: int,
    period: int,
) -> str:
    """
    Returns the provisioning URI for a TOTP. This can then be encoded in a QR
    Code and used to provision an OTP app like Google Authenticator.

    The URI is write-only; nothing in this package parses it back.

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    :param secret: the base32 secret, as held by the caller
    :param issuer: the name of the OTP issuer
    :param label: name of the account
    :param algorithm: the algorithm name, e.g. "SHA1"
    :param digits: the length of the generated token
    :param period: the number of seconds each token is valid for
    :returns: provisioning uri
    """
    base_uri = "otpauth://totp/{0}:{1}?{2}"

    url_args: Dict[str, Union[int, str]] = {
        "secret": secret,
        "issuer": issuer,
        "algorithm": algorithm.upper(),
        "digits": digits,
        "period": period,
    }

    return base_uri.format(
        quote(issuer, safe=""),
        quote(label, safe=""),
        urlencode(url_args).replace("+", "%20"),
    )


def strings_equal(s1: str, s2: str) -> bool:
    """
    Timing-attack resistant string comparison.

    Normal comparison using == will short-circuit on the first mismatching
    character. compare_digest instead XORs every byte pair into an
    accumulator, so the time taken does not depend on where the strings
    differ. We still reveal to a timing attack whether the strings are the
    same length.

    Only canonical (NFC) normalization is applied, so compatibility forms such
    as fullwidth digits or ligatures never compare equal to plain ASCII.
    """
    b1 = unicodedata.normalize("NFC", s1).encode("utf-8")
    b2 = unicodedata.normalize("NFC", s2).encode("utf-8")
    if len(b1) != len(b2):
        return False
    return compare_digest(b1, b2)
