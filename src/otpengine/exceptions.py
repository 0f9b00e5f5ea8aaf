class OTPError(ValueError):
    """
    Base class for errors raised by otpengine.

    Subclasses ValueError so code written against the usual ``except ValueError``
    convention of OTP libraries keeps working.
    """


class DecodingError(OTPError):
    """
    A Base32 secret contains a character outside the alphabet, has malformed
    padding, or has a symbol count no byte string encodes to.
    """


class ConfigurationError(OTPError):
    """
    OTP parameters are unusable: unsupported algorithm, digit count outside the
    supported range, or a non-positive period.
    """
