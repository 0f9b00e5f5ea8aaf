import binascii

import pytest

from otpengine import Algorithm, ConfigurationError
from otpengine.otp import generate_otp, hmac_digest, number_to_buffer, pad, reduce, truncate, truncate_and_reduce

RFC4226_KEY = b"12345678901234567890"

# RFC 4226 appendix D: (count, HMAC-SHA1 digest, truncated value, HOTP)
RFC4226_VECTORS = [
    (0, "cc93cf18508d94934c64b65d8ba7667fb7cde4b0", 1284755224, "755224"),
    (1, "75a48a19d4cbe100644e8ac1397eea747a2d33ab", 1094287082, "287082"),
    (2, "0bacb7fa082fef30782211938bc1c5e70416ff44", 137359152, "359152"),
    (3, "66c28227d03a2d5529262ff016a1e6ef76557ece", 1726969429, "969429"),
    (4, "a904c900a64b35909874b33e61c5938a8e15ed1c", 1640338314, "338314"),
    (5, "a37e783d7b7233c083d4f62926c7a25f238d0316", 868254676, "254676"),
    (6, "bc9cd28561042c83f219324d3c607256c03272ae", 1918287922, "287922"),
    (7, "a4fb960c0bc06e1eabb804e5b397cdc4b45596fa", 82162583, "162583"),
    (8, "1b3c89f65e6c9e883012052823443f048b4332db", 673399871, "399871"),
    (9, "1637409809a679dc698207310c8c7fc07290d9e5", 645520489, "520489"),
]


class TestNumberToBuffer:
    def test_small_number(self):
        assert number_to_buffer(42) == bytes([0, 0, 0, 0, 0, 0, 0, 42])

    def test_zero(self):
        assert number_to_buffer(0) == bytes(8)

    def test_six_byte_number(self):
        assert number_to_buffer(281474976710655) == bytes([0, 0, 255, 255, 255, 255, 255, 255])

    def test_largest_safe_integer(self):
        assert number_to_buffer(2**53 - 1) == bytes([0, 31, 255, 255, 255, 255, 255, 255])

    def test_full_width(self):
        assert number_to_buffer(2**64 - 1) == b"\xff" * 8

    def test_wraps_past_64_bits(self):
        assert number_to_buffer(2**64) == bytes(8)
        assert number_to_buffer(2**64 + 5) == number_to_buffer(5)

    def test_always_eight_bytes(self):
        for n in (1, 255, 256, 65535, 2**32, 2**63):
            assert len(number_to_buffer(n)) == 8

    def test_negative(self):
        with pytest.raises(ValueError):
            number_to_buffer(-1)


class TestHmacDigest:
    key = bytes([1, 2, 3, 4, 5])
    message = bytes([10, 20, 30, 40, 50])

    @pytest.mark.parametrize(
        "algorithm,size",
        [(Algorithm.SHA1, 20), (Algorithm.SHA256, 32), (Algorithm.SHA512, 64)],
    )
    def test_digest_size(self, algorithm, size):
        assert len(hmac_digest(algorithm, self.key, self.message)) == size
        assert algorithm.digest_size == size

    def test_accepts_algorithm_name(self):
        assert hmac_digest("sha256", self.key, self.message) == hmac_digest(Algorithm.SHA256, self.key, self.message)

    def test_deterministic(self):
        assert hmac_digest(Algorithm.SHA256, self.key, self.message) == hmac_digest(
            Algorithm.SHA256, self.key, self.message
        )

    def test_key_and_message_matter(self):
        base = hmac_digest(Algorithm.SHA256, self.key, self.message)
        assert hmac_digest(Algorithm.SHA256, bytes([6, 7, 8, 9, 10]), self.message) != base
        assert hmac_digest(Algorithm.SHA256, self.key, bytes([15, 25, 35, 45, 55])) != base

    @pytest.mark.parametrize("count,digest,_truncated,_hotp", RFC4226_VECTORS)
    def test_rfc4226_digests(self, count, digest, _truncated, _hotp):
        result = hmac_digest(Algorithm.SHA1, RFC4226_KEY, number_to_buffer(count))
        assert binascii.hexlify(result).decode() == digest

    def test_accepts_bytearray_key(self):
        assert hmac_digest(Algorithm.SHA1, bytearray(RFC4226_KEY), number_to_buffer(0)) == hmac_digest(
            Algorithm.SHA1, RFC4226_KEY, number_to_buffer(0)
        )

    @pytest.mark.parametrize("algorithm", ["MD5", "sha3_256", "", None])
    def test_unsupported_algorithm(self, algorithm):
        with pytest.raises(ConfigurationError):
            hmac_digest(algorithm, self.key, self.message)


class TestTruncation:
    def test_rfc4226_section_5_4_example(self):
        digest = binascii.unhexlify("1f8698690e02ca16618550ef7f19da8e945b555a")
        assert truncate(digest) == 0x50EF7F19
        assert truncate_and_reduce(digest, 6) == 872921

    @pytest.mark.parametrize("_count,digest,truncated,_hotp", RFC4226_VECTORS)
    def test_rfc4226_truncated_values(self, _count, digest, truncated, _hotp):
        assert truncate(binascii.unhexlify(digest)) == truncated

    def test_sign_bit_is_cleared(self):
        digest = b"\xff" * 20
        assert truncate(digest) == 0x7FFFFFFF

    @pytest.mark.parametrize("size", [20, 32, 64])
    def test_offset_stays_inside_digest(self, size):
        # every possible offset, with the largest one last
        for nibble in range(16):
            digest = bytes(size - 1) + bytes([nibble])
            assert 0 <= truncate(digest) <= 0x7FFFFFFF
            assert nibble + 3 < size

    def test_short_digest(self):
        with pytest.raises(ValueError):
            truncate(bytes(16))

    @pytest.mark.parametrize("digits", [6, 7, 8, 9, 10])
    def test_reduce_bounds(self, digits):
        assert 0 <= reduce(0x7FFFFFFF, digits) < 10**digits
        assert reduce(1234567890123, digits) == 1234567890123 % 10**digits


class TestPad:
    def test_leading_zeros(self):
        assert pad(42, 6) == "000042"
        assert pad(0, 8) == "00000000"

    def test_full_width(self):
        assert pad(999999, 6) == "999999"
        assert pad(9999999999, 10) == "9999999999"

    @pytest.mark.parametrize("digits", [6, 7, 8, 9, 10])
    def test_length(self, digits):
        assert len(pad(7, digits)) == digits

    def test_too_large(self):
        with pytest.raises(ValueError):
            pad(1000000, 6)

    def test_negative(self):
        with pytest.raises(ValueError):
            pad(-1, 6)

    @pytest.mark.parametrize("digits", [0, -1, 11])
    def test_digits_out_of_range(self, digits):
        with pytest.raises(ValueError, match="between 1 and 10"):
            pad(5, digits)


@pytest.mark.parametrize("count,_digest,_truncated,hotp", RFC4226_VECTORS)
def test_generate_otp_rfc4226(count, _digest, _truncated, hotp):
    assert generate_otp(RFC4226_KEY, count, Algorithm.SHA1, 6) == hotp
