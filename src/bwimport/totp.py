"""TOTP settings parsing.

Bitwarden stores a login's one-time password configuration as a single
string. In practice that string takes one of these forms:
- ``otpauth://totp/Issuer:account?secret=...&digits=6&period=30``
- ``steam://SECRET`` (Steam Guard, 5 character codes)
- ``key=SECRET&size=6&step=30`` (KeeOTP style)
- a bare base32 secret

All of them are normalized into a TotpSettings value, which can be turned
back into an ``otpauth://`` URI for storage on an entry.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass
from urllib.parse import parse_qsl, quote, unquote, urlencode, urlsplit

from .exceptions import TotpParseError

DEFAULT_DIGITS = 6
DEFAULT_PERIOD = 30
DEFAULT_ALGORITHM = "SHA1"
STEAM_DIGITS = 5
STEAM_ENCODER = "steam"

SUPPORTED_ALGORITHMS = frozenset({"SHA1", "SHA256", "SHA512"})

# Accepted range for the number of digits in a generated code
MIN_DIGITS = 1
MAX_DIGITS = 10


@dataclass(frozen=True, slots=True)
class TotpSettings:
    """Time-based one-time password configuration.

    Attributes:
        secret: Base32 encoded shared secret (upper case, no padding spaces)
        digits: Number of digits in a generated code
        period: Code validity period in seconds
        algorithm: HMAC hash algorithm name
        encoder: Code encoder, empty for numeric codes or "steam"
        issuer: Optional issuer label
        account: Optional account label
    """

    secret: str
    digits: int = DEFAULT_DIGITS
    period: int = DEFAULT_PERIOD
    algorithm: str = DEFAULT_ALGORITHM
    encoder: str = ""
    issuer: str = ""
    account: str = ""

    def to_uri(self) -> str:
        """Serialize these settings as an ``otpauth://totp`` URI."""
        label = f"{self.issuer}:{self.account}" if self.issuer else self.account
        params: dict[str, str | int] = {
            "secret": self.secret,
            "period": self.period,
            "digits": self.digits,
        }
        if self.issuer:
            params["issuer"] = self.issuer
        if self.algorithm != DEFAULT_ALGORITHM:
            params["algorithm"] = self.algorithm
        if self.encoder:
            params["encoder"] = self.encoder
        return f"otpauth://totp/{quote(label)}?{urlencode(params, quote_via=quote)}"

    def __repr__(self) -> str:
        return (
            f"TotpSettings(digits={self.digits}, period={self.period}, "
            f"algorithm={self.algorithm!r}, encoder={self.encoder!r})"
        )


def _normalize_secret(secret: str) -> str:
    """Validate a base32 secret and return it in canonical form.

    Raises:
        TotpParseError: If the secret is empty or not valid base32
    """
    cleaned = "".join(secret.split()).upper().rstrip("=")
    if not cleaned:
        raise TotpParseError("TOTP secret is empty")
    padding = "=" * (-len(cleaned) % 8)
    try:
        base64.b32decode(cleaned + padding)
    except ValueError as e:
        # binascii.Error for bad digits, plain ValueError for non-ASCII text
        raise TotpParseError("TOTP secret is not valid base32") from e
    return cleaned


def _parse_int(value: str | None, default: int, name: str) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError as e:
        raise TotpParseError(f"Invalid TOTP {name}: {value!r}") from e


def _build(
    secret: str,
    digits: int = DEFAULT_DIGITS,
    period: int = DEFAULT_PERIOD,
    algorithm: str = DEFAULT_ALGORITHM,
    encoder: str = "",
    issuer: str = "",
    account: str = "",
) -> TotpSettings:
    algorithm = algorithm.upper().replace("-", "")
    if algorithm not in SUPPORTED_ALGORITHMS:
        raise TotpParseError(f"Unsupported TOTP algorithm: {algorithm}")
    if not MIN_DIGITS <= digits <= MAX_DIGITS:
        raise TotpParseError(f"Invalid TOTP digits: {digits}")
    if period <= 0:
        raise TotpParseError(f"Invalid TOTP period: {period}")
    return TotpSettings(
        secret=_normalize_secret(secret),
        digits=digits,
        period=period,
        algorithm=algorithm,
        encoder=encoder,
        issuer=issuer,
        account=account,
    )


def _parse_otpauth(raw: str) -> TotpSettings:
    try:
        parts = urlsplit(raw)
        params = dict(parse_qsl(parts.query))
    except ValueError as e:
        raise TotpParseError("Malformed otpauth URI") from e
    if parts.netloc.lower() != "totp":
        raise TotpParseError(f"Unsupported OTP type: {parts.netloc or '(none)'}")

    label = unquote(parts.path.lstrip("/"))
    issuer, _, account = label.rpartition(":")
    issuer = params.get("issuer", issuer.strip())

    encoder = params.get("encoder", "")
    default_digits = STEAM_DIGITS if encoder == STEAM_ENCODER else DEFAULT_DIGITS
    return _build(
        secret=params.get("secret", ""),
        digits=_parse_int(params.get("digits"), default_digits, "digits"),
        period=_parse_int(params.get("period"), DEFAULT_PERIOD, "period"),
        algorithm=params.get("algorithm", DEFAULT_ALGORITHM),
        encoder=encoder,
        issuer=issuer,
        account=account.strip(),
    )


def _parse_keeotp(raw: str) -> TotpSettings:
    params = dict(parse_qsl(raw))
    return _build(
        secret=params.get("key", ""),
        digits=_parse_int(params.get("size"), DEFAULT_DIGITS, "digits"),
        period=_parse_int(params.get("step"), DEFAULT_PERIOD, "period"),
        algorithm=params.get("otpHashMode", DEFAULT_ALGORITHM),
    )


def parse_settings(raw: str) -> TotpSettings:
    """Parse a TOTP configuration string.

    Args:
        raw: otpauth URI, steam URI, KeeOTP parameter string or bare secret

    Returns:
        Parsed TotpSettings

    Raises:
        TotpParseError: If the string cannot be interpreted as TOTP settings
    """
    raw = raw.strip()
    if not raw:
        raise TotpParseError("TOTP string is empty")

    lowered = raw.lower()
    if lowered.startswith("otpauth://"):
        return _parse_otpauth(raw)
    if lowered.startswith("steam://"):
        return _build(
            secret=raw[len("steam://"):],
            digits=STEAM_DIGITS,
            encoder=STEAM_ENCODER,
        )
    if lowered.startswith("key="):
        return _parse_keeotp(raw)
    return _build(secret=raw)
