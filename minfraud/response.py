"""Decoding of minFraud replies into typed fields.

The service answers with a flat ``key=value;key=value`` body. Keys arrive in
a mix of camelCase and snake_case (``riskScore``, ``ip_corporateProxy``) and
are normalised to snake_case on decode. A non-empty ``err`` value marks a
failed request unless it is one of the warning codes the service returns
alongside a normal score.
"""

import math
import re
from collections.abc import Mapping

from .errors import UNCLASSIFIED, ProtocolError

ERROR_KEY = "err"

WARNING_CODES = frozenset(
    {
        "IP_NOT_FOUND",
        "COUNTRY_NOT_FOUND",
        "CITY_NOT_FOUND",
        "CITY_REQUIRED",
        "POSTAL_CODE_REQUIRED",
        "POSTAL_CODE_NOT_FOUND",
        "INVALID_EMAIL_MD5",
    }
)

ERROR_MESSAGES: dict[str, str] = {
    "INVALID_LICENSE_KEY": "the license key is not valid",
    "LICENSE_REQUIRED": "no license key was sent",
    "IP_REQUIRED": "no IP address was sent",
    "COUNTRY_REQUIRED": "no billing country was sent",
    "MAX_REQUESTS_REACHED": "the license key has no queries remaining",
    "PERMISSION_REQUIRED": "the license key is not allowed to use this service",
}

_PAIR_SEPARATOR = re.compile(r"[;\r\n]")
_KEY_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")


def to_snake_case(key: str) -> str:
    return _CAMEL_BOUNDARY.sub(r"_\1", key).lower()


def _to_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        return 0.0
    return number if math.isfinite(number) else 0.0


def _to_int(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return 0


def _to_flag(value: str) -> bool:
    return value.strip().lower() == "yes"


class Response:
    """A decoded minFraud reply, either scored or errored."""

    def __init__(self, fields: Mapping[str, str]) -> None:
        self._fields = dict(fields)
        code = self._fields.get(ERROR_KEY) or ""
        self._errored = bool(code) and code not in WARNING_CODES
        self._warning = code if code in WARNING_CODES else ""

    @classmethod
    def from_body(cls, body: str) -> "Response":
        """Parse a raw response body.

        Raises ProtocolError with code ``UNCLASSIFIED`` when the body is not
        a sequence of ``key=value`` pairs.
        """
        text = (body or "").strip()
        if not text:
            raise ProtocolError(UNCLASSIFIED, "empty response body")

        fields: dict[str, str] = {}
        for segment in _PAIR_SEPARATOR.split(text):
            if not segment.strip():
                continue
            key, sep, value = segment.partition("=")
            key = key.strip()
            if not sep or not _KEY_PATTERN.match(key):
                raise ProtocolError(UNCLASSIFIED, f"malformed response segment: {segment[:40]!r}")
            fields[to_snake_case(key)] = value.strip()
        return cls(fields)

    @property
    def errored(self) -> bool:
        return self._errored

    def error(self) -> ProtocolError:
        """The provider's error as an exception instance (not raised)."""
        if not self._errored:
            raise RuntimeError("error() called on a successful minFraud response")
        code = self._fields[ERROR_KEY]
        return ProtocolError(code, ERROR_MESSAGES.get(code, ""))

    @property
    def warning(self) -> str:
        return self._warning

    @property
    def fields(self) -> dict[str, str]:
        return dict(self._fields)

    def get(self, key: str, default: str = "") -> str:
        value = self._fields.get(key)
        return default if value is None else value

    # -- scores --------------------------------------------------------------

    @property
    def risk_score(self) -> float:
        """Chance the transaction is fraudulent, in percent (0.01 to 100.0)."""
        return _to_float(self.get("risk_score"))

    @property
    def proxy_score(self) -> float:
        return _to_float(self.get("proxy_score"))

    @property
    def queries_remaining(self) -> int:
        return _to_int(self.get("queries_remaining"))

    # -- geolocation ---------------------------------------------------------

    @property
    def distance(self) -> str:
        """Kilometres between the IP location and the billing address."""
        return self.get("distance")

    @property
    def country_match(self) -> str:
        return self.get("country_match")

    @property
    def country_code(self) -> str:
        return self.get("country_code")

    @property
    def ip_region(self) -> str:
        return self.get("ip_region")

    @property
    def ip_city(self) -> str:
        return self.get("ip_city")

    @property
    def ip_latitude(self) -> str:
        return self.get("ip_latitude")

    @property
    def ip_longitude(self) -> str:
        return self.get("ip_longitude")

    @property
    def ip_postal_code(self) -> str:
        return self.get("ip_postal_code")

    @property
    def ip_accuracy_radius(self) -> str:
        return self.get("ip_accuracy_radius")

    @property
    def ip_area_code(self) -> str:
        return self.get("ip_area_code")

    @property
    def ip_region_name(self) -> str:
        return self.get("ip_region_name")

    @property
    def ip_country_name(self) -> str:
        return self.get("ip_country_name")

    @property
    def ip_isp(self) -> str:
        return self.get("ip_isp")

    @property
    def ip_org(self) -> str:
        return self.get("ip_org")

    @property
    def bin_country(self) -> str:
        return self.get("bin_country")

    # -- flags ---------------------------------------------------------------

    @property
    def high_risk_country(self) -> bool:
        return _to_flag(self.get("high_risk_country"))

    @property
    def anonymous_proxy(self) -> bool:
        return _to_flag(self.get("anonymous_proxy"))

    @property
    def corporate_proxy(self) -> bool:
        return _to_flag(self.get("ip_corporate_proxy"))

    @property
    def free_mail(self) -> bool:
        return _to_flag(self.get("free_mail"))

    @property
    def carder_email(self) -> bool:
        return _to_flag(self.get("carder_email"))

    # -- metadata ------------------------------------------------------------

    @property
    def maxmind_id(self) -> str:
        return self.get("maxmind_id")

    @property
    def minfraud_version(self) -> str:
        return self.get("minfraud_version")

    @property
    def service_level(self) -> str:
        return self.get("service_level")

    def __repr__(self) -> str:
        state = "errored" if self._errored else "scored"
        return f"<Response {state} fields={len(self._fields)}>"
