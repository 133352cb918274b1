"""The transaction sent to minFraud and its lazily fetched result."""

import hashlib
from collections.abc import Callable
from enum import StrEnum
from operator import attrgetter

import structlog

from .config import Settings, settings
from .errors import ValidationError
from .request import RequestSubmitter
from .response import Response

logger = structlog.get_logger()

ATTRIBUTE_NAMES: tuple[str, ...] = (
    # Required
    "ip",
    # Billing address
    "city",
    "state",
    "postal",
    "country",
    # Shipping address
    "ship_addr",
    "ship_city",
    "ship_state",
    "ship_postal",
    "ship_country",
    # User
    "email",
    "phone",
    # Credit card
    "bin",
    # Transaction linking
    "session_id",
    "user_agent",
    "accept_language",
    # Transaction
    "txn_id",
    "amount",
    "currency",
    "txn_type",
    # Credit card checks
    "avs_result",
    "cvv_result",
    # Miscellaneous
    "requested_type",
    "forwarded_ip",
)

# Everything sent to the service, in wire order
EXPORTED_ATTRIBUTES: tuple[tuple[str, Callable[["Transaction"], object]], ...] = tuple(
    (name, attrgetter(name))
    for name in (
        "ip",
        "city",
        "state",
        "postal",
        "country",
        "license_key",
        "ship_addr",
        "ship_city",
        "ship_state",
        "ship_postal",
        "ship_country",
        "email_domain",
        "email_md5",
        "phone",
        "bin",
        "session_id",
        "user_agent",
        "accept_language",
        "txn_id",
        "amount",
        "currency",
        "txn_type",
        "avs_result",
        "cvv_result",
        "requested_type",
        "forwarded_ip",
    )
)


class FetchState(StrEnum):
    UNFETCHED = "unfetched"
    FETCHED = "fetched"
    FAILED = "failed"


class ResultCache:
    """Holds at most one successful response.

    A fetch only runs from UNFETCHED or FAILED; once FETCHED the stored
    response is returned without calling ``fetch`` again.
    """

    def __init__(self) -> None:
        self.state = FetchState.UNFETCHED
        self._response: Response | None = None

    def get(self, fetch: Callable[[], Response]) -> Response:
        if self.state == FetchState.FETCHED:
            return self._response
        try:
            response = fetch()
        except Exception:
            self.state = FetchState.FAILED
            raise
        self._response = response
        self.state = FetchState.FETCHED
        return response


class Transaction:
    """Container for the data sent to minFraud.

    Attributes are assigned through keyword arguments, a ``populate``
    callback receiving the new instance, or both::

        txn = Transaction(lambda t: setattr(t, "email", "a@b.com"), ip="1.2.3.4")

    Only ``ip`` is required. Validation runs once, after population.
    """

    __slots__ = tuple(name for name in ATTRIBUTE_NAMES if name != "requested_type") + (
        "_requested_type",
        "_config",
        "_submitter",
        "_cache",
    )

    def __init__(
        self,
        populate: Callable[["Transaction"], None] | None = None,
        *,
        config: Settings | None = None,
        submitter: RequestSubmitter | None = None,
        **attributes,
    ) -> None:
        if submitter is not None:
            if config is not None and config is not submitter.config:
                raise ValueError("config and submitter.config must be the same Settings instance")
            config = submitter.config
        elif config is None:
            config = settings
        self._config = config
        self._submitter = submitter or RequestSubmitter(config=config)
        self._cache = ResultCache()

        for name in ATTRIBUTE_NAMES:
            setattr(self, name, None)
        for name, value in attributes.items():
            if name not in ATTRIBUTE_NAMES:
                raise TypeError(f"Transaction got an unexpected attribute {name!r}")
            setattr(self, name, value)

        if populate is not None:
            populate(self)

        if not self._has_required_attributes():
            raise ValidationError("missing required attribute: ip")
        self._validate_attributes()

    def _has_required_attributes(self) -> bool:
        return self.ip is not None

    def _validate_attributes(self) -> None:
        for name in ("ip",):
            if not isinstance(getattr(self, name), str):
                raise ValidationError(f"{name} must be a string")

    # -- derived fields ------------------------------------------------------

    @property
    def requested_type(self) -> str | None:
        """Instance override, else the configured default."""
        if self._requested_type is not None:
            return self._requested_type
        return self._config.requested_type

    @requested_type.setter
    def requested_type(self, value: str | None) -> None:
        self._requested_type = value

    @property
    def email_domain(self) -> str:
        if self.email is None:
            return ""
        return str(self.email).rsplit("@", 1)[-1]

    @property
    def email_md5(self) -> str:
        """MD5 of the whole address; the address itself is never sent."""
        email = "" if self.email is None else str(self.email)
        return hashlib.md5(email.encode("utf-8")).hexdigest()

    @property
    def license_key(self) -> str:
        return self._config.license_key

    def exported_attributes(self) -> dict[str, object]:
        return {name: getter(self) for name, getter in EXPORTED_ATTRIBUTES}

    # -- result --------------------------------------------------------------

    def result(self) -> Response:
        """The decoded minFraud response, fetched on first use.

        Raises ProtocolError when the service reports an error or cannot be
        reached; nothing is cached in that case.
        """
        return self._cache.get(self._fetch)

    def _fetch(self) -> Response:
        response = self._submitter.submit(self)
        logger.debug("transaction_result_cached", txn_id=self.txn_id, maxmind_id=response.maxmind_id)
        return response

    @property
    def result_state(self) -> FetchState:
        return self._cache.state

    def risk_score(self) -> float:
        """Chance the transaction is fraudulent, 0.01 to 100.0 percent.

        A score of 20 indicates a 20% chance that the transaction is fraud.
        """
        return self.result().risk_score

    def distance(self) -> str:
        return self.result().distance

    def country_code(self) -> str:
        return self.result().country_code

    def ip_region(self) -> str:
        return self.result().ip_region

    def ip_city(self) -> str:
        return self.result().ip_city

    def ip_latitude(self) -> str:
        return self.result().ip_latitude

    def ip_longitude(self) -> str:
        return self.result().ip_longitude

    def high_risk_country(self) -> bool:
        return self.result().high_risk_country

    def ip_postal_code(self) -> str:
        return self.result().ip_postal_code

    def ip_accuracy_radius(self) -> str:
        return self.result().ip_accuracy_radius

    def ip_area_code(self) -> str:
        return self.result().ip_area_code

    def ip_region_name(self) -> str:
        return self.result().ip_region_name

    def ip_country_name(self) -> str:
        return self.result().ip_country_name

    def anonymous_proxy(self) -> bool:
        return self.result().anonymous_proxy

    def corporate_proxy(self) -> bool:
        return self.result().corporate_proxy

    def maxmind_id(self) -> str:
        return self.result().maxmind_id

    def __repr__(self) -> str:
        return f"<Transaction ip={self.ip!r} txn_id={self.txn_id!r} result={self._cache.state}>"
