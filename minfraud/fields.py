"""Mapping between transaction attribute names and minFraud wire parameters."""

from collections.abc import Mapping
from typing import Any

FIELD_MAP: dict[str, str] = {
    "ip": "i",
    "city": "city",
    "state": "region",
    "postal": "postal",
    "country": "country",
    "license_key": "license_key",
    "ship_addr": "shipAddr",
    "ship_city": "shipCity",
    "ship_state": "shipRegion",
    "ship_postal": "shipPostal",
    "ship_country": "shipCountry",
    "email_domain": "domain",
    "email_md5": "emailMD5",
    "phone": "custPhone",
    "bin": "bin",
    "session_id": "sessionID",
    "user_agent": "user_agent",
    "accept_language": "accept_language",
    "txn_id": "txnID",
    "amount": "order_amount",
    "currency": "order_currency",
    "txn_type": "txn_type",
    "avs_result": "avs_result",
    "cvv_result": "cvv_result",
    "requested_type": "requested_type",
    "forwarded_ip": "forwardedIP",
}


def encode_fields(attributes: Mapping[str, Any]) -> dict[str, Any]:
    """Rename exported attributes to their wire names.

    Keys without a wire name are dropped. Values, including ``None``, are
    passed through untouched.
    """
    return {
        FIELD_MAP[name]: value for name, value in attributes.items() if name in FIELD_MAP
    }
