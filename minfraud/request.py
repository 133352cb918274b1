"""Submission of transactions to the minFraud service over HTTPS."""

from typing import TYPE_CHECKING, Any

import httpx
import structlog

from .config import Settings, settings
from .errors import TransportError
from .fields import encode_fields
from .response import Response

if TYPE_CHECKING:
    from .transaction import Transaction

logger = structlog.get_logger()


def _form_payload(fields: dict[str, Any]) -> dict[str, str]:
    # Unset attributes still go out, as empty parameters
    return {name: "" if value is None else str(value) for name, value in fields.items()}


class RequestSubmitter:
    """Encodes a transaction, posts it and decodes the reply.

    A failed submission raises and returns nothing, so callers holding a
    cache stay empty and may try again.
    """

    def __init__(
        self,
        config: Settings | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._config = config or settings
        self._client = client

    @property
    def config(self) -> Settings:
        return self._config

    def submit(self, transaction: "Transaction") -> Response:
        payload = _form_payload(encode_fields(transaction.exported_attributes()))
        logger.info(
            "minfraud_request_sent",
            uri=self._config.uri,
            txn_id=transaction.txn_id,
            requested_type=transaction.requested_type,
        )

        body = self._post(payload)
        response = Response.from_body(body)

        if response.errored:
            error = response.error()
            logger.warning(
                "minfraud_request_failed",
                txn_id=transaction.txn_id,
                code=error.code,
            )
            raise error

        logger.info(
            "minfraud_response_received",
            txn_id=transaction.txn_id,
            maxmind_id=response.maxmind_id,
            risk_score=response.risk_score,
            warning=response.warning or None,
        )
        return response

    def _post(self, payload: dict[str, str]) -> str:
        try:
            if self._client is not None:
                http_response = self._client.post(self._config.uri, data=payload)
            else:
                with httpx.Client(timeout=httpx.Timeout(self._config.timeout_seconds)) as client:
                    http_response = client.post(self._config.uri, data=payload)
            http_response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.warning("minfraud_request_failed", code="TRANSPORT_ERROR", status_code=status)
            raise TransportError(f"minFraud responded with HTTP {status}", status_code=status) from exc
        except httpx.HTTPError as exc:
            logger.warning("minfraud_request_failed", code="TRANSPORT_ERROR", error=str(exc))
            raise TransportError(f"minFraud request failed: {exc}") from exc
        return http_response.text


def submit(transaction: "Transaction", config: Settings | None = None) -> Response:
    """Post a single transaction with a throwaway submitter."""
    return RequestSubmitter(config=config).submit(transaction)
