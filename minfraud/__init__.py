"""Client for the minFraud fraud-scoring service."""

from .config import Settings, settings
from .errors import MinfraudError, ProtocolError, TransportError, ValidationError
from .fields import FIELD_MAP, encode_fields
from .models import RiskSummary
from .request import RequestSubmitter, submit
from .response import Response
from .transaction import FetchState, Transaction

__all__ = [
    "FIELD_MAP",
    "FetchState",
    "MinfraudError",
    "ProtocolError",
    "RequestSubmitter",
    "Response",
    "RiskSummary",
    "Settings",
    "Transaction",
    "TransportError",
    "ValidationError",
    "encode_fields",
    "settings",
    "submit",
]
