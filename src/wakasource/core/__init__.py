"""Core types shared by the resolver, aggregator and pipeline."""

from .errors import InvalidConfiguration, InvalidResponse, TransportFailure, UpstreamError, WakaSourceError
from .result import Err, Ok, Result

__all__ = [
    "WakaSourceError",
    "InvalidConfiguration",
    "InvalidResponse",
    "UpstreamError",
    "TransportFailure",
    "Ok",
    "Err",
    "Result",
]
