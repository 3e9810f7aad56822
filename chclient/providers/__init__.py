"""Bundled client implementations, discovered through entry points."""

from .grpc_client import GrpcClient, GrpcOption
from .http_client import HttpClient, HttpConnectionProvider, HttpOption

__all__ = [
    "GrpcClient",
    "GrpcOption",
    "HttpClient",
    "HttpConnectionProvider",
    "HttpOption",
]
