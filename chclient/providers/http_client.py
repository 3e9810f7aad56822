"""HTTP client implementation descriptor and its option set."""

from enum import Enum
from typing import Optional, Type

from ..core.config.options import OptionDescriptor
from ..core.types import Protocol


class HttpConnectionProvider(Enum):
    """Underlying HTTP connection implementation."""

    HTTP_URL_CONNECTION = "http_url_connection"
    HTTP_CLIENT = "http_client"
    APACHE_HTTP_CLIENT = "apache_http_client"


class HttpOption(OptionDescriptor, Enum):
    """Options only understood by the HTTP client."""

    ALLOW_URLS = ("allow_urls", "", "Comma separated URL patterns the client may connect to.")
    CONNECTION_PROVIDER = ("http_connection_provider", HttpConnectionProvider.HTTP_URL_CONNECTION,
                           "HTTP connection provider.")
    CUSTOM_HEADERS = ("custom_http_headers", "", "Comma separated custom HTTP headers, e.g. a=b,c=d.")
    CUSTOM_PARAMS = ("custom_http_params", "", "Comma separated custom query parameters, e.g. a=b,c=d.")
    DEFAULT_RESPONSE = ("http_server_default_response", "Ok.\n", "Default response of the server health check.")
    KEEP_ALIVE = ("http_keep_alive", True, "Whether to use keep-alive or not.")
    RECEIVE_QUERY_PROGRESS = ("receive_query_progress", True, "Whether to receive query progress headers.")
    WEB_CONTEXT = ("web_context", "/", "Web context.")


class HttpClient:
    """Client implementation speaking HTTP."""

    name = "http"

    @property
    def option_class(self) -> Optional[Type]:
        return HttpOption

    def accept(self, protocol: Protocol) -> bool:
        return protocol in (Protocol.ANY, Protocol.HTTP)
