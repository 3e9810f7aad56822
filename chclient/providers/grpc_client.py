"""gRPC client implementation descriptor and its option set."""

from enum import Enum
from typing import Optional, Type

from ..core.config.options import OptionDescriptor
from ..core.types import Protocol


class GrpcOption(OptionDescriptor, Enum):
    """Options only understood by the gRPC client."""

    MAX_INBOUND_MESSAGE_SIZE = ("max_inbound_message_size", 4 * 1024 * 1024,
                                "Maximum message size allowed to be received.")
    MAX_INBOUND_METADATA_SIZE = ("max_inbound_metadata_size", 0,
                                 "Maximum metadata size allowed to be received, 0 means default.")
    USE_FULL_STREAM_DECOMPRESSION = ("use_full_stream_decompression", False,
                                     "Whether to decompress the whole stream instead of each block.")
    USE_TOKEN_AUTH = ("use_token_auth", False, "Whether to authenticate with an access token.")


class GrpcClient:
    """Client implementation speaking gRPC."""

    name = "grpc"

    @property
    def option_class(self) -> Optional[Type]:
        return GrpcOption

    def accept(self, protocol: Protocol) -> bool:
        return protocol in (Protocol.ANY, Protocol.GRPC)
