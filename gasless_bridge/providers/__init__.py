"""Network collaborators: the Relay HTTP API and chain JSON-RPC."""

from .relay import RelayProvider
from .rpc import ChainReader

__all__ = ["RelayProvider", "ChainReader"]
