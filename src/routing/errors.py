"""
Exceptions raised by pool discovery, quoting and route resolution.
"""


class RoutingError(Exception):
    """Base exception for routing operations."""
    pass


class PoolNotDiscoverable(RoutingError):
    """Raised when neither the deployment event nor proxy storage yields pool params."""

    def __init__(self, token: str, chain_id: int, reason: str = ""):
        message = f"Could not discover pool params for {token} on chain {chain_id}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.token = token
        self.chain_id = chain_id


class RouteNotFound(RoutingError):
    """Raised when a coin's ancestry does not reach the anchor token."""
    pass


class UnsupportedChainError(RoutingError):
    """Raised when a chain has no configured contract for an operation."""
    pass


class QuoteError(RoutingError):
    """Raised when the quoter returns an unusable response."""
    pass


class ClientCapabilityError(RoutingError):
    """Raised when a chain client lacks a mandatory capability."""
    pass
