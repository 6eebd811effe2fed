from corsrelay.relay import Relay

__all__ = ["Relay"]
