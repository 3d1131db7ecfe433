"""Market parameters, balances and configured rate models."""

from jumprate.data.provider_factory import create_provider, create_rate_model

__all__ = ["create_provider", "create_rate_model"]
