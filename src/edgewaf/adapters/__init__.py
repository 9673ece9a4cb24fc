"""Adapters binding the domain ports to concrete transports."""

from __future__ import annotations

from .http_client import ApiClient, default_client_factory

__all__ = ["ApiClient", "default_client_factory"]
