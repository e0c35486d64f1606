"""Transcript providers."""

from .base import TranscriptProvider
from .gateway import GatewayProvider

__all__ = ["TranscriptProvider", "GatewayProvider"]
