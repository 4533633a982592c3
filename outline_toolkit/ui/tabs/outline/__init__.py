"""Outline panel coordinators."""

from .reveal_coordinator import RevealCoordinator

__all__ = ["RevealCoordinator"]
