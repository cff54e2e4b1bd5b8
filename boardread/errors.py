"""Exception types raised inside the analysis pipeline."""

from __future__ import annotations


class BoardreadError(Exception):
    """Base class for pipeline errors."""


class TransportError(BoardreadError):
    """The vision model could not be reached or returned nothing usable.

    Covers provider errors, non-2xx responses, timeouts, empty bodies and a
    missing API key. Never retried through the validation loop.
    """


class InvalidImageError(BoardreadError):
    """The upload could not be decoded as a supported image."""
