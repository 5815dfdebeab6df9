"""Exceptions raised for rejected user input."""

from __future__ import annotations


class AgendaError(ValueError):
    """Base class for recoverable input errors."""


class InvalidSpeedInput(AgendaError):
    """Speed factor was not an integer in the accepted range."""


class InvalidConfirmation(AgendaError):
    """Confirmation answer was neither ``yes`` nor ``no``."""


class InvalidQueryFormat(AgendaError):
    """Query line was neither ``now`` nor ``HH:MM``."""


class InvalidActivitySpec(AgendaError):
    """An activity definition could not be parsed."""
