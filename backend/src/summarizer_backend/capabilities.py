"""Startup-resolved availability of optional external providers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Configured(Generic[T]):
    """The provider has credentials; ``client`` performs the calls."""

    client: T


@dataclass(frozen=True, slots=True)
class Unconfigured:
    """The provider is disabled; ``reason`` is shown to API callers."""

    reason: str


Capability = Union[Configured[T], Unconfigured]


__all__ = ["Capability", "Configured", "Unconfigured"]
