# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Scanner name -> SARIF normalizer registry."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from .base import BaseSarif

NormalizerT = TypeVar("NormalizerT", bound="type[BaseSarif]")

_NORMALIZERS: dict[str, type[BaseSarif]] = {}


def register_normalizer(scanner_name: str) -> Callable[[NormalizerT], NormalizerT]:
    """Class decorator registering a normalizer for results named ``scanner_name``."""

    def decorator(cls: NormalizerT) -> NormalizerT:
        _NORMALIZERS[scanner_name] = cls
        return cls

    return decorator


def get_normalizer(scanner_name: str) -> type[BaseSarif] | None:
    return _NORMALIZERS.get(scanner_name)


def registered_scanners() -> list[str]:
    return sorted(_NORMALIZERS)


def unregister_normalizer(scanner_name: str) -> None:
    _NORMALIZERS.pop(scanner_name, None)


__all__ = ["get_normalizer", "register_normalizer", "registered_scanners", "unregister_normalizer"]
