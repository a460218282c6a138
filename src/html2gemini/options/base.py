#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2gemini/options/base.py
"""Base classes for renderer options.

This module defines the foundation shared by the option dataclasses used
throughout the html2gemini rendering pipeline.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from html2gemini.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    Adds the ability to create modified copies of frozen dataclass instances
    and to build instances from plain mappings such as parsed config files.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)

    @classmethod
    def field_names(cls) -> frozenset[str]:
        """Return the names of all dataclass fields."""
        return frozenset(f.name for f in fields(cls))  # type: ignore[arg-type]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        """Build an instance from a mapping of option names to values.

        Hyphenated keys are accepted and mapped to their underscored field
        names, so ``link-emit-frequency`` and ``link_emit_frequency`` are
        equivalent.

        Parameters
        ----------
        data : Mapping[str, Any]
            Option values keyed by field name

        Returns
        -------
        Self
            New options instance

        Raises
        ------
        ValidationError
            If a key does not name a field, or a value fails validation

        """
        known = cls.field_names()
        kwargs: dict[str, Any] = {}
        for raw_key, value in data.items():
            key = str(raw_key).replace("-", "_")
            if key not in known:
                raise ValidationError(
                    f"Unknown option for {cls.__name__}: {raw_key!r}",
                    parameter_name=str(raw_key),
                    parameter_value=value,
                )
            kwargs[key] = cls._coerce_field(key, value)

        try:
            return cls(**kwargs)
        except (TypeError, ValueError) as e:
            raise ValidationError(str(e), original_error=e) from e

    @classmethod
    def _coerce_field(cls, name: str, value: Any) -> Any:
        """Convert a raw mapping value for ``name``; subclasses override for nested options."""
        return value
