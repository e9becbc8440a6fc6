"""Base classes for difftrail options.

Options are frozen dataclasses. Each field carries ``metadata["help"]`` so
configuration errors and documentation can describe it.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from difftrail.exceptions import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

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


@dataclass(frozen=True)
class BaseOptions(CloneFrozenMixin):
    """Base class for options that can be loaded from a config table."""

    @classmethod
    def _convert_value(cls, name: str, value: Any) -> Any:
        """Convert a raw config value for field ``name``; subclasses override."""
        return value

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> Self:
        """Build options from a configuration table.

        Unknown keys are ignored with a warning.

        Parameters
        ----------
        mapping : Mapping[str, Any] or None
            Table from a configuration file (e.g. the ``[highlight]`` table)

        Returns
        -------
        Self
            Options with the given values applied over the defaults

        Raises
        ------
        ValidationError
            If the mapping is not a table or a value is invalid

        """
        if not mapping:
            return cls()
        if not isinstance(mapping, Mapping):
            raise ValidationError(
                f"{cls.__name__} configuration must be a table, got {type(mapping).__name__}",
                parameter_value=mapping,
            )

        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in mapping.items():
            name = key.replace("-", "_")
            if name not in known:
                logger.warning("Ignoring unknown %s option: %s", cls.__name__, key)
                continue
            kwargs[name] = cls._convert_value(name, value)
        return cls(**kwargs)
