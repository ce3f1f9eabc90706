#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/canonmark/options/base.py
"""Base classes for formatter options.

Options are frozen dataclasses. A changed configuration is always a new
instance, built with :meth:`CloneFrozenMixin.create_updated`, so one options
object can be shared between renders without being mutated.

"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Copy-with-changes support for frozen option dataclasses."""

    @classmethod
    def field_names(cls) -> frozenset[str]:
        """Names of every option field."""
        return frozenset(f.name for f in fields(cls))  # type: ignore[arg-type]

    def create_updated(self, **kwargs: Any) -> Self:
        """Return a copy with some fields replaced.

        The copy goes through ``__post_init__`` again, so the new values are
        validated exactly like constructor arguments.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance; ``self`` is unchanged

        Raises
        ------
        TypeError
            If a keyword does not name a field
        ValueError
            If a new value is out of range

        """
        unknown = set(kwargs) - self.field_names()
        if unknown:
            raise TypeError(f"{type(self).__name__} has no option(s): {', '.join(sorted(unknown))}")
        return replace(self, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Return the options as a plain ``{field name: value}`` mapping."""
        return {f.name: getattr(self, f.name) for f in fields(self)}  # type: ignore[arg-type]


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for renderer options.

    Renderers check the type of the options they receive against their own
    subclass (see :meth:`canonmark.renderers.base.BaseRenderer._validate_options_type`).
    Subclasses extend ``__post_init__`` with their range checks.

    """

    def __post_init__(self) -> None:
        pass
