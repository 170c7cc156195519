"""Per-method configuration, frozen after construction."""

from __future__ import annotations

from pydantic import BaseModel


class ValidationConfig(BaseModel):
    """Options given to one validated method.

    Attributes:
        quiet: Suppress unexpected-parameter diagnostics for this method.
            None defers to the process-wide default
            (see :func:`validated_method.config.settings.is_quiet`).
        name: Name reported in diagnostics; defaults to the callback's
            qualified name.
    """

    model_config = {"frozen": True}

    quiet: bool | None = None
    name: str | None = None
