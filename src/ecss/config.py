from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any, Mapping


@dataclass(frozen=True)
class EcssConfig:
    extensions: tuple[str, ...] = ("css",)
    reapply_every_cycle: bool = False  # False: push values only for refreshed selectors
    warn_unsupported_properties: bool = True
    log_level: str = "WARNING"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> EcssConfig:
        """Build a config from a plain mapping (e.g. decoded JSON), ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in data.items() if k in known}
        if "extensions" in kwargs:
            kwargs["extensions"] = tuple(kwargs["extensions"])
        return cls(**kwargs)


def configure_logging(config: EcssConfig) -> None:
    """Apply the configured log level to the ``ecss`` logger hierarchy."""
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("ecss").setLevel(config.log_level.upper())
