"""
Parse configuration model and YAML I/O for omnidata.

``ParseConfiguration`` is the immutable option set resolved once per
parser.  It is a frozen Pydantic model so that a single ``CSVParser``
can safely open many independent sessions that all read the same
configuration.

Key functions:
- load_config(path) -> ParseConfiguration: Load and validate from YAML.
- save_config(config, path): Serialize to YAML.

Why Pydantic + YAML:
- Pydantic gives strict validation (single-character tokens, positive
  chunk sizes) with clear error messages.
- YAML is human-editable, so a dialect can be checked into a project
  next to the data it describes.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

from omnidata.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

HeaderMode = Literal["none", "first_row", "explicit"]


class ParseConfiguration(BaseModel):
    """Options that control tokenization and header handling.

    ``encoding`` and ``chunk_size`` are hints for the file driver
    (``omnidata.reader``); the parsing core never looks at them.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    delimiter: str = Field(",", min_length=1, max_length=1)
    quote: str = Field('"', min_length=1, max_length=1)
    escape: str | None = Field(
        None,
        min_length=1,
        max_length=1,
        description="Escape character inside quoted fields; None means `quote`",
    )
    skip_empty_lines: bool = True
    header_mode: HeaderMode = "none"
    header_names: list[str] | None = None
    encoding: str = "utf-8"
    chunk_size: int = Field(8192, gt=0)

    @property
    def escape_char(self) -> str:
        """The effective escape character (``quote`` unless overridden)."""
        return self.quote if self.escape is None else self.escape

    @model_validator(mode="after")
    def _check_header_names(self) -> ParseConfiguration:
        if self.header_mode == "explicit" and self.header_names is None:
            raise ConfigurationError(
                "header_mode='explicit' requires header_names"
            )
        if self.header_mode != "explicit" and self.header_names is not None:
            raise ConfigurationError(
                f"header_names is only used with header_mode='explicit', "
                f"got header_mode='{self.header_mode}'"
            )
        return self

    @classmethod
    def from_options(
        cls,
        headers: bool | list[str] | None = None,
        **options: Any,
    ) -> ParseConfiguration:
        """Build a configuration from the loose ``headers=`` option shape.

        ``headers=True`` means the first row is the header, a list of
        names means explicit headers, and ``False``/``None`` means no
        header.  All other keyword options are passed through.
        """
        if headers is True:
            options.setdefault("header_mode", "first_row")
        elif isinstance(headers, (list, tuple)):
            options.setdefault("header_mode", "explicit")
            options.setdefault("header_names", list(headers))
        return cls(**options)


def resolve_config(
    config: ParseConfiguration | None = None,
    **options: Any,
) -> ParseConfiguration:
    """Return *config*, or build one from keyword *options*.

    Passing both is ambiguous and rejected.
    """
    if config is not None:
        if options:
            raise ConfigurationError(
                "Pass either a ParseConfiguration or keyword options, not both "
                f"(got options: {sorted(options)})"
            )
        return config
    return ParseConfiguration.from_options(**options)


def load_config(path: str | Path) -> ParseConfiguration:
    """Load and validate a YAML file into a ParseConfiguration.

    The file may use the loose ``headers:`` key accepted by
    ``ParseConfiguration.from_options``.  Unknown keys are rejected.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigurationError: If the file is empty or not a mapping.
        pydantic.ValidationError: If the YAML content fails schema validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigurationError(f"Config file is empty: {path}")
    if not isinstance(raw, dict):
        raise ConfigurationError(
            f"Config file must contain a mapping, got {type(raw).__name__}: {path}"
        )
    logger.info("Loaded parse config from %s", path)
    return ParseConfiguration.from_options(**{str(k): v for k, v in raw.items()})


def save_config(config: ParseConfiguration, path: str | Path) -> None:
    """Serialize a ParseConfiguration to YAML with a header comment."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        f.write("# omnidata parse configuration\n\n")
        yaml.dump(
            data,
            f,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )
    logger.info("Saved parse config to %s", path)
