"""
Tunable settings for smart navigation.

The leaf threshold, the breakout lists and the foldable annotations were
calibrated empirically; they are configuration rather than invariants and
can be overridden from a YAML file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from .constants import (
    COLLECTION_ANNOTATIONS,
    COLLECTION_MIN_ITEMS,
    SMARTNAV_BREAKOUT_ROLES,
    SMARTNAV_BREAKOUT_TAGS,
    SMARTNAV_MAX_CHARCOUNT,
)
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

# Top-level key that may wrap the settings in a shared YAML file
CONFIG_SECTION = "smartnav"


@dataclass
class NavigationConfig:
    """Configuration for leaf classification and description output.

    Attributes:
        max_charcount: Longest collapsed text a single navigation unit may have
        breakout_tags: Element names that force descent when found with content
        breakout_roles: ARIA roles that force descent when found with content
        collection_annotations: Annotations folded into a collection summary
        collection_min_items: Minimum number of records before folding
        structural_queries: Use XPath breakout queries; when False the smart
            walker behaves like the linear walker

    Example:
        >>> config = NavigationConfig(max_charcount=800)
        >>> config.breakout_xpath.startswith(".//blockquote")
        True
    """

    max_charcount: int = SMARTNAV_MAX_CHARCOUNT
    breakout_tags: tuple[str, ...] = SMARTNAV_BREAKOUT_TAGS
    breakout_roles: tuple[str, ...] = SMARTNAV_BREAKOUT_ROLES
    collection_annotations: tuple[str, ...] = COLLECTION_ANNOTATIONS
    collection_min_items: int = COLLECTION_MIN_ITEMS
    structural_queries: bool = True
    _xpath_cache: str | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Normalize list settings and validate values."""
        self.breakout_tags = tuple(tag.lower() for tag in self.breakout_tags)
        self.breakout_roles = tuple(self.breakout_roles)
        self.collection_annotations = tuple(self.collection_annotations)

        problems = []
        if not isinstance(self.max_charcount, int) or self.max_charcount < 1:
            problems.append(f"max_charcount must be a positive integer, got {self.max_charcount!r}")
        if not isinstance(self.collection_min_items, int) or self.collection_min_items < 2:
            problems.append(
                f"collection_min_items must be an integer of at least 2, "
                f"got {self.collection_min_items!r}"
            )
        for tag in self.breakout_tags:
            if not tag.isalnum():
                problems.append(f"breakout tag '{tag}' is not a valid element name")
        for role in self.breakout_roles:
            if not role or '"' in role:
                problems.append(f"breakout role {role!r} is not a valid role name")
        if problems:
            raise ConfigurationError("Invalid navigation configuration", errors=problems)

    @property
    def breakout_xpath(self) -> str:
        """Union XPath matching every breakout descendant of a context node."""
        if self._xpath_cache is None:
            parts = [f".//{tag}" for tag in self.breakout_tags]
            parts.extend(f'.//*[@role="{role}"]' for role in self.breakout_roles)
            self._xpath_cache = " | ".join(parts)
        return self._xpath_cache

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: str | None = None) -> NavigationConfig:
        """Build a configuration from a mapping.

        Args:
            data: Settings mapping, optionally wrapped in a ``smartnav`` key
            source: Description of where the data came from, for errors

        Returns:
            NavigationConfig with the given overrides applied

        Raises:
            ConfigurationError: If the mapping has unknown keys or bad values
        """
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration must be a mapping", source=source)

        if CONFIG_SECTION in data:
            data = data[CONFIG_SECTION]
            if not isinstance(data, dict):
                raise ConfigurationError(f"'{CONFIG_SECTION}' must be a mapping", source=source)

        known = {f.name for f in fields(cls) if f.init}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(
                "Unknown configuration keys",
                errors=[f"unknown key '{key}'" for key in unknown],
                source=source,
            )

        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            if key in ("breakout_tags", "breakout_roles", "collection_annotations"):
                if not isinstance(value, list | tuple):
                    raise ConfigurationError(f"'{key}' must be a list", source=source)
                value = tuple(str(item) for item in value)
            kwargs[key] = value

        try:
            return cls(**kwargs)
        except ConfigurationError as e:
            if source and e.source is None:
                raise ConfigurationError(
                    "Invalid navigation configuration", errors=e.errors, source=source
                ) from e
            raise

    @classmethod
    def from_yaml(cls, path: str | Path) -> NavigationConfig:
        """Load a configuration from a YAML file.

        Example YAML file:
            ```yaml
            smartnav:
              max_charcount: 800
              collection_annotations: [Link, Button]
            ```

        Args:
            path: Path to the YAML file

        Returns:
            NavigationConfig read from the file

        Raises:
            ConfigurationError: If the file cannot be parsed or is invalid
            FileNotFoundError: If the file does not exist
        """
        file_path = Path(path)

        if not file_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        try:
            with open(file_path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to parse YAML file: {e}", source=str(path)) from e

        if data is None:
            logger.warning("Configuration file %s is empty, using defaults", path)
            return cls()

        config = cls.from_dict(data, source=str(path))
        logger.debug(f"Loaded navigation configuration from {path}")
        return config

    def to_dict(self) -> dict[str, Any]:
        """Return the settings as plain YAML-friendly values."""
        return {
            "max_charcount": self.max_charcount,
            "breakout_tags": list(self.breakout_tags),
            "breakout_roles": list(self.breakout_roles),
            "collection_annotations": list(self.collection_annotations),
            "collection_min_items": self.collection_min_items,
            "structural_queries": self.structural_queries,
        }
