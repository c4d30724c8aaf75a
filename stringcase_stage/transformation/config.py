"""
StringCase Stage Configuration

Parses the comma separated field lists once, at startup.
The resulting config is immutable and shared by every record of a run.
"""

import re
from dataclasses import dataclass
from typing import Mapping, Optional

import logging

logger = logging.getLogger(__name__)

UPPER_FIELDS = "upperFields"
LOWER_FIELDS = "lowerFields"

PROPERTY_DESCRIPTIONS = {
    UPPER_FIELDS: "A comma separated list of fields to uppercase. Each field must be of type String.",
    LOWER_FIELDS: "A comma separated list of fields to lowercase. Each field must be of type String.",
}

SPLIT_ON = re.compile(r"\s*,\s*")


def parse_field_list(raw: Optional[str]) -> frozenset[str]:
    """
    Parse a comma separated list of field names

    Args:
        raw: Raw property value, may be None

    Returns:
        frozenset: Field names; empty for None, "" or whitespace-only input
    """
    if raw is None:
        return frozenset()

    raw = raw.strip()
    if not raw:
        return frozenset()

    return frozenset(token for token in SPLIT_ON.split(raw) if token)


@dataclass(frozen=True)
class StringCaseConfig:
    """Fields to uppercase and lowercase"""

    upper_fields: frozenset = frozenset()
    lower_fields: frozenset = frozenset()

    @classmethod
    def from_strings(
        cls, upper_fields: Optional[str] = None, lower_fields: Optional[str] = None
    ) -> "StringCaseConfig":
        return cls(
            upper_fields=parse_field_list(upper_fields),
            lower_fields=parse_field_list(lower_fields),
        )

    @classmethod
    def from_properties(cls, properties: Mapping[str, Optional[str]]) -> "StringCaseConfig":
        """Build from a host-style property map keyed by upperFields / lowerFields"""
        return cls.from_strings(
            properties.get(UPPER_FIELDS), properties.get(LOWER_FIELDS)
        )

    @classmethod
    def from_env(cls, prefix: str = "STRINGCASE_") -> "StringCaseConfig":
        """Build from <prefix>UPPER_FIELDS and <prefix>LOWER_FIELDS"""
        from stringcase_stage.coreutils.env import env_get

        config = cls.from_strings(
            env_get(f"{prefix}UPPER_FIELDS"), env_get(f"{prefix}LOWER_FIELDS")
        )
        logger.debug(f"Loaded config from environment: {config}")
        return config

    @property
    def overlap(self) -> frozenset:
        """Fields named in both lists; uppercase wins for these"""
        return self.upper_fields & self.lower_fields

    @property
    def all_fields(self) -> frozenset:
        return self.upper_fields | self.lower_fields

    @property
    def is_empty(self) -> bool:
        return not self.upper_fields and not self.lower_fields
