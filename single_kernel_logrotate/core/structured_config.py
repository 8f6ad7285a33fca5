#!/usr/bin/env python3
# Copyright 2024 Canonical Ltd.
# See LICENSE file for licensing details.

"""Structure configuration for the logrotate charms."""

from collections.abc import Iterator, Mapping, Sequence
from enum import Enum
from typing import Annotated, Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from single_kernel_logrotate.config.literals import (
    IGNORED_RULE_SUFFIX_PATTERN,
    IGNORED_RULE_SUFFIXES,
)
from single_kernel_logrotate.config.models import LogRotateConfig
from single_kernel_logrotate.exceptions import (
    InvalidEnumValueError,
    InvalidFieldValueError,
    MissingRequiredFieldError,
)


class BaseConfigModel(BaseModel):
    """Class to be used for defining the structured configuration options."""

    def __getitem__(self, x):
        """Return the item using the notation instance[key]."""
        return getattr(self, x.replace("-", "_"))


# Useful enums
class Frequency(str, Enum):
    """How often a rule rotates its logs."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class Compression(str, Enum):
    """The three accepted values of the `compress` parameter."""

    ENABLED = "enabled"
    DISABLED = "disabled"
    DELAYED = "delayed"

    @classmethod
    def from_param(cls, value: Any) -> "Compression":
        """Maps the `true`, `false`, `"delayed"` input onto a member."""
        if isinstance(value, Compression):
            return value
        if value is True:
            return cls.ENABLED
        if value is False:
            return cls.DISABLED
        if value == "delayed":
            return cls.DELAYED
        raise ValueError(value)

    @property
    def directives(self) -> list[str]:
        """The logrotate directives emitted for this compression mode."""
        match self:
            case Compression.ENABLED:
                return ["compress"]
            case Compression.DELAYED:
                return ["compress", "delaycompress"]
            case _:
                return ["nocompress"]


class ScriptSlot(str, Enum):
    """The script hooks a logrotate stanza can define."""

    PREROTATE = "prerotate"
    POSTROTATE = "postrotate"
    FIRSTACTION = "firstaction"
    LASTACTION = "lastaction"

    @property
    def param(self) -> str:
        """The rule parameter holding the script body."""
        return f"{self.value}_script"


def _normalize_logs(value: Any) -> tuple[str, ...] | Any:
    """Turns a single path or a sequence of paths into a tuple of paths."""
    if isinstance(value, str):
        return (value,) if value else ()
    if isinstance(value, Sequence):
        return tuple(value)
    return value


def _valid_rule_name(name: Any) -> bool:
    """Whether `name` can be used as a file name logrotate will include."""
    if not isinstance(name, str) or not name or name in (".", ".."):
        return False
    if "/" in name or not name.isprintable():
        return False
    if IGNORED_RULE_SUFFIX_PATTERN in name:
        return False
    return not name.endswith(IGNORED_RULE_SUFFIXES)


class LogRotateRule(BaseModel):
    """One named logrotate stanza.

    Instances are built from loose parameters with `LogRotateRule.from_params`,
    which normalises the input and reports the first invalid parameter as a
    `RuleConfigError`.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    logs: tuple[Annotated[str, Field(pattern=r"^/")], ...] = Field(min_length=1)
    compress: Compression = Compression.ENABLED
    create: str | None = None
    frequency: Frequency = Frequency.DAILY
    keep: Annotated[int, Field(strict=True, gt=0)] = LogRotateConfig.default_keep
    missingok: bool = True
    rotate_if_empty: bool = True
    sharedscripts: bool = False
    prerotate_script: str | None = None
    postrotate_script: str | None = None
    firstaction_script: str | None = None
    lastaction_script: str | None = None

    @property
    def scripts(self) -> Iterator[tuple[ScriptSlot, str]]:
        """The supplied scripts, in slot declaration order."""
        for slot in ScriptSlot:
            body = getattr(self, slot.param)
            if body is not None:
                yield slot, body

    @classmethod
    def from_params(cls, name: Any, params: Any) -> "LogRotateRule":
        """Normalises and validates the parameters of the rule `name`.

        Raises:
            MissingRequiredFieldError: if no logs were given.
            InvalidEnumValueError: if frequency or compress are not accepted values.
            InvalidFieldValueError: for any other malformed parameter.
        """
        if not _valid_rule_name(name):
            raise InvalidFieldValueError(str(name), "name", name)

        if params is not None and not isinstance(params, Mapping):
            raise InvalidFieldValueError(name, "rule", params)

        # Unset and null parameters both fall back to their default.
        values: dict[str, Any] = {}
        for key, value in (params or {}).items():
            if not isinstance(key, str):
                raise InvalidFieldValueError(name, str(key), value)
            if value is not None:
                values[key.replace("-", "_")] = value

        values["logs"] = _normalize_logs(values.get("logs", ()))
        if values["logs"] == ():
            raise MissingRequiredFieldError(name, "logs")

        if "frequency" in values:
            try:
                values["frequency"] = Frequency(values["frequency"])
            except ValueError as e:
                raise InvalidEnumValueError(name, "frequency", values["frequency"]) from e

        if "compress" in values:
            try:
                values["compress"] = Compression.from_param(values["compress"])
            except ValueError as e:
                raise InvalidEnumValueError(name, "compress", values["compress"]) from e

        try:
            return cls.model_validate({**values, "name": name})
        except ValidationError as e:
            error = e.errors()[0]
            field = str(error["loc"][0]) if error["loc"] else "rule"
            raise InvalidFieldValueError(name, field, values.get(field)) from e


class LogRotateCharmConfig(BaseConfigModel):
    """The structured configuration of a logrotate charm.

    The `rules` option holds a YAML mapping of rule names to rule parameters.
    Only the mapping itself is checked here, each rule is validated on its own
    by `LogRotateRule.from_params`.
    """

    model_config = ConfigDict(extra="allow")

    rules: dict[Any, Any] = Field(default_factory=dict)

    @field_validator("rules", mode="before")
    @classmethod
    def parse_rules(cls, value: Any) -> Any:
        """Loads the catalog of rules from its YAML form."""
        if isinstance(value, str):
            try:
                value = yaml.safe_load(value)
            except yaml.YAMLError as e:
                raise ValueError(f"rules is not valid YAML: {e}") from e
        return value or {}
