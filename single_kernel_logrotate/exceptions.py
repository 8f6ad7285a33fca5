#!/usr/bin/env python3
# Copyright 2024 Canonical Ltd.
# See LICENSE file for licensing details.

"""All general exceptions."""

from typing import Any


class RuleConfigError(Exception):
    """Raised when a logrotate rule cannot be built from its parameters."""

    def __init__(self, rule: str, field: str, value: Any = None, message: str | None = None):
        self.rule = rule
        self.field = field
        self.value = value
        super().__init__(message or f"Invalid {field} for rule `{rule}`: '{value}'")


class MissingRequiredFieldError(RuleConfigError):
    """Raised when a mandatory rule parameter is absent."""

    def __init__(self, rule: str, field: str):
        super().__init__(rule, field, message=f"Must pass {field} to rule `{rule}`")


class InvalidEnumValueError(RuleConfigError):
    """Raised when a rule parameter is outside of its accepted values."""


class InvalidFieldValueError(RuleConfigError):
    """Raised when a rule parameter has a malformed value."""


class WorkloadExecError(Exception):
    """Raised when a workload fails to exec a command."""

    def __init__(
        self,
        cmd: str | list[str],
        return_code: int,
        stdout: str | None,
        stderr: str | None,
    ):
        super().__init__(self)
        self.cmd = cmd
        self.return_code = return_code
        self.stdout = stdout or ""
        self.stderr = stderr or ""

    def __str__(self) -> str:
        """Repr of error."""
        return f"cmd failed ({self.return_code}) - cmd={self.cmd}, stdout={self.stdout}, stderr={self.stderr}"


class WorkloadServiceError(Exception):
    """Raised when the workload fails to install or query a package."""


class ContainerNotReadyError(Exception):
    """Raised when the workload container cannot be reached yet."""
