#!/usr/bin/env python3
# Copyright 2024 Canonical Ltd.
# See LICENSE file for licensing details.

"""Manager for handling the logrotate rules configuration."""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import Environment, StrictUndefined, Template

from single_kernel_logrotate.config.literals import MANAGED_MARKER
from single_kernel_logrotate.config.models import LogRotateConfig
from single_kernel_logrotate.core.structured_config import LogRotateRule
from single_kernel_logrotate.core.workload import WorkloadBase
from single_kernel_logrotate.exceptions import RuleConfigError

logger = logging.getLogger(__name__)


class LogRotateConfigManager:
    """Config manager for the logrotate rules.

    Translates rule parameters into logrotate stanzas and keeps the rule
    files of the workload in sync with a catalog of rules.
    """

    def __init__(self, workload: WorkloadBase):
        self.workload = workload
        self.template: Template = Environment(
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        ).from_string(LogRotateConfig.rule_template.read_text())

    @staticmethod
    def build_rule(name: str, params: Mapping[str, Any] | None) -> LogRotateRule:
        """Builds a validated rule from its raw parameters."""
        return LogRotateRule.from_params(name, params)

    def render(self, rule: LogRotateRule) -> str:
        """Renders the logrotate stanza of a rule."""
        return self.template.render(rule=rule, marker=MANAGED_MARKER)

    def rule_file(self, name: str) -> Path:
        """The destination file of the rule `name`."""
        return self.workload.paths.rule_file(name)

    def write_rule(self, name: str, params: Mapping[str, Any] | None) -> Path:
        """Validates, renders and writes the rule `name`.

        Nothing is written when the parameters are invalid.

        Raises:
            RuleConfigError: if the parameters do not describe a valid rule.
        """
        rule = self.build_rule(name, params)
        content = self.render(rule)
        path = self.rule_file(name)
        if self.workload.read(path) == content.splitlines():
            logger.debug(f"logrotate rule {name} is up to date")
            return path
        self.workload.write(content, path, permissions=LogRotateConfig.file_permissions)
        logger.info(f"Wrote logrotate rule {name} to {path}")
        return path

    def remove_rule(self, name: str) -> None:
        """Removes the file of the rule `name`."""
        self.workload.delete(self.rule_file(name))
        logger.info(f"Removed logrotate rule {name}")

    def managed_rules(self) -> list[str]:
        """Names of the rule files that were written by this manager."""
        return [
            path.name
            for path in self.workload.list_files(self.workload.paths.rules_directory)
            if MANAGED_MARKER in self.workload.read_first_line(path)
        ]

    def apply_rules(self, catalog: Mapping[Any, Any]) -> dict[str, RuleConfigError]:
        """Writes every rule of the catalog and prunes the managed ones left out.

        Rules are handled independently: an invalid rule, malformed name or
        parameters included, is reported and its current file is kept, the
        other rules are still written.

        Returns:
            The errors of the invalid rules, keyed by rule name.
        """
        failures: dict[str, RuleConfigError] = {}
        for name, params in catalog.items():
            try:
                self.write_rule(name, params)
            except RuleConfigError as e:
                logger.error(f"Invalid logrotate rule {name}: {e}")
                failures[str(name)] = e

        wanted = {str(name) for name in catalog}
        for name in self.managed_rules():
            if name not in wanted:
                self.remove_rule(name)

        return failures

    def check_rule(self, name: str) -> str:
        """Runs logrotate in debug mode on the rule `name` and returns its report.

        Raises:
            WorkloadExecError: if logrotate rejects the file.
        """
        return self.workload.exec(
            [str(self.workload.paths.binary), "--debug", str(self.rule_file(name))]
        )
