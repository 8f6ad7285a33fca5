#!/usr/bin/env python3
# Copyright 2024 Canonical Ltd.
# See LICENSE file for licensing details.

"""Operator for the logrotate charms.

The operator binds the logrotate workload of the charm to its two managers:
the system manager installing the logrotate package and the config manager
rendering the rules declared in the charm configuration.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ops.framework import Object
from ops.model import BlockedStatus, WaitingStatus
from pydantic import ValidationError

from single_kernel_logrotate.config.literals import CONTAINER_NAME, Substrates
from single_kernel_logrotate.exceptions import ContainerNotReadyError
from single_kernel_logrotate.managers.config import LogRotateConfigManager
from single_kernel_logrotate.managers.system import SystemManager
from single_kernel_logrotate.workload import get_logrotate_workload_for_substrate

if TYPE_CHECKING:
    from single_kernel_logrotate.abstract_charm import AbstractLogRotateCharm

logger = logging.getLogger(__name__)

INSTALL_FAILED = "couldn't install logrotate"
NOT_INSTALLED = "logrotate is not installed"
CONTAINER_NOT_READY = "waiting for logrotate container"
# Statuses the next status check clears once their cause is gone.
TRANSIENT_STATUSES = (
    BlockedStatus(INSTALL_FAILED),
    BlockedStatus(NOT_INSTALLED),
    WaitingStatus(CONTAINER_NOT_READY),
)


class LogRotateOperator(Object):
    """Operator for logrotate related events."""

    def __init__(self, charm: AbstractLogRotateCharm):
        super().__init__(parent=charm, key="logrotate")
        self.charm = charm
        self.substrate = charm.substrate

        container = (
            charm.unit.get_container(CONTAINER_NAME) if self.substrate == Substrates.K8S else None
        )
        self.workload = get_logrotate_workload_for_substrate(self.substrate)(container=container)
        self.config_manager = LogRotateConfigManager(self.workload)
        self.system_manager = SystemManager(self.workload)

    def on_install(self) -> bool:
        """Ensures the logrotate package is present.

        Returns:
            True if logrotate is installed. False otherwise.
        """
        if not self.workload.container_can_connect:
            raise ContainerNotReadyError

        self.charm.status_manager.to_maintenance("installing logrotate")
        if not self.system_manager.install():
            self.charm.status_manager.to_blocked(INSTALL_FAILED)
            return False
        self.charm.status_manager.to_maintenance("installed logrotate")
        return True

    def on_config_changed(self) -> None:
        """Writes the rules of the configuration and removes the stale ones."""
        if not self.workload.container_can_connect:
            raise ContainerNotReadyError

        try:
            config = self.charm.parsed_config
        except ValidationError as e:
            logger.error(f"Invalid charm configuration: {e}")
            self.charm.status_manager.to_blocked("invalid rules configuration")
            return

        failures = self.config_manager.apply_rules(config.rules)
        if failures:
            self.charm.status_manager.to_blocked(
                f"invalid logrotate rules: {', '.join(sorted(failures))}"
            )
            return

        if not self.workload.package_installed(self.system_manager.package_request.name):
            self.charm.status_manager.to_blocked(NOT_INSTALLED)
            return

        self.charm.status_manager.to_active()

    def on_update_status(self) -> None:
        """Reports a missing logrotate package, and recovers once the workload is usable."""
        if not self.workload.container_can_connect:
            return

        if not self.workload.package_installed(self.system_manager.package_request.name):
            self.charm.status_manager.to_blocked(NOT_INSTALLED)
            return

        if self.charm.unit.status in TRANSIENT_STATUSES:
            self.on_config_changed()
