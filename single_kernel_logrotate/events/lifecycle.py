#!/usr/bin/python3
# Copyright 2024 Canonical Ltd.
# See LICENSE file for licensing details.
"""Events handler for lifecycle events.

In charge of handling the lifecycle events such as install, config changed, pebble ready, etc.
"""

import logging

from ops.charm import (
    ConfigChangedEvent,
    InstallEvent,
    PebbleReadyEvent,
    UpdateStatusEvent,
    UpgradeCharmEvent,
)
from ops.framework import Object

from single_kernel_logrotate.config.literals import CONTAINER_NAME, Substrates
from single_kernel_logrotate.exceptions import ContainerNotReadyError
from single_kernel_logrotate.managers.logrotate_operator import (
    CONTAINER_NOT_READY,
    LogRotateOperator,
)

logger = logging.getLogger(__name__)


class LifecycleEventsHandler(Object):
    """Events handler for lifecycle events.

    In charge of handling the lifecycle events such as install, config changed, pebble ready, etc.
    """

    def __init__(self, dependent: LogRotateOperator):
        super().__init__(parent=dependent, key="lifecycle")
        self.dependent = dependent
        self.charm = dependent.charm

        self.framework.observe(getattr(self.charm.on, "install"), self.on_install)
        self.framework.observe(getattr(self.charm.on, "config_changed"), self.on_config_changed)
        self.framework.observe(getattr(self.charm.on, "upgrade_charm"), self.on_config_changed)
        self.framework.observe(getattr(self.charm.on, "update_status"), self.on_update_status)

        if self.charm.substrate == Substrates.K8S:
            self.framework.observe(
                self.charm.on[CONTAINER_NAME].pebble_ready, self.on_pebble_ready
            )

    def on_install(self, event: InstallEvent):
        """Install event."""
        try:
            self.dependent.on_install()
        except ContainerNotReadyError:
            logger.info("Not ready to install logrotate.")
            self.charm.status_manager.to_waiting(CONTAINER_NOT_READY)
            event.defer()
            return

    def on_pebble_ready(self, event: PebbleReadyEvent):
        """Pebble ready event."""
        try:
            if self.dependent.on_install():
                self.dependent.on_config_changed()
        except ContainerNotReadyError:
            logger.info("Container not ready yet.")
            self.charm.status_manager.to_waiting(CONTAINER_NOT_READY)
            event.defer()
            return

    def on_config_changed(self, event: ConfigChangedEvent | UpgradeCharmEvent):
        """Config Changed Event."""
        try:
            self.dependent.on_config_changed()
        except ContainerNotReadyError:
            logger.info("Not ready to write the logrotate rules.")
            self.charm.status_manager.to_waiting(CONTAINER_NOT_READY)
            event.defer()
            return

    def on_update_status(self, event: UpdateStatusEvent):
        """Update Status Event."""
        self.dependent.on_update_status()
