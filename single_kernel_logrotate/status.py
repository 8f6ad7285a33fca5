# Copyright 2024 Canonical Ltd.
# See LICENSE file for licensing details.
"""Status handling for the logrotate charms."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from ops.framework import Object
from ops.model import (
    ActiveStatus,
    BlockedStatus,
    MaintenanceStatus,
    StatusBase,
    WaitingStatus,
)

if TYPE_CHECKING:
    from single_kernel_logrotate.abstract_charm import AbstractLogRotateCharm

logger = getLogger(__name__)


class StatusManager(Object):
    """Status Manager."""

    def __init__(self, charm: AbstractLogRotateCharm):
        super().__init__(parent=charm, key="status")
        self.charm = charm

    def set_status(self, status: StatusBase):
        """Sets the unit status."""
        logger.debug(f"Setting unit status to {status!r}")
        self.charm.unit.status = status

    def to_active(self, message: str | None = None):
        """Sets status to active."""
        if message is None:
            self.set_status(ActiveStatus())
            return
        self.set_status(ActiveStatus(message))

    def to_blocked(self, message: str):
        """Sets status to blocked."""
        self.set_status(BlockedStatus(message))

    def to_waiting(self, message: str):
        """Sets status to waiting."""
        self.set_status(WaitingStatus(message))

    def to_maintenance(self, message: str):
        """Sets status to maintenance."""
        self.set_status(MaintenanceStatus(message))
