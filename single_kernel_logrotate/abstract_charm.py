# Copyright 2024 Canonical Ltd.
# See LICENSE file for licensing details.
"""Skeleton for the abstract charm."""

import logging
from typing import ClassVar, Generic, TypeVar

from ops.charm import CharmBase

from single_kernel_logrotate.config.literals import Substrates
from single_kernel_logrotate.core.structured_config import LogRotateCharmConfig
from single_kernel_logrotate.events.lifecycle import LifecycleEventsHandler
from single_kernel_logrotate.managers.logrotate_operator import LogRotateOperator
from single_kernel_logrotate.status import StatusManager

T = TypeVar("T", bound=LogRotateCharmConfig)

logger = logging.getLogger(__name__)


class AbstractLogRotateCharm(Generic[T], CharmBase):
    """An abstract logrotate charm.

    This class is meant to be inherited from to define an actual charm.
    Any charm inheriting from this class should specify:
     * config_type: A Pydantic Model defining the configuration options,
         inheriting from `LogRotateCharmConfig`.
     * A substrate: One of "vm" or "k8s"
     * A name: The name of the charm which will be used in multiple places.
    """

    config_type: type[T]
    substrate: ClassVar[Substrates]
    name: ClassVar[str]

    def __init__(self, *args):
        # Init the Juju object Object
        super().__init__(*args)
        self.status_manager = StatusManager(self)

        # The operator owns the workload and the managers acting on it.
        self.operator = LogRotateOperator(self)
        self.workload = self.operator.workload

        self.lifecycle = LifecycleEventsHandler(self.operator)

    @property
    def parsed_config(self) -> T:
        """Return the config parsed as a pydantic model."""
        return self.config_type.model_validate(dict(self.model.config))
