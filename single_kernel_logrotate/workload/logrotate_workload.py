#!/usr/bin/env python3
# Copyright 2024 Canonical Ltd.
# See LICENSE file for licensing details.

"""Logrotate workload definition."""

from ops import Container

from single_kernel_logrotate.config.literals import LOGROTATE_PACKAGE
from single_kernel_logrotate.config.models import ROLES
from single_kernel_logrotate.core.workload import LogRotatePaths, WorkloadBase


class LogRotateWorkload(WorkloadBase):
    """Logrotate Workload definition."""

    package = LOGROTATE_PACKAGE

    def __init__(self, container: Container | None) -> None:
        super().__init__(container)  # type: ignore[call-arg]
        self.role = ROLES[self.substrate]
        self.paths = LogRotatePaths(self.role)
