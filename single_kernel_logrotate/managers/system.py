#!/usr/bin/env python3
# Copyright 2024 Canonical Ltd.
# See LICENSE file for licensing details.

"""Manager for the logrotate system package."""

import logging

from single_kernel_logrotate.config.models import LOGROTATE_REQUEST, PackageRequest
from single_kernel_logrotate.core.workload import WorkloadBase
from single_kernel_logrotate.exceptions import WorkloadServiceError

logger = logging.getLogger(__name__)


class SystemManager:
    """Ensures the logrotate package is present on the workload."""

    def __init__(self, workload: WorkloadBase):
        self.workload = workload

    @property
    def package_request(self) -> PackageRequest:
        """The package request handed to the package manager."""
        return LOGROTATE_REQUEST

    def install(self) -> bool:
        """Ensures the logrotate package is present.

        Returns:
            True if the package is present afterwards. False otherwise.
        """
        request = self.package_request
        if self.workload.package_installed(request.name):
            logger.debug(f"{request.name} already installed")
            return True

        try:
            self.workload.install_package(request.name)
        except WorkloadServiceError as err:
            logger.error(f"Failed to install {request.name}. Reason: {err}.")
            return False

        logger.info(f"Installed {request.name}")
        return True
