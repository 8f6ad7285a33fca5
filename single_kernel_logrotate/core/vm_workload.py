#!/usr/bin/env python3
# Copyright 2024 Canonical Ltd.
# See LICENSE file for licensing details.

"""Machine workload definition."""

import subprocess
from collections.abc import Mapping
from logging import getLogger
from pathlib import Path

from charmlibs import apt
from ops import Container
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_fixed
from typing_extensions import override

from single_kernel_logrotate.config.literals import VmUser
from single_kernel_logrotate.core.workload import WorkloadBase
from single_kernel_logrotate.exceptions import WorkloadExecError, WorkloadServiceError

logger = getLogger(__name__)


class VMWorkload(WorkloadBase):
    """Wrapper for performing common operations on the machine itself."""

    substrate = "vm"
    container = None
    users = VmUser()

    def __init__(self, container: Container | None) -> None:
        self.container = container

    @property
    @override
    def container_can_connect(self) -> bool:
        return True  # Always True on VM

    @override
    def read(self, path: Path) -> list[str]:
        if not path.is_file():
            return []
        return path.read_text(encoding="utf-8", errors="replace").splitlines()

    @override
    def read_first_line(self, path: Path) -> str:
        if not path.is_file():
            return ""
        with open(path, "rb") as f:
            return f.readline().decode(errors="replace").rstrip("\r\n")

    @override
    def write(self, content: str, path: Path, permissions: int = 0o644) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            f.write(content)

        self.exec(["chmod", f"{permissions:o}", f"{path}"])
        self.exec(["chown", f"{self.users.user}:{self.users.group}", f"{path}"])

    @override
    def delete(self, path: Path) -> None:
        path.unlink(missing_ok=True)

    @override
    def list_files(self, directory: Path) -> list[Path]:
        if not directory.is_dir():
            return []
        return sorted(path for path in directory.iterdir() if path.is_file())

    @override
    def exec(
        self,
        command: list[str] | str,
        env: Mapping[str, str] | None = None,
        working_dir: str | None = None,
    ) -> str:
        try:
            output = subprocess.check_output(
                command,
                stderr=subprocess.PIPE,
                universal_newlines=True,
                shell=isinstance(command, str),
                env=env,
                cwd=working_dir,
            )
            logger.debug(f"{output=}")
            return output
        except subprocess.CalledProcessError as e:
            logger.error(f"cmd failed - cmd={e.cmd}, stdout={e.stdout}, stderr={e.stderr}")
            raise WorkloadExecError(
                e.cmd,
                e.returncode,
                e.stdout,
                e.stderr,
            ) from e

    @override
    def package_installed(self, name: str) -> bool:
        try:
            package = apt.DebianPackage.from_installed_package(name)
        except apt.PackageNotFoundError:
            return False
        return package.present

    @override
    def install_package(self, name: str) -> None:
        try:
            self._add_package(name)
        except (apt.PackageNotFoundError, apt.PackageError) as e:
            logger.exception(str(e))
            raise WorkloadServiceError(str(e)) from e

    @retry(
        wait=wait_fixed(5),
        stop=stop_after_attempt(3),
        retry=retry_if_exception_type(apt.PackageError),
        reraise=True,
    )
    def _add_package(self, name: str) -> None:
        # Retried because another process may be holding the dpkg lock.
        apt.add_package(name, update_cache=True)
