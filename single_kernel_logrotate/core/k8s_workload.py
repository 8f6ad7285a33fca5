#!/usr/bin/env python3
# Copyright 2024 Canonical Ltd.
# See LICENSE file for licensing details.

"""Kubernetes workload definition."""

from logging import getLogger
from pathlib import Path

from ops import Container
from ops.pebble import ExecError, FileType, PathError
from typing_extensions import override

from single_kernel_logrotate.config.literals import KubernetesUser, WorkloadUser
from single_kernel_logrotate.core.workload import LogRotatePaths, WorkloadBase
from single_kernel_logrotate.exceptions import WorkloadExecError, WorkloadServiceError

logger = getLogger(__name__)


class KubernetesWorkload(WorkloadBase):
    """Wrapper for performing common operations inside the workload container."""

    paths: LogRotatePaths
    users: WorkloadUser = KubernetesUser()
    substrate: str = "k8s"
    container: Container  # We always have a container in a Kubernetes Workload

    def __init__(self, container: Container | None) -> None:
        if not container:
            raise AttributeError("Container is required.")

        self.container = container

    @property
    @override
    def container_can_connect(self) -> bool:
        return self.container.can_connect()

    @override
    def read(self, path: Path) -> list[str]:
        if not self.container.exists(path):
            return []
        with self.container.pull(path, encoding=None) as f:
            return f.read().decode(errors="replace").splitlines()

    @override
    def read_first_line(self, path: Path) -> str:
        if not self.container.exists(path):
            return ""
        with self.container.pull(path, encoding=None) as f:
            return f.readline().decode(errors="replace").rstrip("\r\n")

    @override
    def write(self, content: str, path: Path, permissions: int = 0o644) -> None:
        self.container.push(
            path,
            content,
            make_dirs=True,
            permissions=permissions,
            user=self.users.user,
            group=self.users.group,
        )

    @override
    def delete(self, path: Path) -> None:
        try:
            self.container.remove_path(path)
        except PathError:
            logger.debug(f"{path} already absent")

    @override
    def list_files(self, directory: Path) -> list[Path]:
        if not self.container.exists(directory):
            return []
        return sorted(
            Path(info.path)
            for info in self.container.list_files(directory)
            if info.type == FileType.FILE
        )

    @override
    def exec(
        self,
        command: list[str],  # type: ignore[override]
        env: dict[str, str] | None = None,
        working_dir: str | None = None,
    ) -> str:
        try:
            process = self.container.exec(
                command=command,
                environment=env,
                working_dir=working_dir,
                combine_stderr=True,
            )
            output, _ = process.wait_output()
            return output
        except ExecError as e:
            logger.debug(e)
            raise WorkloadExecError(command, e.exit_code, e.stdout, e.stderr) from e

    @override
    def package_installed(self, name: str) -> bool:
        try:
            status = self.exec(["dpkg-query", "--show", "--showformat=${Status}", name])
        except WorkloadExecError:
            return False
        return status.strip() == "install ok installed"

    @override
    def install_package(self, name: str) -> None:
        env = {"DEBIAN_FRONTEND": "noninteractive"}
        try:
            self.exec(["apt-get", "update"], env=env)
            self.exec(["apt-get", "install", "--yes", "--quiet", name], env=env)
        except WorkloadExecError as e:
            logger.error(f"Failed to install {name} in the container: {e}")
            raise WorkloadServiceError(str(e)) from e
