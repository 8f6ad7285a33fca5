#!/usr/bin/env python3
# Copyright 2024 Canonical Ltd.
# See LICENSE file for licensing details.

"""Abstract workload definition for logrotate charms."""

from abc import ABC, abstractmethod
from pathlib import Path

from single_kernel_logrotate.config.literals import WorkloadUser
from single_kernel_logrotate.config.models import Role


class LogRotatePaths:
    """Object to store the common paths for a logrotate installation."""

    def __init__(self, role: Role):
        self.conf_path = role.paths["CONF"]
        self.binaries_path = role.paths["BIN"]

    def __eq__(self, other: object) -> bool:
        """Two paths objects are equal when they point to the same locations."""
        if not isinstance(other, LogRotatePaths):
            return NotImplemented
        return (self.conf_path, self.binaries_path) == (other.conf_path, other.binaries_path)

    @property
    def rules_directory(self) -> Path:
        """The directory logrotate includes the rule files from."""
        return Path(self.conf_path)

    @property
    def binary(self) -> Path:
        """The logrotate executable."""
        return Path(f"{self.binaries_path}/logrotate")

    def rule_file(self, name: str) -> Path:
        """The file holding the stanza of the rule `name`."""
        return self.rules_directory / name


class WorkloadBase(ABC):
    """Base interface for common workload operations."""

    paths: LogRotatePaths
    users: WorkloadUser
    substrate: str

    @abstractmethod
    def read(self, path: Path) -> list[str]:
        """Reads a file from the workload.

        Args:
            path: the full filepath to read from

        Returns:
            List of string lines from the specified path
        """
        ...

    @abstractmethod
    def read_first_line(self, path: Path) -> str:
        """Reads the first line of a workload file.

        Undecodable bytes are replaced rather than raising, the file may
        belong to another package.

        Returns:
            The first line without its line break, empty if the file is absent.
        """
        ...

    @abstractmethod
    def write(self, content: str, path: Path, permissions: int = 0o644) -> None:
        """Writes content to a workload file.

        Args:
            content: string of content to write
            path: the full filepath to write to
            permissions: the file mode applied once the file is written
        """
        ...

    @abstractmethod
    def delete(self, path: Path) -> None:
        """Deletes a workload file, if it exists."""
        ...

    @abstractmethod
    def list_files(self, directory: Path) -> list[Path]:
        """Lists the regular files of a workload directory."""
        ...

    @abstractmethod
    def exec(
        self,
        command: list[str] | str,
        env: dict[str, str] | None = None,
        working_dir: str | None = None,
    ) -> str:
        """Runs a command on the workload substrate."""
        ...

    @abstractmethod
    def package_installed(self, name: str) -> bool:
        """Checks whether the system package `name` is installed."""
        ...

    @abstractmethod
    def install_package(self, name: str) -> None:
        """Installs the system package `name`.

        Raises:
            WorkloadServiceError: if the package manager failed.
        """
        ...

    @property
    @abstractmethod
    def container_can_connect(self) -> bool:
        """Flag to check if workload container can connect."""
        ...
