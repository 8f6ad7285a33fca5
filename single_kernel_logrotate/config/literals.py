# Copyright 2024 Canonical Ltd.
# See LICENSE file for licensing details.
"""Literal string for the logrotate charms.

This module should contain the literals used in the charms (paths, enums, etc).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar


class Substrates(str, Enum):
    """Possible substrates."""

    VM = "vm"
    K8S = "k8s"


class PackageState(str, Enum):
    """The ensure states a package request can ask for."""

    PRESENT = "present"


LOGROTATE_PACKAGE = "logrotate"

CONTAINER_NAME = "logrotate"

# First line of every rendered rule, used to recognise the files we own.
MANAGED_MARKER = "THIS FILE IS AUTOMATICALLY DISTRIBUTED BY JUJU"

# Files of the rules directory logrotate skips when including it (its default
# "tabooext" list).
IGNORED_RULE_SUFFIXES = (
    ",v",
    "~",
    ".bak",
    ".cfsaved",
    ".disabled",
    ".dpkg-bak",
    ".dpkg-del",
    ".dpkg-dist",
    ".dpkg-new",
    ".dpkg-old",
    ".dpkg-tmp",
    ".rpmnew",
    ".rpmorig",
    ".rpmsave",
    ".swp",
    ".ucf-dist",
    ".ucf-new",
    ".ucf-old",
)
IGNORED_RULE_SUFFIX_PATTERN = ".rhn-cfg-tmp-"

T = TypeVar("T", bound=str | int)


@dataclass(frozen=True)
class WorkloadUser(Generic[T]):
    """The system users for a workload."""

    user: T
    group: T


@dataclass(frozen=True)
class KubernetesUser(WorkloadUser[str]):
    """The system user for kubernetes pods."""

    user: str = "root"
    group: str = "root"


@dataclass(frozen=True)
class VmUser(WorkloadUser[str]):
    """The system users for vm workloads."""

    user: str = "root"
    group: str = "root"
