#!/usr/bin/env python3
# Copyright 2024 Canonical Ltd.
# See LICENSE file for licensing details.
"""The different config models."""

from dataclasses import dataclass
from importlib import resources as impresources
from importlib.abc import Traversable

from single_kernel_logrotate import templates
from single_kernel_logrotate.config.literals import LOGROTATE_PACKAGE, PackageState, Substrates

TEMPLATE_DIRECTORY = impresources.files(templates)


@dataclass(frozen=True)
class LogRotateConfig:
    """The logrotate parameters and useful static configuration."""

    default_keep: int = 7
    file_permissions: int = 0o644
    rule_template: Traversable = TEMPLATE_DIRECTORY / "logrotate_rule.j2"


@dataclass(frozen=True)
class PackageRequest:
    """A request for a system package to be in a given state."""

    name: str
    ensure: PackageState = PackageState.PRESENT


LOGROTATE_REQUEST = PackageRequest(name=LOGROTATE_PACKAGE)


@dataclass(frozen=True)
class Role:
    """Defines the substrate specific layout of the charm."""

    substrate: Substrates
    paths: dict[str, str]


VM_PATH = {
    "CONF": "/etc/logrotate.d",
    "BIN": "/usr/sbin",
}
K8S_PATH = {
    "CONF": "/etc/logrotate.d",
    "BIN": "/usr/sbin",
}

VM_LOGROTATE = Role(substrate=Substrates.VM, paths=VM_PATH)
K8S_LOGROTATE = Role(substrate=Substrates.K8S, paths=K8S_PATH)

ROLES = {"vm": VM_LOGROTATE, "k8s": K8S_LOGROTATE}
