# Copyright 2024 Canonical Ltd.
# See LICENSE file for licensing details.
"""The different workloads and their code for logrotate charms."""

from single_kernel_logrotate.config.literals import Substrates
from single_kernel_logrotate.core.k8s_workload import KubernetesWorkload
from single_kernel_logrotate.core.vm_workload import VMWorkload
from single_kernel_logrotate.workload.logrotate_workload import LogRotateWorkload


class VMLogRotateWorkload(LogRotateWorkload, VMWorkload):
    """VM logrotate Workload implementation."""

    ...


class KubernetesLogRotateWorkload(LogRotateWorkload, KubernetesWorkload):
    """Kubernetes logrotate Workload implementation."""

    ...


def get_logrotate_workload_for_substrate(
    substrate: Substrates,
) -> type[VMLogRotateWorkload] | type[KubernetesLogRotateWorkload]:
    """Returns the logrotate workload class matching the substrate."""
    if substrate == Substrates.K8S:
        return KubernetesLogRotateWorkload
    return VMLogRotateWorkload
