from pathlib import Path

import pytest
from ops.testing import Harness

from single_kernel_logrotate.config.literals import Substrates
from single_kernel_logrotate.config.models import Role
from single_kernel_logrotate.core.workload import LogRotatePaths

from .logrotate_k8s_test_charm.src.charm import LogRotateK8sTestCharm
from .logrotate_test_charm.src.charm import LogRotateTestCharm

CHARM_DIR = Path(__file__).parent / "logrotate_test_charm"
CONFIG = (CHARM_DIR / "config.yaml").read_text()
METADATA = (CHARM_DIR / "metadata.yaml").read_text()

K8S_CHARM_DIR = Path(__file__).parent / "logrotate_k8s_test_charm"
K8S_CONFIG = (K8S_CHARM_DIR / "config.yaml").read_text()
K8S_METADATA = (K8S_CHARM_DIR / "metadata.yaml").read_text()


@pytest.fixture(autouse=True)
def tenacity_wait(mocker):
    mocker.patch("tenacity.nap.time")


@pytest.fixture
def rules_paths(tmp_path) -> LogRotatePaths:
    paths = {"CONF": str(tmp_path / "logrotate.d"), "BIN": "/usr/sbin"}
    return LogRotatePaths(Role(substrate=Substrates.VM, paths=paths))


@pytest.fixture
def mock_fs_interactions(mocker) -> None:
    mocker.patch("single_kernel_logrotate.core.vm_workload.VMWorkload.exec")


@pytest.fixture
def harness(rules_paths, mock_fs_interactions) -> Harness[LogRotateTestCharm]:
    harness = Harness(LogRotateTestCharm, meta=METADATA, config=CONFIG)
    harness.begin()
    harness.charm.workload.paths = rules_paths
    return harness


@pytest.fixture
def k8s_harness() -> Harness[LogRotateK8sTestCharm]:
    harness = Harness(LogRotateK8sTestCharm, meta=K8S_METADATA, config=K8S_CONFIG)
    harness.begin()
    return harness
