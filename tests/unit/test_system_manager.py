from single_kernel_logrotate.config.literals import PackageState
from single_kernel_logrotate.config.models import PackageRequest
from single_kernel_logrotate.exceptions import WorkloadServiceError
from single_kernel_logrotate.managers.system import SystemManager
from single_kernel_logrotate.workload import VMLogRotateWorkload


def test_package_request():
    manager = SystemManager(VMLogRotateWorkload(container=None))

    assert manager.package_request == PackageRequest(name="logrotate")
    assert manager.package_request.ensure == PackageState.PRESENT


def test_install_already_present(mocker):
    workload = VMLogRotateWorkload(container=None)
    mocker.patch.object(workload, "package_installed", return_value=True)
    install = mocker.patch.object(workload, "install_package")

    assert SystemManager(workload).install()
    install.assert_not_called()


def test_install_missing_package(mocker):
    workload = VMLogRotateWorkload(container=None)
    mocker.patch.object(workload, "package_installed", return_value=False)
    install = mocker.patch.object(workload, "install_package")

    assert SystemManager(workload).install()
    install.assert_called_once_with("logrotate")


def test_install_failure(mocker, caplog):
    workload = VMLogRotateWorkload(container=None)
    mocker.patch.object(workload, "package_installed", return_value=False)
    mocker.patch.object(workload, "install_package", side_effect=WorkloadServiceError("apt"))

    caplog.clear()
    assert not SystemManager(workload).install()
    assert any(
        record.levelname == "ERROR" and "Failed to install logrotate" in record.getMessage()
        for record in caplog.records
    )
