import re
from pathlib import Path

import pytest
from parameterized import parameterized

from single_kernel_logrotate.config.literals import MANAGED_MARKER
from single_kernel_logrotate.core.structured_config import Compression, Frequency
from single_kernel_logrotate.exceptions import (
    InvalidEnumValueError,
    InvalidFieldValueError,
    MissingRequiredFieldError,
    WorkloadExecError,
)
from single_kernel_logrotate.managers.config import LogRotateConfigManager
from single_kernel_logrotate.workload import VMLogRotateWorkload

from .helpers import LogRotateRuleFactory


def has_line(content: str, line: str) -> bool:
    return re.search(rf"^\s*{line}\s*$", content, re.MULTILINE) is not None


@pytest.fixture
def manager(rules_paths, mock_fs_interactions) -> LogRotateConfigManager:
    workload = VMLogRotateWorkload(container=None)
    workload.paths = rules_paths
    return LogRotateConfigManager(workload)


def render(manager: LogRotateConfigManager, **params) -> str:
    return manager.render(manager.build_rule("myapp", {"logs": "/var/log/foo.log", **params}))


def test_render_defaults(manager):
    content = manager.render(LogRotateRuleFactory())

    assert content == (
        f"# {MANAGED_MARKER}\n"
        "# Rule `myapp`: DO NOT EDIT, local changes will be overwritten.\n"
        "\n"
        "/var/log/foo.log {\n"
        "    compress\n"
        "    daily\n"
        "    rotate 7\n"
        "    missingok\n"
        "    ifempty\n"
        "    nosharedscripts\n"
        "}\n"
    )
    assert not has_line(content, "delaycompress")


def test_render_warns_about_modifications(manager):
    assert "THIS FILE IS AUTOMATICALLY DISTRIBUTED BY JUJU" in render(manager)


def test_render_multiple_logs(manager):
    content = manager.render(
        LogRotateRuleFactory(logs=("/var/log/foo.log", "/var/log/bar.log"))
    )
    assert "/var/log/foo.log /var/log/bar.log {\n" in content


def test_render_delayed_compression(manager):
    content = render(manager, compress="delayed")

    assert has_line(content, "compress")
    assert has_line(content, "delaycompress")
    assert not has_line(content, "nocompress")


def test_render_no_compression(manager):
    content = render(manager, compress=False)

    assert has_line(content, "nocompress")
    assert not has_line(content, "compress")
    assert not has_line(content, "delaycompress")


@parameterized.expand([[Compression.ENABLED], [Compression.DISABLED], [Compression.DELAYED]])
def test_render_exactly_one_compression_branch(compression):
    workload = VMLogRotateWorkload(container=None)
    content = LogRotateConfigManager(workload).render(LogRotateRuleFactory(compress=compression))

    branches = [
        directives
        for directives in (["compress"], ["nocompress"], ["compress", "delaycompress"])
        if all(has_line(content, d) for d in directives)
        and not any(
            has_line(content, other)
            for other in {"compress", "nocompress", "delaycompress"} - set(directives)
        )
    ]
    assert branches == [compression.directives]


@parameterized.expand([[frequency] for frequency in Frequency])
def test_render_frequency(frequency):
    workload = VMLogRotateWorkload(container=None)
    content = LogRotateConfigManager(workload).render(LogRotateRuleFactory(frequency=frequency))

    assert has_line(content, frequency.value)
    for other in Frequency:
        if other != frequency:
            assert not has_line(content, other.value)


def test_render_keep(manager):
    assert has_line(render(manager, keep=42), r"rotate\s+42")


@pytest.mark.parametrize(
    "param,enabled,disabled",
    [
        ("missingok", "missingok", "nomissingok"),
        ("rotate_if_empty", "ifempty", "notifempty"),
        ("sharedscripts", "sharedscripts", "nosharedscripts"),
    ],
)
@pytest.mark.parametrize("value", [True, False])
def test_render_boolean_pairs(manager, param, enabled, disabled, value):
    content = render(manager, **{param: value})

    assert has_line(content, enabled) is value
    assert has_line(content, disabled) is not value


def test_render_create(manager):
    content = render(manager, create="0640 root adm")
    assert re.search(r"create\s+0640 root adm\s*$", content, re.MULTILINE)


def test_render_without_create(manager):
    assert "create" not in render(manager)


def test_render_bare_create(manager):
    assert has_line(render(manager, create=""), "create")


@pytest.mark.parametrize("slot", ["prerotate", "postrotate", "firstaction", "lastaction"])
def test_render_script(manager, slot):
    content = render(manager, **{f"{slot}_script": "echo 'I am the walrus'"})

    assert re.search(
        rf"^\s*{slot}\s*\n\s*echo 'I am the walrus'\s*\n\s*endscript\s*$",
        content,
        re.MULTILINE,
    )
    for other in {"prerotate", "postrotate", "firstaction", "lastaction"} - {slot}:
        assert not has_line(content, other)


def test_render_all_scripts(manager):
    content = render(
        manager,
        postrotate_script="systemctl reload rsyslog",
        prerotate_script="echo pre",
    )

    assert content.count("endscript") == 2
    assert content.index("prerotate") < content.index("postrotate")
    assert content.rstrip().endswith("endscript\n}")


def test_write_rule(manager, rules_paths):
    path = manager.write_rule("myapp", {"logs": "/var/log/foo.log"})

    assert path == rules_paths.rules_directory / "myapp"
    assert path.read_text() == render(manager)
    manager.workload.exec.assert_any_call(["chmod", "644", f"{path}"])
    manager.workload.exec.assert_any_call(["chown", "root:root", f"{path}"])


def test_write_rule_up_to_date(manager, mocker):
    manager.write_rule("myapp", {"logs": "/var/log/foo.log"})
    write = mocker.spy(manager.workload, "write")

    manager.write_rule("myapp", {"logs": "/var/log/foo.log"})

    write.assert_not_called()


def test_write_rule_invalid_writes_nothing(manager, rules_paths):
    with pytest.raises(MissingRequiredFieldError):
        manager.write_rule("myapp", {})
    with pytest.raises(InvalidEnumValueError):
        manager.write_rule("myapp", {"logs": "/var/log/foo.log", "frequency": "invalid"})

    assert not (rules_paths.rules_directory / "myapp").exists()


def test_remove_rule(manager, rules_paths):
    path = manager.write_rule("myapp", {"logs": "/var/log/foo.log"})
    manager.remove_rule("myapp")
    assert not path.exists()

    # Removing twice is a no-op.
    manager.remove_rule("myapp")


def test_managed_rules(manager, rules_paths):
    manager.write_rule("foo", {"logs": "/var/log/foo.log"})
    (rules_paths.rules_directory / "apt").write_text("/var/log/apt/term.log {\n}\n")

    assert manager.managed_rules() == ["foo"]


def test_managed_rules_ignores_undecodable_files(manager, rules_paths):
    manager.write_rule("foo", {"logs": "/var/log/foo.log"})
    (rules_paths.rules_directory / "legacy").write_bytes(b"# caf\xe9\n/var/log/x {\n}\n")

    assert manager.managed_rules() == ["foo"]

    failures = manager.apply_rules({"app": {"logs": "/var/log/app.log"}})

    assert failures == {}
    assert sorted(path.name for path in rules_paths.rules_directory.iterdir()) == [
        "app",
        "legacy",
    ]
    assert (rules_paths.rules_directory / "legacy").read_bytes() == b"# caf\xe9\n/var/log/x {\n}\n"


def test_apply_rules_reports_malformed_rules_individually(manager, rules_paths):
    failures = manager.apply_rules(
        {
            "app": {"logs": "/var/log/app.log"},
            "bad": 3,
            "list": ["/var/log/x"],
            1: None,
            True: {"logs": "/var/log/yes.log"},
        }
    )

    assert sorted(failures) == ["1", "True", "bad", "list"]
    assert all(isinstance(error, InvalidFieldValueError) for error in failures.values())
    assert failures["bad"].field == "rule"
    assert failures["1"].field == "name"
    assert [path.name for path in rules_paths.rules_directory.iterdir()] == ["app"]


def test_apply_rules(manager, rules_paths):
    manager.write_rule("stale", {"logs": "/var/log/stale.log"})
    (rules_paths.rules_directory / "apt").write_text("/var/log/apt/term.log {\n}\n")

    failures = manager.apply_rules(
        {
            "foo": {"logs": "/var/log/foo.log"},
            "bar": {"logs": ["/var/log/bar.log"], "frequency": "weekly"},
            "broken": {"frequency": "invalid"},
            "nologs": None,
        }
    )

    assert sorted(failures) == ["broken", "nologs"]
    assert isinstance(failures["nologs"], MissingRequiredFieldError)
    assert sorted(path.name for path in rules_paths.rules_directory.iterdir()) == [
        "apt",
        "bar",
        "foo",
    ]
    assert has_line((rules_paths.rules_directory / "bar").read_text(), "weekly")


def test_apply_rules_keeps_file_of_failing_rule(manager, rules_paths):
    manager.write_rule("foo", {"logs": "/var/log/foo.log"})

    failures = manager.apply_rules({"foo": {"logs": "/var/log/foo.log", "keep": 0}})

    assert list(failures) == ["foo"]
    assert has_line((rules_paths.rules_directory / "foo").read_text(), r"rotate\s+7")


def test_check_rule(manager, rules_paths):
    manager.check_rule("myapp")
    manager.workload.exec.assert_called_once_with(
        ["/usr/sbin/logrotate", "--debug", str(rules_paths.rules_directory / "myapp")]
    )


def test_check_rule_failure(manager):
    manager.workload.exec.side_effect = WorkloadExecError(["logrotate"], 1, "", "error")
    with pytest.raises(WorkloadExecError):
        manager.check_rule("myapp")


def test_rule_file(manager, rules_paths):
    assert manager.rule_file("myapp") == Path(rules_paths.conf_path) / "myapp"
