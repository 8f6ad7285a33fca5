import factory

from single_kernel_logrotate.core.structured_config import LogRotateRule


class LogRotateRuleFactory(factory.Factory):
    class Meta:  # noqa
        model = LogRotateRule

    name = "myapp"
    logs = ("/var/log/foo.log",)
