# Copyright 2024 Canonical Ltd.
# See LICENSE file for licensing details.
"""Logrotate charm library: rule rendering and logrotate installation."""
