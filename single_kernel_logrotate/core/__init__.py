# Copyright 2024 Canonical Ltd.
# See LICENSE file for licensing details.
