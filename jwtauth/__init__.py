# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Cookie-based JWT authentication backend."""

__version__ = "0.1.0"
