# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""TPA HR System authentication backend."""

__version__ = "0.1.0"
