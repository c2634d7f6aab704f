# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for SimpleNet."""

from __future__ import annotations

import logging
import os


def setup_logging(level: str | None = None) -> None:
    """Configure standard logging for scripts embedding the library."""
    effective_level = (level or os.getenv("SIMPLENET_LOG_LEVEL", "WARNING")).upper()
    logging.basicConfig(
        level=getattr(logging, effective_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


__all__ = ["setup_logging"]
