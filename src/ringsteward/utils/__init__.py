"""Shared utilities for Ring Steward."""

# Ring Steward
# Copyright (C) 2025  Ring Steward developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVEL_ENV = "RINGSTEWARD_LOG_LEVEL"


def setup_logger(name: str) -> logging.Logger:
    """Return a module logger with the application's handler attached.

    The level is read from the ``RINGSTEWARD_LOG_LEVEL`` environment variable
    and defaults to ``INFO``.

    Args:
        name: Logger name, normally ``__name__``

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        level_name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
        logger.setLevel(getattr(logging, level_name, logging.INFO))
    return logger
