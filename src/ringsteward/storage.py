"""Save and load tournaments as JSON files."""

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

import json
from pathlib import Path
from typing import Union

from ringsteward.constants import SAVE_FILE_EXTENSION
from ringsteward.exceptions import FileLoadException, FileSaveException
from ringsteward.tournament import Tournament
from ringsteward.utils import setup_logger

logger = setup_logger(__name__)

PathLike = Union[str, Path]


def with_extension(path: PathLike) -> Path:
    """Append the save file extension when the path has none."""
    path = Path(path)
    return path if path.suffix else path.with_suffix(SAVE_FILE_EXTENSION)


def save_tournament(tournament: Tournament, path: PathLike) -> Path:
    """Write a tournament, including its checkpoints, to a JSON file.

    Args:
        tournament: Tournament to save
        path: Destination; the ``.json`` extension is added if missing

    Returns:
        The path written

    Raises:
        FileSaveException: If the file cannot be written
    """
    path = with_extension(path)
    try:
        data = tournament.to_dict()
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=4)
    except (OSError, TypeError, ValueError) as e:
        logger.error(f"Could not save tournament to {path}: {e}")
        raise FileSaveException(f"Could not save tournament to {path}: {e}") from e
    logger.info(f"Tournament saved to {path}")
    return path


def load_tournament(path: PathLike) -> Tournament:
    """Read a tournament from a JSON file.

    Files holding only a dataset, and files using the older ``cohorts`` key
    names, load as well.

    Raises:
        FileLoadException: If the file is missing, unreadable or malformed
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        tournament = Tournament.from_dict(data)
    except (OSError, ValueError, KeyError, TypeError) as e:
        logger.error(f"Could not load tournament from {path}: {e}")
        raise FileLoadException(f"Could not load tournament from {path}: {e}") from e
    logger.info(f"Tournament loaded from {path}")
    return tournament
