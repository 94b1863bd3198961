from ringsteward.controllers.history.checkpoint_manager import (
    CheckpointManager,
    diff_datasets,
)
from ringsteward.controllers.history.undo_manager import UndoManager

__all__ = ["CheckpointManager", "UndoManager", "diff_datasets"]
