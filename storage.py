from __future__ import annotations

import json
import logging
from pathlib import Path

from models import SaveData

logger = logging.getLogger(__name__)


class SaveFile:
    """Whole-game save (worlds and their maps) in a single JSON file."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> SaveData:
        """Read the save; an absent file is an empty save.

        Raises:
            SystemExit: If the file exists but is not valid save JSON.
        """
        if not self.path.exists():
            return SaveData()
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise SystemExit(
                f"\nERROR: Save file is not valid JSON.\n"
                f"File: {self.path}\n"
                f"Line {e.lineno}, Col {e.colno}\n"
                f"{e.msg}\n"
            )
        if not isinstance(raw, dict):
            raise SystemExit(f"\nERROR: Save file root must be a JSON object.\nFile: {self.path}\n")
        return SaveData.from_dict(raw)

    def save(self, data: SaveData) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data.to_dict(), separators=(",", ":")), encoding="utf-8")
        tmp.replace(self.path)
        logger.info("saved %s worlds to %s", len(data.worlds), self.path)
