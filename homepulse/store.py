from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .document import default_document, missing_keys
from .exceptions import StoreWriteError

logger = logging.getLogger(__name__)


class JsonStore:
    """Whole-document JSON persistence for the sensor state.

    Reads never fail: a missing or corrupt file, or one lacking any sensor
    key the engine needs, yields a fresh default document. Writes go to a temp file in the same directory and are moved
    into place with `os.replace`, so readers see either the old or the new
    document, never a torn one.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> Dict[str, Any]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return default_document()
        except OSError as e:
            logger.warning("Sensor document unreadable, using defaults: %s", e, extra={"data_file": str(self.path)})
            return default_document()

        try:
            doc = json.loads(raw)
        except ValueError as e:
            logger.warning("Sensor document is not valid JSON, using defaults: %s", e, extra={"data_file": str(self.path)})
            return default_document()

        if not isinstance(doc, dict):
            logger.warning("Sensor document is not a JSON object, using defaults", extra={"data_file": str(self.path)})
            return default_document()

        missing = missing_keys(doc)
        if missing:
            logger.warning(
                "Sensor document is missing %s, using defaults",
                ", ".join(missing),
                extra={"data_file": str(self.path)},
            )
            return default_document()

        return doc

    def save(self, document: Dict[str, Any]) -> None:
        tmp_name: Optional[str] = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_fd, tmp_name = tempfile.mkstemp(prefix=".sensors_", suffix=".json", dir=str(self.path.parent))
            with os.fdopen(tmp_fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as e:
            raise StoreWriteError(path=str(self.path), message=str(e)) from e
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass
