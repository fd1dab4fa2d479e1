import logging
import os
import tempfile
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from .models import Ledger
from .service import StorageUnavailableError

logger = logging.getLogger(__name__)


class JsonFileStorage:
    """Stores the whole ledger as one JSON document.

    A missing file is bootstrapped with an empty ledger and written right
    away. Unreadable or malformed files raise StorageUnavailableError; they
    are never overwritten with a fresh ledger.
    """

    def __init__(self, path: Union[str, os.PathLike]):
        self.path = Path(path)

    def load(self) -> Ledger:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info("No ledger at %s, creating an empty one", self.path)
            ledger = Ledger()
            self.save(ledger)
            return ledger
        except OSError as e:
            logger.exception("Cannot read ledger at %s", self.path)
            raise StorageUnavailableError(f"Cannot read ledger: {e}") from e
        except UnicodeDecodeError as e:
            logger.exception("Ledger at %s is not valid UTF-8", self.path)
            raise StorageUnavailableError(f"Ledger file {self.path} is corrupt") from e

        try:
            return Ledger.model_validate_json(raw)
        except ValidationError as e:
            logger.exception("Ledger at %s is not a valid document", self.path)
            raise StorageUnavailableError(f"Ledger file {self.path} is corrupt") from e

    def save(self, ledger: Ledger) -> None:
        payload = ledger.model_dump_json(by_alias=True, indent=2)
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.exception("Cannot write ledger to %s", self.path)
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageUnavailableError(f"Cannot write ledger: {e}") from e
