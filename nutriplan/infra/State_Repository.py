"""Wizard state persistence: one versioned JSON file per logical record."""
import json
import logging
import os
import shutil
import tempfile
import threading
from pathlib import Path
from typing import Any, Optional

from nutriplan.domain.ImageCache import ImageCache
from nutriplan.domain.Plan import Plan
from nutriplan.domain.PlanConfig import PlanConfig
from nutriplan.infra.paths import RECORD_FILES
from nutriplan.utilities.constants import STATE_SCHEMA_VERSION

logger = logging.getLogger(__name__)


class StateRepository:
    """Typed load/save/clear for step, loading, config, plan, image_cache and shopping_list.

    Every record is stored as {"version": N, "value": ...}. A missing file, broken JSON or a
    different version loads as the record's default. Multi-record read-modify-write sequences
    hold `lock`.
    """

    def __init__(self, data_dir: Path, version: int = STATE_SCHEMA_VERSION):
        self.data_dir = Path(data_dir)
        self.version = version
        self.lock = threading.RLock()

    def _path(self, record: str) -> Path:
        return self.data_dir / RECORD_FILES[record]

    def _read(self, record: str, default: Any) -> Any:
        path = self._path(record)
        if not path.exists():
            return default
        try:
            with open(path, "r", encoding="utf-8") as f:
                envelope = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Unreadable state record %s (%s); using default", record, e)
            return default
        if not isinstance(envelope, dict) or envelope.get("version") != self.version:
            logger.warning("State record %s has stale schema; using default", record)
            return default
        return envelope.get("value", default)

    def _write(self, record: str, value: Any) -> None:
        path = self._path(record)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(path.parent), prefix=f".{path.stem}_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump({"version": self.version, "value": value}, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    # --- step ---
    def load_step(self) -> Optional[str]:
        """Raw persisted step; validation belongs to the wizard."""
        value = self._read("step", None)
        return value if value is None or isinstance(value, str) else repr(value)

    def save_step(self, step: str) -> None:
        self._write("step", step)

    # --- loading flag ---
    def load_loading(self) -> bool:
        return bool(self._read("loading", False))

    def save_loading(self, loading: bool) -> None:
        self._write("loading", bool(loading))

    # --- configuration ---
    def load_config(self) -> PlanConfig:
        return PlanConfig.from_dict(self._read("config", {}))

    def save_config(self, config: PlanConfig) -> None:
        self._write("config", config.to_dict())

    # --- plan ---
    def load_plan(self) -> Plan:
        return Plan.from_list(self._read("plan", []))

    def save_plan(self, plan: Plan) -> None:
        self._write("plan", plan.to_list())

    # --- image cache ---
    def load_image_cache(self) -> ImageCache:
        return ImageCache.from_dict(self._read("image_cache", {}))

    def save_image_cache(self, cache: ImageCache) -> None:
        self._write("image_cache", cache.to_dict())

    # --- shopping list ---
    def load_shopping_list(self) -> str:
        value = self._read("shopping_list", "")
        return value if isinstance(value, str) else ""

    def save_shopping_list(self, text: str) -> None:
        self._write("shopping_list", text or "")

    def clear(self) -> None:
        """Remove every persisted record."""
        with self.lock:
            for record in RECORD_FILES:
                path = self._path(record)
                try:
                    path.unlink()
                except FileNotFoundError:
                    pass
        logger.info("Cleared persisted state in %s", self.data_dir)


__all__ = ['StateRepository']
