# rubik_player/app/progress.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, Optional

from rubik_player import config

logger = logging.getLogger(__name__)


class ProgressTracker:
    """Guarda qué algoritmos marcó el usuario como aprendidos.

    Todo el progreso vive en un único objeto JSON bajo la clave
    `config.PROGRESS_STORAGE_KEY` dentro del archivo:

        {"learn-cfop-progress": {"oll-27": true, "pll-t": true}}

    Un archivo inexistente o corrupto equivale a "sin progreso"; un error al
    escribir se registra en el log y se ignora.
    """

    def __init__(self, path: Optional[Path] = None, key: str = config.PROGRESS_STORAGE_KEY) -> None:
        self.path: Path = Path(path) if path is not None else config.PROGRESS_PATH
        self.key: str = key

    def _get_all(self) -> Dict[str, bool]:
        try:
            blob = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("Progreso ilegible en %s, se ignora: %s", self.path, e)
            return {}

        data = blob.get(self.key) if isinstance(blob, dict) else None
        if not isinstance(data, dict):
            return {}
        return {str(k): True for k, v in data.items() if v}

    def _save_all(self, data: Dict[str, bool]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps({self.key: data}, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("No se pudo guardar el progreso en %s: %s", self.path, e)

    def is_completed(self, alg_id: str) -> bool:
        return bool(self._get_all().get(alg_id))

    def set_completed(self, alg_id: str, done: bool) -> None:
        """Marca (o desmarca) un algoritmo como aprendido."""
        data = self._get_all()
        if done:
            data[alg_id] = True
        else:
            data.pop(alg_id, None)
        self._save_all(data)

    def count_completed(self, ids: Iterable[str]) -> int:
        data = self._get_all()
        return sum(1 for i in ids if data.get(i))

    def get_progress(self, ids: Iterable[str]) -> float:
        """Fracción (0..1) de `ids` marcados como aprendidos."""
        ids = list(ids)
        if not ids:
            return 0.0
        return self.count_completed(ids) / len(ids)
