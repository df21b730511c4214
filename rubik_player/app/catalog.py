# rubik_player/app/catalog.py
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from rubik_player import config
from rubik_player.logic.moves import inverse_sequence, sequence_to_string

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AlgorithmEntry:
    """Un algoritmo del catálogo.

    `setup` deja al cubo en el caso que el algoritmo resuelve; si el JSON no lo
    trae se usa el inverso del propio algoritmo.
    """

    id: str
    name: str
    algorithm: str
    setup: str = ""
    group: str = ""
    tier: str = "beginner"
    description: str = ""


def load_catalog(path: Optional[Path] = None) -> List[AlgorithmEntry]:
    """Lee el catálogo de algoritmos desde un archivo JSON (lista de objetos).

    Las entradas sin `id` o sin `algorithm` se descartan. Si el archivo no se puede
    leer se devuelve un catálogo vacío y se registra un aviso.

    Args:
        path: Ruta del JSON; por defecto `config.CATALOG_PATH`.

    Returns:
        Lista de `AlgorithmEntry` en el orden del archivo.
    """
    path = Path(path) if path is not None else config.CATALOG_PATH
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("No se pudo leer el catálogo %s: %s", path, e)
        return []

    if not isinstance(raw, list):
        logger.warning("Catálogo con formato inesperado: %s", path)
        return []

    entries: List[AlgorithmEntry] = []
    for item in raw:
        if not isinstance(item, dict) or not item.get("id") or not item.get("algorithm"):
            logger.debug("Entrada de catálogo ignorada: %r", item)
            continue

        algorithm = str(item["algorithm"])
        setup = item.get("setup")
        if setup is None:
            setup = sequence_to_string(inverse_sequence(algorithm))

        entries.append(
            AlgorithmEntry(
                id=str(item["id"]),
                name=str(item.get("name") or item["id"]),
                algorithm=algorithm,
                setup=str(setup),
                group=str(item.get("group", "")),
                tier=str(item.get("tier", "beginner")),
                description=str(item.get("description", "")),
            )
        )
    return entries


def filter_by_tier(entries: Iterable[AlgorithmEntry], tier: str) -> List[AlgorithmEntry]:
    """Algoritmos visibles para un nivel.

    Con "full" se ven todos; con cualquier otro nivel, solo los "beginner".
    """
    if tier == "full":
        return list(entries)
    return [e for e in entries if e.tier == "beginner"]
