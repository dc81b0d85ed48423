"""ATECO code → forfettario profitability coefficient resolution.

Used to convert forfettario revenue into taxable income:
  reddito_lordo = fatturato × coefficiente_di_redditività

The user's own ATECO codes drive the engine. The bundled seed catalogue
(forfettario/data/ateco_seed.json) lists common forfettario activities so a new
account can pick its codes without typing coefficients.

Reference: Legge 190/2014, Art. 1, commi 54-89, Allegato 4.
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from forfettario.schemas.fiscal import AtecoCode

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"
_SEED_PATH = _DATA_DIR / "ateco_seed.json"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def _load_seed_data() -> tuple[dict, ...]:
    """Load the seed catalogue from JSON."""
    if not _SEED_PATH.exists():
        logger.warning("ATECO seed catalogue not found at %s", _SEED_PATH)
        return ()
    with open(_SEED_PATH, encoding="utf-8") as f:
        return tuple(json.load(f))


def _normalize(code: str) -> str:
    """Strip spaces and dots: ' 62.01.00 ' → '620100'."""
    return code.strip().replace(".", "").replace(" ", "")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def resolve_coefficient(
    ateco_code_id: str | None,
    ateco_codes: list[AtecoCode],
    default: Decimal,
) -> Decimal:
    """Coefficient for an income record tagged with ateco_code_id.

    Falls back to the first configured code when the id is missing or
    unknown, and to default when no code is configured at all.
    """
    if not ateco_codes:
        return default
    for code in ateco_codes:
        if code.id == ateco_code_id:
            return code.coefficient
    return ateco_codes[0].coefficient


def load_seed_codes() -> list[AtecoCode]:
    """Return the bundled catalogue as AtecoCode objects.

    Ids are derived from the official code ("seed_62.01.00") so that
    re-seeding an account is idempotent.
    """
    return [
        AtecoCode(
            id=f"seed_{row['code']}",
            code=row["code"],
            description=row["description"],
            coefficient=Decimal(str(row["coefficient"])),
        )
        for row in _load_seed_data()
    ]


def find_seed_code(code: str) -> AtecoCode | None:
    """Look up a seed entry by its official code, with or without dots."""
    wanted = _normalize(code)
    if not wanted:
        return None
    for seed in load_seed_codes():
        if _normalize(seed.code) == wanted:
            return seed
    return None
