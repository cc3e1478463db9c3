# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Data-access for active key/value rows of the ``system_config`` table."""
from typing import Dict, Iterable

from sqlalchemy import bindparam, text
from sqlalchemy.engine import Engine


class SystemConfigRepository:
    def __init__(self, engine: Engine):
        self._engine = engine

    def get_values(self, keys: Iterable[str]) -> Dict[str, str]:
        with self._engine.connect() as conn:
            rows = conn.execute(
                text("SELECT key, value FROM system_config WHERE key IN :keys AND is_active = TRUE")
                .bindparams(bindparam("keys", expanding=True)),
                {"keys": list(keys)},
            ).mappings().all()
        return {r["key"]: r["value"] for r in rows if r["value"]}
