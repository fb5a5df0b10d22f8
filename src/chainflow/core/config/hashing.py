"""
Fingerprint da configuração efetiva.

`EventLog.for_config` grava o valor em `EventLog.config_hash`, associando
os eventos de uma execução à configuração que os produziu.
"""

import hashlib
import json
from typing import Any, Dict


def canonical_config_bytes(config: Dict[str, Any]) -> bytes:
    """JSON UTF-8 com chaves ordenadas e separadores compactos."""
    if not isinstance(config, dict):
        raise TypeError(f"Config deve ser dict, recebido: {type(config).__name__}")
    return json.dumps(
        config, sort_keys=True, separators=(",", ":"), ensure_ascii=False
    ).encode("utf-8")


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    SHA-256 (hex, 64 caracteres) de `canonical_config_bytes(config)`.

    A ordem original das chaves não afeta o resultado.
    """
    return hashlib.sha256(canonical_config_bytes(config)).hexdigest()
