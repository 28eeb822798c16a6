import hashlib
import json
from typing import Any


def hash_request(payload: dict[str, Any]) -> str:
    normalized = json.dumps(
        payload, sort_keys=True, default=str, separators=(",", ":")
    )
    return hashlib.sha256(normalized.encode()).hexdigest()
