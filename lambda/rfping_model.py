# rfping_model.py
# The single stored entity: one received ping.
# Attribute names double as the JSON keys returned to callers.

import json
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

FIELDS = (("uuid", "Uuid"), ("path", "Path"), ("ip", "IP"), ("time", "Time"))


@dataclass(frozen=True)
class Ping:
    uuid: str = ""
    path: str = ""
    ip: str = ""
    time: str = ""

    @classmethod
    def new(cls, path: str, ip: str, now: Optional[datetime] = None) -> "Ping":
        """Build a fresh record stamped with a new UUID4 and the current UTC time."""
        stamp = now or datetime.now(timezone.utc)
        return cls(uuid=str(uuid.uuid4()), path=path, ip=ip, time=str(stamp))

    @classmethod
    def from_item(cls, item: Mapping[str, Any]) -> "Ping":
        """Build a record from a DynamoDB item; missing attributes stay empty."""
        values = {}
        for field_name, key in FIELDS:
            value = item.get(key, "")
            if not isinstance(value, str):
                raise ValueError(f"attribute {key!r} is {type(value).__name__}, expected string")
            values[field_name] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, str]:
        return {key: getattr(self, field_name) for field_name, key in FIELDS}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())
