from __future__ import annotations

from datetime import datetime
from typing import Optional

from google.protobuf import timestamp_pb2


def to_timestamp(dt: Optional[datetime]) -> Optional[timestamp_pb2.Timestamp]:
    if not dt:
        return None
    ts = timestamp_pb2.Timestamp()
    ts.FromDatetime(dt)
    return ts
