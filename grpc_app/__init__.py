"""gRPC transport layer for the comment and video services.

This package hosts:
- Protocol buffers (in `protos/`), compiled at import time by `generated`.
- Server bootstrap and interceptors.
- Thin servicers that validate ids, call the repositories and map results.
- The peer client the comment service uses to reach the video service.
"""
