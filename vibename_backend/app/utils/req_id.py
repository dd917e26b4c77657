# vibename_backend/app/utils/req_id.py
from __future__ import annotations
import os, time, uuid

def new_request_id(prefix: str = "req") -> str:
    # pid + ms keeps ids sortable per worker; the uuid tail keeps them unique under load
    return f"{prefix}-{int(time.time()*1000)}-{os.getpid()}-{uuid.uuid4().hex[:6]}"
