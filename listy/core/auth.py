import os
import secrets
from fastapi import Header, HTTPException

async def require_api_key(x_api_key: str = Header(default="", alias="X-API-Key")):
    # unset key means the API is closed, not open
    expected = os.getenv("LISTY_API_KEY", "")
    if not expected or not secrets.compare_digest(x_api_key.encode(), expected.encode()):
        raise HTTPException(status_code=401, detail="unauthorized")
