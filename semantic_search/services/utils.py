from typing import Optional

import httpx

# Remote bodies are kept on errors for diagnostics, but not unbounded
MAX_BODY_CHARS = 2000


def clean_user_text(raw_text: Optional[str]) -> str:
    if not raw_text:
        return ""
    return raw_text.strip()


def response_body(resp: httpx.Response) -> str:
    text = resp.text
    if len(text) > MAX_BODY_CHARS:
        return text[:MAX_BODY_CHARS] + "..."
    return text
