"""
Zhipu AI GLM Provider.

GLM speaks the OpenAI chat completions format. Compound credentials
(``id.secret`` or ``id:secret``) are exchanged for a short-lived HS256 JWT
signed with the secret; anything else is sent as-is and left for the
vendor to accept or reject.
https://open.bigmodel.cn/dev/api
"""
import time
from typing import Optional, Tuple

import jwt

from ...core.logging_config import get_logger
from ...domain.value_objects import ProviderId
from .openai_compatible import OpenAICompatibleProvider

logger = get_logger(__name__)

TOKEN_TTL_MS = 3600 * 1000


def split_compound_key(api_key: str) -> Optional[Tuple[str, str]]:
    """
    Split a compound GLM key into ``(id, secret)``.

    Returns None for keys that are already JWTs (three dot-separated
    segments) or carry no delimiter.
    """
    if api_key.count(".") == 2 and ":" not in api_key:
        return None
    for delimiter in (":", "."):
        if delimiter in api_key:
            key_id, secret = api_key.split(delimiter, 1)
            if key_id and secret:
                return key_id, secret
            return None
    return None


def derive_glm_token(api_key: str, now_ms: Optional[int] = None) -> str:
    """
    Derive the Bearer token for a GLM credential.

    Args:
        api_key: Raw key from settings
        now_ms: Current time in milliseconds (defaults to the wall clock)

    Returns:
        Signed JWT for compound keys, otherwise the key unchanged
    """
    parts = split_compound_key(api_key)
    if parts is None:
        return api_key

    key_id, secret = parts
    timestamp = now_ms if now_ms is not None else int(round(time.time() * 1000))
    payload = {
        "api_key": key_id,
        "exp": timestamp + TOKEN_TTL_MS,
        "timestamp": timestamp,
    }
    return jwt.encode(
        payload,
        secret,
        algorithm="HS256",
        headers={"alg": "HS256", "sign_type": "SIGN"},
    )


class GLMProvider(OpenAICompatibleProvider):
    """AI Provider using the Zhipu AI GLM API."""

    provider_id = ProviderId.GLM

    def bearer_token(self, api_key: str) -> str:
        return derive_glm_token(api_key)
