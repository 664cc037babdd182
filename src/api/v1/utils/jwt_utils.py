"""Session token helpers (HS256 JWT)"""

import base64
import hashlib
import hmac
import json
import time
from typing import Any, Dict, Optional

SESSION_MAX_AGE = 7 * 24 * 60 * 60  # 7天


def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64url_decode(data: str) -> bytes:
    return base64.urlsafe_b64decode(data + "=" * (-len(data) % 4))


def _sign(message: str, secret: str) -> bytes:
    return hmac.new(
        secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha256
    ).digest()


def sign_session_token(
    user_id: int,
    open_id: str,
    secret: str,
    expires_in_sec: int = SESSION_MAX_AGE,
) -> str:
    """
    为登录用户签发会话令牌

    Args:
        user_id: 用户ID
        open_id: 用户的外部身份标识
        secret: 签名密钥
        expires_in_sec: 有效期（秒）
    """
    header = {"alg": "HS256", "typ": "JWT"}
    payload = {
        "id": user_id,
        "open_id": open_id,
        "exp": int(time.time()) + expires_in_sec,
    }

    header_b64 = _b64url_encode(json.dumps(header).encode("utf-8"))
    payload_b64 = _b64url_encode(json.dumps(payload).encode("utf-8"))
    message = f"{header_b64}.{payload_b64}"

    return f"{message}.{_b64url_encode(_sign(message, secret))}"


def verify_session_token(token: str, secret: str) -> Optional[Dict[str, Any]]:
    """
    校验会话令牌，签名错误、格式错误或已过期时返回 None
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None

    header_b64, payload_b64, signature_b64 = parts
    try:
        actual_signature = _b64url_decode(signature_b64)
        expected_signature = _sign(f"{header_b64}.{payload_b64}", secret)
        if not hmac.compare_digest(expected_signature, actual_signature):
            return None
        payload = json.loads(_b64url_decode(payload_b64).decode("utf-8"))
    except (ValueError, UnicodeDecodeError):
        return None

    if not isinstance(payload, dict) or payload.get("exp", 0) < time.time():
        return None
    return payload
