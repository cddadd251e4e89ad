"""Per-session CSRF token for the console's form posts."""
import hmac
import secrets
from itsdangerous import BadSignature, URLSafeSerializer
from fastapi import Request, HTTPException
from ..settings import settings

SESSION_KEY = "_csrf_token"

def _serializer() -> URLSafeSerializer:
    return URLSafeSerializer(settings.secret_key, salt="taskboard-csrf-v1")

def get_or_set_csrf(request: Request) -> str:
    """Token rendered into every form; minted once per session."""
    token = request.session.get(SESSION_KEY)
    if not token:
        token = _serializer().dumps(secrets.token_hex(16))
        request.session[SESSION_KEY] = token
    return token

def validate_csrf(request: Request, token: str) -> None:
    """Reject a post whose token is unsigned or not this session's."""
    expected = request.session.get(SESSION_KEY)
    if not token or not expected:
        raise HTTPException(status_code=400, detail="Missing CSRF token")
    try:
        _serializer().loads(token)
    except BadSignature:
        raise HTTPException(status_code=400, detail="Invalid CSRF token")
    if not hmac.compare_digest(token, expected):
        raise HTTPException(status_code=400, detail="Invalid CSRF token")
