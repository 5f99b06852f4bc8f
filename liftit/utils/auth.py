from datetime import datetime, timezone
from typing import Any, Dict

import jwt
from fastapi import Depends, HTTPException, Request
from jwt import InvalidTokenError, PyJWKClient

from liftit.settings import settings
from liftit.utils.log import logger

ISSUER_URL = settings.COGNITO_ISSUER_URL
AUDIENCE = settings.COGNITO_AUDIENCE


def get_jwks_url(issuer_url: str) -> str:
    """
    Return the JWKS endpoint URL for a Cognito user pool.

    Pattern:
        <issuer_url>/.well-known/jwks.json
    """

    if not issuer_url:
        logger.error(
            f"Missing COGNITO_ISSUER_URL env var. Value={settings.COGNITO_ISSUER_URL}"
        )
        raise HTTPException(
            status_code=500,
            detail="Missing COGNITO_ISSUER_URL in environment variables.",
        )

    base = issuer_url.rstrip("/")
    return f"{base}/.well-known/jwks.json"


def get_id_token(request: Request) -> str:
    """Extract the ID token from the Authorization header or raise 401"""
    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token:
        logger.warning("Bearer token missing from Authorization header")
        raise HTTPException(status_code=401, detail="Bearer token is missing.")

    logger.debug("Bearer token found in Authorization header")
    return token


def decode_and_validate_id_token(
    id_token: str, jwks_url, issuer: str, audience: str
) -> Dict[str, Any]:
    """
    Decode the ID token, verify signature and claims, return decoded
    """
    jwks_client = PyJWKClient(jwks_url)
    signing_key = jwks_client.get_signing_key_from_jwt(id_token).key

    decoded_token = jwt.decode(
        id_token,
        signing_key,
        algorithms=["RS256"],
        issuer=issuer,
        audience=audience,
    )

    logger.debug("JWT successfully decoded and verified")

    token_use = decoded_token.get("token_use")
    if token_use != "id":
        logger.error(
            f"Token 'token_use' mismatch: expected 'id', got {decoded_token.get('token_use')}"
        )
        raise HTTPException(status_code=401, detail="Wrong token type")

    return decoded_token


def log_sub_and_exp(decoded_token: Dict[str, Any]):  # pragma: no cover
    """Logging the user sub and token expiry to help with debugging"""
    exp = decoded_token.get("exp")
    exp_time = (
        datetime.fromtimestamp(exp, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
        if exp
        else None
    )
    sub = decoded_token.get("sub")
    logger.info(f"Authenticated user sub={sub}, token exp={exp_time}")


async def require_auth(request: Request) -> Dict[str, Any]:
    """
    Validate the bearer ID token and return decoded claims.
    """

    if settings.DISABLE_AUTH_FOR_LOCAL_DEV:  # pragma: no cover
        logger.warning("Auth bypass enabled: returning fake LOCAL-DEV-USER claims")
        return {
            "sub": "LOCAL-DEV-USER",
            settings.USER_ID_CLAIM: str(settings.DEV_USER_ID),
        }

    id_token = get_id_token(request)

    issuer_url = (ISSUER_URL or "").rstrip("/")
    jwks_url = get_jwks_url(issuer_url)

    try:
        decoded_token = decode_and_validate_id_token(
            id_token=id_token, jwks_url=jwks_url, issuer=issuer_url, audience=AUDIENCE
        )

        log_sub_and_exp(decoded_token)

        return decoded_token

    except jwt.ExpiredSignatureError:
        logger.warning("ID token expired")
        raise HTTPException(status_code=401, detail="Token expired")

    except InvalidTokenError as e:
        logger.error(f"Invalid token: {e}")
        raise HTTPException(status_code=401, detail="Invalid token")

    except jwt.PyJWKClientError as e:
        logger.error(f"Unable to fetch signing key: {e}")
        raise HTTPException(status_code=401, detail="Invalid token")


def user_id_from_claims(claims: Dict[str, Any]) -> int:
    """
    Read the numeric application user id from verified claims.
    """
    raw = claims.get(settings.USER_ID_CLAIM)
    try:
        return int(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        logger.warning(
            f"Claim {settings.USER_ID_CLAIM} missing or not numeric for sub={claims.get('sub')}"
        )
        raise HTTPException(status_code=401, detail="Token has no user id")


async def require_user_id(claims: Dict[str, Any] = Depends(require_auth)) -> int:
    return user_id_from_claims(claims)
