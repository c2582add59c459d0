# app/notes_core/http.py
"""API Gateway (HTTP API v2) request and response helpers."""
import base64
import functools
import json
import logging
from decimal import Decimal

from botocore.exceptions import BotoCoreError, ClientError

from notes_core import config
from notes_core.errors import NotesError, UnauthorizedError, ValidationError

logger = logging.getLogger(__name__)

INTERNAL_ERROR = {"error": "internal_error", "message": "Failed to process request"}


class DecimalEncoder(json.JSONEncoder):
    def default(self, obj):
        if isinstance(obj, Decimal):
            # DynamoDB returns every number as Decimal
            if obj % 1 == 0:
                return int(obj)
            return float(obj)
        if isinstance(obj, set):
            return sorted(obj)
        return super().default(obj)


def response(status_code, body):
    return {
        "statusCode": status_code,
        "headers": {
            "Content-Type": "application/json",
            "Access-Control-Allow-Origin": config.CORS_ORIGIN,
        },
        "body": json.dumps(body, cls=DecimalEncoder),
    }


def method(event):
    return event.get("requestContext", {}).get("http", {}).get("method", "GET").upper()


def caller_id(event):
    """
    Identity injected by API Gateway's authorizer. Supports IAM (Cognito
    identity pool), JWT and Lambda authorizers; never reads the body.
    """
    authorizer = (event.get("requestContext") or {}).get("authorizer") or {}
    identity = (
        ((authorizer.get("iam") or {}).get("cognitoIdentity") or {}).get("identityId")
        or ((authorizer.get("jwt") or {}).get("claims") or {}).get("sub")
        or (authorizer.get("lambda") or {}).get("principalId")
    )
    if not identity:
        raise UnauthorizedError()
    return identity


def parse_body(event):
    raw = event.get("body") or "{}"
    try:
        if event.get("isBase64Encoded"):
            raw = base64.b64decode(raw).decode("utf-8")
        return json.loads(raw)
    except (ValueError, UnicodeDecodeError) as exc:
        raise ValidationError("Request body is not valid JSON") from exc


def api_handler(func):
    """
    Wrap a Lambda entry point returning ``(status, body)``.

    Known errors keep their status code; store and unexpected failures are
    logged and answered with a generic 500 so nothing internal leaks.
    """
    @functools.wraps(func)
    def wrapper(event, context):
        logger.info("Received %s %s", method(event), event.get("rawPath", ""))
        logger.debug("Event: %s", event)

        try:
            status_code, body = func(event, context)
        except NotesError as exc:
            logger.info("Rejected request: %s (%s)", exc.code, exc.message)
            return response(exc.status_code, {"error": exc.code, "message": exc.message})
        except (ClientError, BotoCoreError):
            logger.exception("DynamoDB request failed")
            return response(500, INTERNAL_ERROR)
        except Exception:
            logger.exception("Unhandled error")
            return response(500, INTERNAL_ERROR)

        return response(status_code, body)

    return wrapper
