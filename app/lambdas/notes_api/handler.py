# app/lambdas/notes_api/handler.py
import logging
import os

import boto3

from notes_core import config, notes
from notes_core.errors import MethodNotAllowed, RouteNotFound
from notes_core.http import api_handler, caller_id, method, parse_body
from notes_core.query import ListParams
from notes_core.schemas import NoteInput, StarInput, parse_model

logger = logging.getLogger()
logger.setLevel(config.LOG_LEVEL)

TABLE_NAME = os.environ.get("TABLE_NAME", "notes")

table = boto3.resource("dynamodb").Table(TABLE_NAME)


def _path_parts(event):
    """
    Segments after /notes/. Routed as ``ANY /notes/{proxy+}``; a plain
    ``{id}`` route falls back to the raw path for the trailing action.
    """
    params = event.get("pathParameters") or {}
    proxy = params.get("proxy")
    if proxy is not None or not params.get("id"):
        return [part for part in (proxy or "").split("/") if part]

    path = event.get("rawPath") or event.get("path") or ""
    tail = path.split("/notes/", 1)[1] if "/notes/" in path else ""
    return [params["id"]] + [part for part in tail.split("/")[1:] if part]


def _list(event, owner_id, note_id):
    params = ListParams.from_query_string(event.get("queryStringParameters"))
    return 200, notes.list_notes(table, owner_id, params)


def _create(event, owner_id, note_id):
    data = parse_model(NoteInput, parse_body(event))
    return 201, notes.create_note(table, owner_id, data)


def _get(event, owner_id, note_id):
    return 200, notes.get_note(table, owner_id, note_id)


def _update(event, owner_id, note_id):
    data = parse_model(NoteInput, parse_body(event))
    return 200, notes.update_note(table, owner_id, note_id, data)


def _delete(event, owner_id, note_id):
    return 200, notes.soft_delete_note(table, owner_id, note_id)


def _restore(event, owner_id, note_id):
    return 200, notes.restore_note(table, owner_id, note_id)


def _permanent_delete(event, owner_id, note_id):
    return 200, notes.permanent_delete_note(table, owner_id, note_id)


def _star(event, owner_id, note_id):
    data = parse_model(StarInput, parse_body(event))
    return 200, notes.set_starred(table, owner_id, note_id, data.starred)


# (has note id, trailing action) -> {method: operation}
ROUTES = {
    (False, None): {"GET": _list, "POST": _create},
    (True, None): {"GET": _get, "PUT": _update, "DELETE": _delete},
    (True, "restore"): {"PUT": _restore},
    (True, "permanent"): {"DELETE": _permanent_delete},
    (True, "star"): {"PUT": _star},
}


@api_handler
def lambda_handler(event, context):
    """Notes CRUD, trash and star routes under /notes."""
    owner_id = caller_id(event)
    http_method = method(event)
    parts = _path_parts(event)
    if len(parts) > 2:
        raise RouteNotFound(event.get("rawPath", "/notes"))

    note_id = parts[0] if parts else None
    action = parts[1] if len(parts) > 1 else None

    routes = ROUTES.get((note_id is not None, action))
    if routes is None:
        raise RouteNotFound(event.get("rawPath", "/notes"))
    operation = routes.get(http_method)
    if operation is None:
        raise MethodNotAllowed(http_method)

    return operation(event, owner_id, note_id)
