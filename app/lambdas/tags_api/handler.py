# app/lambdas/tags_api/handler.py
import logging
import os

import boto3

from notes_core import config, notes
from notes_core.errors import MethodNotAllowed
from notes_core.http import api_handler, caller_id, method

logger = logging.getLogger()
logger.setLevel(config.LOG_LEVEL)

TABLE_NAME = os.environ.get("TABLE_NAME", "notes")

table = boto3.resource("dynamodb").Table(TABLE_NAME)


@api_handler
def lambda_handler(event, context):
    """GET /tags: distinct tags across the caller's notes, trash excluded."""
    http_method = method(event)
    if http_method != "GET":
        raise MethodNotAllowed(http_method)

    return 200, notes.list_tags(table, caller_id(event))
