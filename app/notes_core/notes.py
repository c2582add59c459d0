# app/notes_core/notes.py
"""
Note operations.

Every function takes the DynamoDB ``table`` and the caller's ``owner_id``
explicitly; the owner id is the partition key and never comes from the
request body. Writes are last-write-wins, there is no version check.
"""
import logging
import time
import uuid

from boto3.dynamodb.conditions import Attr
from botocore.exceptions import ClientError

from notes_core.errors import NoteNotFound, ValidationError
from notes_core.query import ListParams, query_notes

logger = logging.getLogger(__name__)

CONDITION_FAILED = "ConditionalCheckFailedException"


def now_ms():
    return int(time.time() * 1000)


def _key(owner_id, note_id):
    if not note_id:
        raise ValidationError("Note ID is required")
    return {"userId": owner_id, "noteId": note_id}


def _update_existing(table, owner_id, note_id, **kwargs):
    """update_item that fails with NoteNotFound instead of creating an item."""
    try:
        return table.update_item(
            Key=_key(owner_id, note_id),
            ConditionExpression=Attr("noteId").exists(),
            **kwargs,
        )
    except ClientError as exc:
        if exc.response.get("Error", {}).get("Code") == CONDITION_FAILED:
            raise NoteNotFound(note_id) from exc
        raise


def create_note(table, owner_id, data):
    created_at = now_ms()
    item = {
        "userId": owner_id,
        "noteId": str(uuid.uuid4()),
        "title": data.title,
        "content": data.content,
        "tags": data.tags,
        "starred": False,
        "deleted": False,
        "createdAt": created_at,
        # keeps new notes visible in the updatedAt index
        "updatedAt": created_at,
    }
    if data.attachment:
        item["attachment"] = data.attachment

    table.put_item(Item=item)
    logger.info("Created note %s for %s", item["noteId"], owner_id)
    return item


def get_note(table, owner_id, note_id):
    response = table.get_item(Key=_key(owner_id, note_id))
    item = response.get("Item")
    if not item:
        raise NoteNotFound(note_id)
    return item


def list_notes(table, owner_id, params=None):
    items, count = query_notes(table, owner_id, params or ListParams())
    return {"notes": items, "count": count}


def update_note(table, owner_id, note_id, data):
    assignments = ["title = :title", "content = :content", "tags = :tags", "updatedAt = :updatedAt"]
    values = {
        ":title": data.title,
        ":content": data.content,
        ":tags": data.tags,
        ":updatedAt": now_ms(),
    }
    if data.attachment:
        assignments.append("attachment = :attachment")
        values[":attachment"] = data.attachment
        expression = "SET " + ", ".join(assignments)
    else:
        expression = "SET " + ", ".join(assignments) + " REMOVE attachment"

    response = _update_existing(
        table, owner_id, note_id,
        UpdateExpression=expression,
        ExpressionAttributeValues=values,
        ReturnValues="ALL_NEW",
    )
    logger.info("Updated note %s for %s", note_id, owner_id)
    return response.get("Attributes", {})


def soft_delete_note(table, owner_id, note_id):
    _update_existing(
        table, owner_id, note_id,
        UpdateExpression="SET deleted = :deleted, deletedAt = :deletedAt",
        ExpressionAttributeValues={":deleted": True, ":deletedAt": now_ms()},
    )
    logger.info("Moved note %s to trash for %s", note_id, owner_id)
    return {"status": True}


def restore_note(table, owner_id, note_id):
    _update_existing(
        table, owner_id, note_id,
        UpdateExpression="SET deleted = :deleted REMOVE deletedAt",
        ExpressionAttributeValues={":deleted": False},
    )
    logger.info("Restored note %s for %s", note_id, owner_id)
    return {"status": True}


def permanent_delete_note(table, owner_id, note_id):
    # unconditional: deleting a missing note is not an error
    table.delete_item(Key=_key(owner_id, note_id))
    logger.info("Permanently deleted note %s for %s", note_id, owner_id)
    return {"status": True}


def set_starred(table, owner_id, note_id, starred):
    response = _update_existing(
        table, owner_id, note_id,
        UpdateExpression="SET starred = :starred",
        ExpressionAttributeValues={":starred": starred},
        ReturnValues="ALL_NEW",
    )
    return response.get("Attributes", {})


def list_tags(table, owner_id):
    """Sorted, distinct, non-blank tags across the caller's visible notes."""
    items, _ = query_notes(table, owner_id, ListParams())
    tags = set()
    for item in items:
        item_tags = item.get("tags")
        if not isinstance(item_tags, (list, set)):
            continue
        for tag in item_tags:
            if isinstance(tag, str) and tag.strip():
                tags.add(tag.strip())
    return sorted(tags)
