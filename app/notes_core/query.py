# app/notes_core/query.py
"""
Note query engine.

Turns the optional GET /notes parameters into one partition-scoped DynamoDB
query. The filter expression is evaluated by DynamoDB after the key match,
so it narrows the result set but not the number of items read.

Filter clauses are always added in the same order (deleted, starred,
keyword, tag) so that equal parameters build equal expressions.
"""
from __future__ import annotations

import functools
import logging
import operator
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from boto3.dynamodb.conditions import Attr, Key

from notes_core import config

logger = logging.getLogger(__name__)

SORT_ASC = "asc"
SORT_DESC = "desc"


def parse_flag(value: Optional[str]) -> Optional[bool]:
    """
    Tri-state query flag: ``None`` when absent, otherwise ``True`` only for
    the literal string "true". Anything else, garbage included, is False.
    """
    if value is None:
        return None
    return value == "true"


@dataclass(frozen=True)
class ListParams:
    starred: Optional[bool] = None
    deleted: Optional[bool] = None
    keyword: Optional[str] = None
    tag: Optional[str] = None
    sort_by: Optional[str] = None
    sort_order: str = SORT_ASC

    @classmethod
    def from_query_string(cls, params: Optional[Dict[str, str]]) -> "ListParams":
        params = params or {}
        return cls(
            starred=parse_flag(params.get("starred")),
            deleted=parse_flag(params.get("deleted")),
            keyword=params.get("keyword"),
            tag=params.get("tag"),
            sort_by=params.get("sortBy"),
            sort_order=SORT_DESC if params.get("sortOrder") == SORT_DESC else SORT_ASC,
        )


def _trimmed(value: Optional[str]) -> str:
    return (value or "").strip()


def build_filter(params: ListParams):
    if params.deleted is None:
        # notes written before the flag existed have no deleted attribute
        clauses = [Attr("deleted").not_exists() | Attr("deleted").eq(False)]
    else:
        clauses = [Attr("deleted").eq(params.deleted)]

    if params.starred is not None:
        clauses.append(Attr("starred").eq(params.starred))

    keyword = _trimmed(params.keyword)
    if keyword:
        clauses.append(Attr("title").contains(keyword) | Attr("content").contains(keyword))

    tag = _trimmed(params.tag)
    if tag:
        clauses.append(Attr("tags").contains(tag))

    return functools.reduce(operator.and_, clauses)


def build_query(owner_id: str, params: ListParams) -> Dict[str, Any]:
    """Keyword arguments for ``Table.query`` scoped to ``owner_id``."""
    if not owner_id:
        raise ValueError("owner_id is required")

    kwargs: Dict[str, Any] = {
        "KeyConditionExpression": Key("userId").eq(owner_id),
        "FilterExpression": build_filter(params),
    }

    # unknown sort fields fall back to the table's own (noteId) order
    index_name = config.SORT_INDEXES.get(params.sort_by)
    if index_name:
        kwargs["IndexName"] = index_name
        kwargs["ScanIndexForward"] = params.sort_order != SORT_DESC
    return kwargs


def query_notes(table, owner_id: str, params: ListParams) -> Tuple[List[Dict[str, Any]], int]:
    """
    Run the query and return ``(items, count)``.

    A single response is capped at 1 MB by DynamoDB, so pages are followed
    through ``LastEvaluatedKey`` until the query is exhausted.
    """
    kwargs = build_query(owner_id, params)
    items: List[Dict[str, Any]] = []
    count = 0
    pages = 0

    while True:
        response = table.query(**kwargs)
        page = response.get("Items", [])
        items.extend(page)
        count += response.get("Count", len(page))
        pages += 1

        last_key = response.get("LastEvaluatedKey")
        if not last_key:
            break
        kwargs["ExclusiveStartKey"] = last_key

    logger.info(
        "Queried notes for %s: %d match(es) over %d page(s), index=%s",
        owner_id, count, pages, kwargs.get("IndexName", "table"),
    )
    return items, count
