# tests/test_tags_api.py
"""Unit tests for the Tags API Lambda handler."""
import importlib
import importlib.util
import json
import os
from unittest.mock import patch, MagicMock

import pytest
from boto3.dynamodb.conditions import Attr

_tags_dir = os.path.join(os.path.dirname(__file__), "..", "app", "lambdas", "tags_api")

mock_table = MagicMock()
mock_ddb_resource = MagicMock()
mock_ddb_resource.Table.return_value = mock_table

with patch.dict(os.environ, {"TABLE_NAME": "test-notes"}):
    with patch("boto3.resource", return_value=mock_ddb_resource):
        spec = importlib.util.spec_from_file_location("tags_handler", os.path.join(_tags_dir, "handler.py"))
        tags = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(tags)
        tags.table = mock_table


@pytest.fixture(autouse=True)
def _reset_table():
    mock_table.reset_mock(return_value=True, side_effect=True)
    yield


def _make_event(method="GET", principal_id="user:alice"):
    return {
        "rawPath": "/tags",
        "requestContext": {
            "http": {"method": method},
            "authorizer": {"lambda": {"principalId": principal_id}},
        },
    }


class TestLambdaHandler:
    def test_sorted_distinct_tags(self):
        mock_table.query.return_value = {"Items": [
            {"noteId": "1", "tags": ["work", "urgent"]},
            {"noteId": "2", "tags": ["work"]},
        ]}
        result = tags.lambda_handler(_make_event(), None)

        assert result["statusCode"] == 200
        assert json.loads(result["body"]) == ["urgent", "work"]

    def test_skips_blank_and_missing_tags(self):
        mock_table.query.return_value = {"Items": [
            {"noteId": "1", "tags": [" home ", "", "   "]},
            {"noteId": "2"},
            {"noteId": "3", "tags": None},
        ]}
        result = tags.lambda_handler(_make_event(), None)

        assert json.loads(result["body"]) == ["home"]

    def test_excludes_trash(self):
        mock_table.query.return_value = {"Items": []}
        tags.lambda_handler(_make_event(), None)

        kwargs = mock_table.query.call_args.kwargs
        assert kwargs["FilterExpression"] == Attr("deleted").not_exists() | Attr("deleted").eq(False)

    def test_method_not_allowed(self):
        result = tags.lambda_handler(_make_event(method="POST"), None)
        assert result["statusCode"] == 405

    def test_missing_identity(self):
        event = _make_event()
        event["requestContext"]["authorizer"] = {}
        result = tags.lambda_handler(event, None)
        assert result["statusCode"] == 401
