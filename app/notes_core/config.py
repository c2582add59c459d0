# app/notes_core/config.py
import logging
import os

CREATED_AT_INDEX = os.environ.get("CREATED_AT_INDEX", "userId-createdAt-index")
UPDATED_AT_INDEX = os.environ.get("UPDATED_AT_INDEX", "userId-updatedAt-index")

CORS_ORIGIN = os.environ.get("CORS_ORIGIN", "*")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
if not isinstance(logging.getLevelName(LOG_LEVEL), int):
    LOG_LEVEL = "INFO"

# sortBy value -> secondary index name
SORT_INDEXES = {
    "createdAt": CREATED_AT_INDEX,
    "updatedAt": UPDATED_AT_INDEX,
}
