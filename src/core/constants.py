"""Core constants used across Sweep modules.

This module centralizes store field names, view names, and defaults.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_COUCH_URL = "http://localhost:5984"
DEFAULT_DATABASE = "medic"
DEFAULT_LOG_DIR = Path("sweep-logs")
DEFAULT_BATCH_SIZE = 100
DEFAULT_REPORT_TYPE = "data_record"

ID_FIELD = "_id"
DELETED_FIELD = "_deleted"
TYPE_FIELD = "type"
CONTACT_FIELD = "contact"
REPORTED_DATE_FIELD = "reported_date"

PERSON_TYPE = "person"

CONTACTS_BY_PLACE_VIEW = "medic/contacts_by_place"
RECORDS_BY_BRANCH_VIEW = "medic/data_records_by_district"
FACILITIES_BY_CONTACT_VIEW = "medic/facilities_by_contact"

# Upper bound appended to a key prefix to cover every descendant key.
KEY_RANGE_SENTINEL = "\ufff0"

FACILITY_SNAPSHOT_PREFIX = "cleaned_facilities_"
BATCH_SNAPSHOT_PREFIX = "deleted_"
SNAPSHOT_SUFFIX = ".json"
LOG_FILE_TEMPLATE = "sweep_{command}.log"
