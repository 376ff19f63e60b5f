from enum import Enum

NULLS_STRIPPED = "nulls=stripped"
CHARSET_UTF8 = "; charset=utf-8"

# Deepest `for=` nesting of plan types the decoder follows.
MAX_PLAN_DEPTH = 8


class Mime(str, Enum):
    """Base media types formerly known as MIME types."""

    JSON = "application/json"
    GEOJSON = "application/geo+json"
    CSV = "text/csv"
    TEXT = "text/plain"
    XML = "text/xml"
    OPENAPI = "application/openapi+json"
    URLENCODED = "application/x-www-form-urlencoded"
    OCTET_STREAM = "application/octet-stream"
    ANY = "*/*"

    # vendored
    PLAN = "application/vnd.pgrst.plan"
    PLAN_TEXT = "application/vnd.pgrst.plan+text"
    PLAN_JSON = "application/vnd.pgrst.plan+json"
    OBJECT_JSON = "application/vnd.pgrst.object+json"
    OBJECT = "application/vnd.pgrst.object"
    ARRAY_JSON = "application/vnd.pgrst.array+json"
    ARRAY = "application/vnd.pgrst.array"


class PlanFormat(str, Enum):
    JSON = "json"
    TEXT = "text"


class PlanOption(str, Enum):
    """Execution plan options, declared in their canonical order."""

    ANALYZE = "analyze"
    VERBOSE = "verbose"
    SETTINGS = "settings"
    BUFFERS = "buffers"
    WAL = "wal"
