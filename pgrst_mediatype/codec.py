import logging

from pgrst_mediatype.enums import (
    CHARSET_UTF8,
    MAX_PLAN_DEPTH,
    NULLS_STRIPPED,
    Mime,
    PlanFormat,
    PlanOption,
)
from pgrst_mediatype.models import (
    Any,
    ApplicationJSON,
    GeoJSON,
    MediaType,
    OctetStream,
    OpenAPI,
    Other,
    TextCSV,
    TextPlain,
    TextXML,
    UrlEncoded,
    VndArrayJSONStrip,
    VndPlan,
    VndSingularJSON,
)

logger = logging.getLogger(__name__)

CONTENT_TYPE = b"Content-Type"

_NULLS_STRIPPED = NULLS_STRIPPED.encode()
_FOR_PREFIX = b"for="
_OPTIONS_PREFIX = b"options="

_PLAIN_TYPES: dict[Mime, MediaType] = {
    Mime.JSON: ApplicationJSON(),
    Mime.GEOJSON: GeoJSON(),
    Mime.CSV: TextCSV(),
    Mime.TEXT: TextPlain(),
    Mime.XML: TextXML(),
    Mime.OPENAPI: OpenAPI(),
    Mime.URLENCODED: UrlEncoded(),
    Mime.OCTET_STREAM: OctetStream(),
    Mime.ANY: Any(),
}


def _mime(base: Mime, *params: str) -> bytes:
    return ";".join([base.value, *params]).encode()


def to_mime(media_type: MediaType) -> bytes:
    """Canonical wire form of a media type."""
    match media_type:
        case ApplicationJSON():
            return _mime(Mime.JSON)
        case VndArrayJSONStrip():
            return _mime(Mime.ARRAY_JSON, NULLS_STRIPPED)
        case GeoJSON():
            return _mime(Mime.GEOJSON)
        case TextCSV():
            return _mime(Mime.CSV)
        case TextPlain():
            return _mime(Mime.TEXT)
        case TextXML():
            return _mime(Mime.XML)
        case OpenAPI():
            return _mime(Mime.OPENAPI)
        case VndSingularJSON(strip_nulls=True):
            return _mime(Mime.OBJECT_JSON, NULLS_STRIPPED)
        case VndSingularJSON():
            return _mime(Mime.OBJECT_JSON)
        case UrlEncoded():
            return _mime(Mime.URLENCODED)
        case OctetStream():
            return _mime(Mime.OCTET_STREAM)
        case Any():
            return _mime(Mime.ANY)
        case Other(value=value):
            return value
        case VndPlan():
            return _plan_mime(media_type)
    raise TypeError(f"Not a media type: {media_type!r}")


def _plan_mime(plan: VndPlan) -> bytes:
    mime = f"{Mime.PLAN.value}+{plan.format.value}; for=".encode()
    mime += b'"' + to_mime(plan.inner) + b'"'
    if plan.options:
        options = "|".join(option.value for option in plan.ordered_options)
        mime += b"; options=" + options.encode()
    return mime


def to_content_type(media_type: MediaType) -> tuple[bytes, bytes]:
    """Content-Type header for a media type.

    Binary and passthrough types get no charset.
    """
    match media_type:
        case OctetStream() | Other():
            charset = b""
        case _:
            charset = CHARSET_UTF8.encode()
    return CONTENT_TYPE, to_mime(media_type) + charset


def decode_media_type(
    raw: bytes | str, *, max_depth: int = MAX_PLAN_DEPTH
) -> MediaType:
    """Parse a media type from a Content-Type or Accept header value.

    Never fails: unknown base types come back as `Other`, unexpected
    parameters select the unflagged variant. Plan types nested deeper than
    `max_depth` through their `for=` parameter decode to `Other`.
    """
    if isinstance(raw, str):
        raw = raw.encode("utf-8", "surrogatepass")
    return _decode(raw, depth=1, max_depth=max_depth)


def _decode(raw: bytes, depth: int, max_depth: int) -> MediaType:
    base, *params = raw.split(b";")

    if not base:
        return Any()

    try:
        mime = Mime(base.decode("latin-1"))
    except ValueError:
        logger.debug("Unrecognized media type %r", base)
        return Other(value=base)

    match mime:
        case Mime.PLAN | Mime.PLAN_TEXT | Mime.PLAN_JSON:
            if depth > max_depth:
                logger.debug("Plan media type nested beyond %d levels", max_depth)
                return Other(value=base)
            fmt = PlanFormat.JSON if mime is Mime.PLAN_JSON else PlanFormat.TEXT
            return _decode_plan(fmt, params, depth, max_depth)
        case Mime.OBJECT_JSON | Mime.OBJECT:
            return VndSingularJSON(strip_nulls=params == [_NULLS_STRIPPED])
        case Mime.ARRAY_JSON | Mime.ARRAY:
            if params == [_NULLS_STRIPPED]:
                return VndArrayJSONStrip()
            return ApplicationJSON()
        case _:
            return _PLAIN_TYPES[mime]


def _find_param(params: list[bytes], prefix: bytes) -> bytes | None:
    for param in params:
        param = param.strip()
        if param.startswith(prefix):
            return param.removeprefix(prefix)
    return None


def _unquote(value: bytes) -> bytes:
    if value.startswith(b'"'):
        value = value[1:]
    if value.endswith(b'"'):
        value = value[:-1]
    return value


def _decode_plan(
    fmt: PlanFormat, params: list[bytes], depth: int, max_depth: int
) -> VndPlan:
    inner: MediaType = ApplicationJSON()
    if (mt_for := _find_param(params, _FOR_PREFIX)) is not None:
        inner = _decode(_unquote(mt_for), depth + 1, max_depth)

    tokens = []
    if (opts := _find_param(params, _OPTIONS_PREFIX)) is not None:
        tokens = opts.split(b"|")

    options = frozenset(o for o in PlanOption if o.value.encode() in tokens)
    if len(options) < len(set(tokens)):
        logger.debug("Ignoring unknown plan options in %r", opts)

    return VndPlan(inner=inner, format=fmt, options=options)
