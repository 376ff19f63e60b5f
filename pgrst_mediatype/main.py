import logging
from typing import Any

import orjson
from fastapi import Depends, FastAPI, Query, Request, Response

from pgrst_mediatype.codec import decode_media_type, to_content_type, to_mime
from pgrst_mediatype.enums import Mime
from pgrst_mediatype.models import (
    ApplicationJSON,
    MediaType,
    MediaTypeAdapter,
    MediaTypeVariant,
)

logger = logging.getLogger("uvicorn")


app = FastAPI(
    title="pgrst-mediatype",
)


def accept_media_types(request: Request) -> list[MediaType]:
    """Decode every entry of the Accept header, in the order sent.

    No ranking is applied; `*/*` when the header is absent.
    """
    accept = request.headers.get("accept", Mime.ANY.value).encode("latin-1")
    return [decode_media_type(entry.strip()) for entry in accept.split(b",")]


def content_media_type(request: Request) -> MediaType:
    """Header values arrive latin-1 decoded; decode the wire bytes."""
    content_type = request.headers.get("content-type", Mime.JSON.value)
    return decode_media_type(content_type.encode("latin-1"))


def describe(media_type: MediaType) -> dict[str, Any]:
    _, content_type = to_content_type(media_type)
    return {
        "mediaType": MediaTypeAdapter.dump_python(media_type, mode="json"),
        "mime": to_mime(media_type).decode("latin-1"),
        "contentType": content_type.decode("latin-1"),
    }


def json_response(content: Any) -> Response:
    name, value = to_content_type(ApplicationJSON())
    return Response(
        orjson.dumps(content),
        headers={name.decode(): value.decode()},
    )


@app.get("/media-types/decode")
def get_decoded_media_type(
    value: str = Query(description="Raw Content-Type or Accept value"),
):
    """Decode a single media type"""
    media_type = decode_media_type(value)
    logger.debug("Decoded %r as %r", value, media_type)
    return json_response(describe(media_type))


@app.get("/media-types/accept")
def get_accepted_media_types(
    media_types: list[MediaTypeVariant] = Depends(accept_media_types),
):
    return json_response([describe(media_type) for media_type in media_types])


@app.post("/media-types/echo")
async def echo_body(
    request: Request,
    media_type: MediaTypeVariant = Depends(content_media_type),
):
    """Send the body back under its canonical Content-Type."""
    name, value = to_content_type(media_type)
    return Response(
        await request.body(),
        headers={name.decode(): value.decode("latin-1")},
    )
