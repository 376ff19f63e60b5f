from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_serializer

from pgrst_mediatype.enums import PlanFormat, PlanOption


class _MediaTypeBase(BaseModel):
    model_config = ConfigDict(frozen=True)


class ApplicationJSON(_MediaTypeBase):
    kind: Literal["application_json"] = "application_json"


class GeoJSON(_MediaTypeBase):
    kind: Literal["geo_json"] = "geo_json"


class TextCSV(_MediaTypeBase):
    kind: Literal["text_csv"] = "text_csv"


class TextPlain(_MediaTypeBase):
    kind: Literal["text_plain"] = "text_plain"


class TextXML(_MediaTypeBase):
    kind: Literal["text_xml"] = "text_xml"


class OpenAPI(_MediaTypeBase):
    kind: Literal["openapi"] = "openapi"


class UrlEncoded(_MediaTypeBase):
    kind: Literal["url_encoded"] = "url_encoded"


class OctetStream(_MediaTypeBase):
    kind: Literal["octet_stream"] = "octet_stream"


class Any(_MediaTypeBase):
    """`*/*`"""

    kind: Literal["any"] = "any"


class Other(_MediaTypeBase):
    """Unrecognized base type, kept byte for byte."""

    kind: Literal["other"] = "other"
    value: bytes

    @field_serializer("value", when_used="json")
    def serialize_value(self, value: bytes) -> str:
        return value.decode("latin-1")


class VndArrayJSONStrip(_MediaTypeBase):
    kind: Literal["vnd_array_json_strip"] = "vnd_array_json_strip"


class VndSingularJSON(_MediaTypeBase):
    kind: Literal["vnd_singular_json"] = "vnd_singular_json"
    strip_nulls: bool = False


class VndPlan(_MediaTypeBase):
    """Request for the execution plan of a query.

    `inner` is the media type the plan is rendered for. `options` is a set;
    use `ordered_options` wherever the order matters.
    """

    kind: Literal["vnd_plan"] = "vnd_plan"
    inner: "MediaType" = Field(default_factory=ApplicationJSON)
    format: PlanFormat = PlanFormat.TEXT
    options: frozenset[PlanOption] = frozenset()

    @property
    def ordered_options(self) -> tuple[PlanOption, ...]:
        return tuple(option for option in PlanOption if option in self.options)

    @field_serializer("options")
    def serialize_options(self, options: frozenset[PlanOption]) -> list[PlanOption]:
        return list(self.ordered_options)


MediaTypeVariant = Union[
    ApplicationJSON,
    GeoJSON,
    TextCSV,
    TextPlain,
    TextXML,
    OpenAPI,
    UrlEncoded,
    OctetStream,
    Any,
    Other,
    VndArrayJSONStrip,
    VndSingularJSON,
    VndPlan,
]

MediaType = Annotated[MediaTypeVariant, Field(discriminator="kind")]

VndPlan.model_rebuild()

MediaTypeAdapter: TypeAdapter[MediaType] = TypeAdapter(MediaType)
