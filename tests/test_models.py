import pydantic
import pytest

from pgrst_mediatype.enums import PlanFormat, PlanOption
from pgrst_mediatype.models import (
    ApplicationJSON,
    MediaTypeAdapter,
    Other,
    TextCSV,
    VndPlan,
    VndSingularJSON,
)


def test_variants_compare_by_kind_and_payload():
    assert ApplicationJSON() == ApplicationJSON()
    assert ApplicationJSON() != TextCSV()
    assert VndSingularJSON(strip_nulls=True) != VndSingularJSON(strip_nulls=False)
    assert Other(value=b"a/b") == Other(value=b"a/b")


def test_variants_are_immutable_and_hashable():
    plan = VndPlan(
        inner=TextCSV(),
        format=PlanFormat.JSON,
        options=frozenset({PlanOption.WAL}),
    )
    with pytest.raises(pydantic.ValidationError):
        plan.format = PlanFormat.TEXT  # type: ignore[misc]

    assert len({plan, plan.model_copy(), ApplicationJSON()}) == 2


def test_plan_defaults():
    plan = VndPlan()
    assert plan.inner == ApplicationJSON()
    assert plan.format == PlanFormat.TEXT
    assert plan.options == frozenset()


def test_plan_options_are_a_set_in_canonical_order():
    plan = VndPlan(
        inner=ApplicationJSON(),
        format=PlanFormat.TEXT,
        options=["wal", "buffers", "analyze", "wal"],  # type: ignore[arg-type]
    )
    assert plan.options == {PlanOption.ANALYZE, PlanOption.BUFFERS, PlanOption.WAL}
    assert plan.ordered_options == (
        PlanOption.ANALYZE,
        PlanOption.BUFFERS,
        PlanOption.WAL,
    )


@pytest.mark.parametrize(
    "kwargs",
    [
        {"options": ["costs"]},
        {"format": "yaml"},
        {"inner": {"kind": "unknown"}},
    ],
)
def test_plan_rejects_out_of_shape_payloads(kwargs):
    with pytest.raises(pydantic.ValidationError):
        VndPlan(**kwargs)


def test_adapter_validates_nested_plan():
    media_type = MediaTypeAdapter.validate_python(
        {
            "kind": "vnd_plan",
            "inner": {"kind": "vnd_plan", "inner": {"kind": "text_csv"}},
            "format": "json",
            "options": ["verbose"],
        }
    )
    assert media_type == VndPlan(
        inner=VndPlan(
            inner=TextCSV(), format=PlanFormat.TEXT, options=frozenset()
        ),
        format=PlanFormat.JSON,
        options=frozenset({PlanOption.VERBOSE}),
    )


def test_adapter_dumps_other_as_text():
    dumped = MediaTypeAdapter.dump_python(Other(value=b"x/y"), mode="json")
    assert dumped == {"kind": "other", "value": "x/y"}
