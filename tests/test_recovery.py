import json

import pytest

from conftest import PLAN_DOC
from fitcoach.errors import SchemaViolationError
from fitcoach.models.plan import DEFAULT_MOTIVATION
from fitcoach.parsing.recovery import FragmentStatus, RawText, recover_plan, strip_code_fences
from fitcoach.parsing.validator import validate_plan


def test_strict_parse_accepts_clean_json(plan_json):
    candidate = recover_plan(plan_json)
    assert candidate.stage == "strict"
    assert candidate.data == PLAN_DOC


def test_strict_parse_defaults_only_missing_fields():
    doc = {"workout": PLAN_DOC["workout"], "diet": PLAN_DOC["diet"]}
    candidate = recover_plan(json.dumps(doc))
    assert candidate.stage == "strict"
    assert candidate.data["tips"] == []
    assert candidate.data["motivation"] == DEFAULT_MOTIVATION
    assert candidate.data["workout"] == PLAN_DOC["workout"]


def test_raw_text_wrapper_is_accepted(plan_json):
    assert recover_plan(RawText(plan_json)).data == PLAN_DOC


@pytest.mark.parametrize("fence", ["```json\n{}\n```", "```JSON\n{}\n```", "```\n{}\n```", "  ```json {} ```  "])
def test_fenced_json_matches_unwrapped(plan_json, fence):
    fenced = fence.replace("{}", plan_json)
    candidate = recover_plan(fenced)
    assert candidate.stage == "fenced"
    assert validate_plan(candidate) == validate_plan(recover_plan(plan_json))


def test_strip_code_fences_leaves_plain_text_alone():
    assert strip_code_fences('  {"a": 1}\n') == '{"a": 1}'


def test_piecewise_extracts_nested_routines_from_prose():
    routines = PLAN_DOC["workout"]["dailyRoutines"]
    text = (
        "Sure! Here is the plan you asked for.\n"
        '{"workout": {"dailyRoutines": ' + json.dumps(routines) + "},\n"
        '"diet": {"meals": {"breakfast": "Oats", "lunch": "Salad"}},\n'
        '"tips": ["Warm up"], "motivation": "Go!"\n'
        "Let me know if you need changes"
    )
    candidate = recover_plan(text)

    assert candidate.stage == "piecewise"
    assert candidate.fragments["dailyRoutines"].status is FragmentStatus.VALUE
    assert candidate.fragments["dailyRoutines"].value == routines
    assert candidate.data["workout"]["dailyRoutines"] == routines
    assert candidate.data["diet"]["meals"] == {"breakfast": "Oats", "lunch": "Salad", "dinner": "", "snacks": ""}
    assert candidate.data["tips"] == ["Warm up"]
    assert candidate.data["motivation"] == "Go!"


def test_piecewise_partial_success_on_truncated_output():
    text = (
        '```json\n{"diet": {"meals": {"breakfast": "Oats", "dinner": "Curry"}}, '
        '"tips": ["Rest", 3], '
        '"workout": {"dailyRoutines": [{"day": "Mon", "exercises": [{"name": "Squat"'
    )
    candidate = recover_plan(text)

    assert candidate.fragments["dailyRoutines"].status is FragmentStatus.MALFORMED
    assert candidate.fragments["meals"].status is FragmentStatus.VALUE
    assert candidate.fragments["tips"].value == ["Rest", "3"]
    assert candidate.fragments["motivation"].status is FragmentStatus.DEFAULT

    plan = validate_plan(candidate)
    assert plan.workout.daily_routines == []
    assert plan.diet.meals.breakfast == "Oats"
    assert plan.diet.meals.lunch == ""
    assert plan.motivation == DEFAULT_MOTIVATION


def test_fragment_present_but_unparseable_is_malformed():
    text = '"workout": {"dailyRoutines": []}, "diet": {"meals": {}}, "tips": ["a",]'
    candidate = recover_plan(text)
    assert candidate.fragments["tips"].status is FragmentStatus.MALFORMED
    assert candidate.fragments["tips"].value == []
    assert candidate.fragments["dailyRoutines"].status is FragmentStatus.VALUE


def test_absent_fragment_is_default():
    candidate = recover_plan('"workout": {"dailyRoutines": []}, "diet": {"meals": {}}')
    assert candidate.fragments["tips"].status is FragmentStatus.DEFAULT
    assert candidate.fragments["motivation"].status is FragmentStatus.DEFAULT


@pytest.mark.parametrize("text", [
    "I'm sorry, I can't help with that.",
    "",
    '{"tips": ["only tips"], "motivation": "hi"}',
    "[1, 2, 3]",
])
def test_text_without_plan_sections_is_schema_violation(text):
    candidate = recover_plan(text)
    with pytest.raises(SchemaViolationError):
        validate_plan(candidate)


def test_recovery_is_idempotent_on_its_own_output():
    text = 'Here you go: "workout": {"dailyRoutines": [{"day": "Mon", "exercises": [{"name": "Row", "sets": 3}]}]}, "diet": {"meals": {"lunch": "Rice"}}'
    plan = validate_plan(recover_plan(text))
    again = validate_plan(recover_plan(plan.to_json()))
    assert again == plan
    assert recover_plan(plan.to_json()).stage == "strict"


def test_output_cut_off_before_diet_keeps_workout():
    routines = PLAN_DOC["workout"]["dailyRoutines"]
    text = '```json\n{"workout": {"dailyRoutines": ' + json.dumps(routines) + '},\n  "di'
    candidate = recover_plan(text)

    assert candidate.fragments["meals"].status is FragmentStatus.DEFAULT
    plan = validate_plan(candidate)
    assert len(plan.workout.daily_routines) == 3
    assert plan.workout.daily_routines[2].day == "Friday - Legs"
    assert plan.diet.meals.model_dump() == {"breakfast": "", "lunch": "", "dinner": "", "snacks": ""}


def test_meals_alone_still_yield_both_sections():
    candidate = recover_plan('Here are meals: "meals": {"lunch": "Dal"}')
    plan = validate_plan(candidate)
    assert plan.workout.daily_routines == []
    assert plan.diet.meals.lunch == "Dal"
