import pytest

from assessment_forms.application.mappers.form_mapper import (
    categories_from_payload,
    changes_from_payload,
    clean_text,
)
from assessment_forms.domain.errors import MalformedInputError
from assessment_forms.domain.services.form_tree import collect_node_ids

from tests.factories import make_form, reading_check_payload


def test_maps_camel_case_tree():
    payload = [
        {
            "id": "c1",
            "name": " Basics ",
            "questions": [
                {
                    "id": "q1",
                    "text": "Can the student read?",
                    "options": [
                        {
                            "id": "o1",
                            "text": "Partly",
                            "hasSubQuestions": True,
                            "subQuestions": [
                                {"id": "q2", "text": "Which words?", "options": []}
                            ],
                        },
                        {"id": "o2", "text": "Fully"},
                    ],
                }
            ],
        }
    ]

    [category] = categories_from_payload(payload)

    assert category.name == "Basics"
    assert category.description == ""
    question = category.questions[0]
    assert question.type == "multiple_choice"
    assert question.options[0].has_sub_questions is True
    assert question.options[0].sub_questions[0].id == "q2"
    assert question.options[1].has_sub_questions is False
    assert question.options[1].sub_questions == []


def test_accepts_snake_case_keys():
    payload = [
        {
            "name": "Basics",
            "questions": [
                {
                    "text": "Q?",
                    "options": [
                        {"text": "A", "sub_questions": [{"text": "Sub?"}]},
                        {"text": "B"},
                    ],
                }
            ],
        }
    ]

    [category] = categories_from_payload(payload)

    option = category.questions[0].options[0]
    assert option.has_sub_questions is True
    assert option.sub_questions[0].text == "Sub?"


def test_generates_missing_ids():
    categories = categories_from_payload(reading_check_payload()["categories"])
    form = make_form(categories=categories)

    ids = collect_node_ids(form)
    assert len(ids) == 4
    assert all(ids)
    assert len(set(ids)) == 4


def test_explicit_flag_is_kept_for_the_validator():
    [category] = categories_from_payload(
        [{"name": "x", "questions": [{"text": "Q?", "options": [{"text": "A", "hasSubQuestions": True}]}]}]
    )

    assert category.questions[0].options[0].has_sub_questions is True


def test_none_categories_reads_as_empty():
    assert categories_from_payload(None) == []


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "not a list"},
        ["not an object"],
        [{"name": 5}],
        [{"name": "x", "questions": [{"text": "Q?", "options": [{"text": "A", "hasSubQuestions": "yes"}]}]}],
        [{"id": True, "name": "x"}],
    ],
)
def test_malformed_payloads(payload):
    with pytest.raises(MalformedInputError):
        categories_from_payload(payload)


def test_nesting_past_guard_is_malformed():
    question = {"text": "leaf?", "options": [{"text": "A"}, {"text": "B"}]}
    for _ in range(4):
        question = {"text": "Q?", "options": [{"text": "A", "subQuestions": [question]}, {"text": "B"}]}

    categories_from_payload([{"name": "x", "questions": [question]}], max_depth=4)
    with pytest.raises(MalformedInputError) as exc_info:
        categories_from_payload([{"name": "x", "questions": [question]}], max_depth=3)

    assert exc_info.value.error_code == "MALFORMED_INPUT"


def test_clean_text():
    assert clean_text("  hi ", "title") == "hi"
    assert clean_text(None, "title") == ""
    with pytest.raises(MalformedInputError):
        clean_text(["hi"], "title")


def test_changes_keep_only_present_updatable_fields():
    changes = changes_from_payload(
        {
            "title": " New ",
            "usage_count": 50,
            "created_by": "someone",
            "is_active": False,
        }
    )

    assert changes == {"title": "New"}


def test_changes_keep_present_nulls():
    changes = changes_from_payload({"description": None, "categories": None})

    assert changes == {"description": "", "categories": []}


def test_changes_map_categories():
    changes = changes_from_payload({"categories": reading_check_payload()["categories"]})

    assert changes["categories"][0].name == "Basics"
