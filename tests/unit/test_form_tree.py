import pytest

from assessment_forms.domain.errors import MalformedInputError
from assessment_forms.domain.services.form_tree import (
    clone_with_fresh_identity,
    collect_node_ids,
    compute_field_count,
    deep_equal,
    strip_ids,
)

from tests.factories import (
    make_branching_form,
    make_category,
    make_form,
    make_nested_form,
    make_option,
    make_question,
)


def test_field_count_counts_one_level_of_sub_questions():
    branching = make_question(
        options=[
            make_option("Some", [make_question("a?"), make_question("b?")]),
            make_option("None"),
        ]
    )
    form = make_form(
        categories=[
            make_category(questions=[make_question(), make_question()]),
            make_category(questions=[branching, make_question(), make_question()]),
        ]
    )

    assert compute_field_count(form) == 7


def test_field_count_ignores_deeper_levels():
    # 3 top-level questions, 1 direct sub-question; the grandchild is not counted
    assert compute_field_count(make_branching_form()) == 4


def test_field_count_ignores_sub_questions_without_flag():
    option = make_option("Some", [make_question("a?")], has_sub_questions=False)
    form = make_form(
        categories=[make_category(questions=[make_question(options=[option, make_option("No")])])]
    )

    assert compute_field_count(form) == 1


def test_field_count_of_empty_form():
    assert compute_field_count(make_form(categories=[])) == 0


def test_clone_gives_fresh_ids_at_every_depth():
    form = make_branching_form()
    form.id = "form-1"

    clone = clone_with_fresh_identity(form)

    original_ids = collect_node_ids(form)
    clone_ids = collect_node_ids(clone)
    assert len(clone_ids) == len(original_ids)
    assert len(set(clone_ids)) == len(clone_ids)
    assert not set(clone_ids) & set(original_ids)
    assert clone.id is None


def test_clone_preserves_shape():
    form = make_branching_form()

    clone = clone_with_fresh_identity(form)

    assert deep_equal(clone, form)
    assert clone.categories[0] is not form.categories[0]


def test_clone_applies_overrides():
    form = make_form(title="Reading Check", usage_count=9)

    clone = clone_with_fresh_identity(form, title="Reading Check (Copy)", usage_count=0)

    assert clone.title == "Reading Check (Copy)"
    assert clone.usage_count == 0
    assert form.title == "Reading Check"


def test_clone_uses_id_factory():
    ids = iter(f"n{i}" for i in range(100))

    clone = clone_with_fresh_identity(make_form(), id_factory=lambda: next(ids))

    assert collect_node_ids(clone)[:2] == ["n0", "n1"]


def test_clone_accepts_trees_at_the_depth_guard():
    form = make_nested_form(3)

    clone = clone_with_fresh_identity(form, max_depth=3)

    assert deep_equal(clone, form)


def test_clone_refuses_trees_past_the_depth_guard():
    question = make_question("leaf?")
    for _ in range(4):
        question = make_question(options=[make_option("Go", [question]), make_option("Stop")])
    form = make_form(categories=[make_category(questions=[question])])

    with pytest.raises(MalformedInputError):
        clone_with_fresh_identity(form, max_depth=3)


def test_collect_node_ids_in_document_order():
    form = make_form(
        categories=[
            make_category(
                id="c1",
                questions=[
                    make_question(
                        id="q1",
                        options=[
                            make_option("A", [make_question(id="q2", options=[])], id="o1"),
                            make_option("B", id="o2"),
                        ],
                    )
                ],
            )
        ]
    )

    assert collect_node_ids(form) == ["c1", "q1", "o1", "o2", "q2"]


def test_strip_ids_leaves_input_untouched():
    form = make_branching_form()
    first_id = form.categories[0].id

    stripped = strip_ids(form)

    assert form.categories[0].id == first_id
    assert stripped.categories[0].id == ""
    assert set(collect_node_ids(stripped)) == {""}


def test_deep_equal_ignores_ids_and_timestamps():
    a = make_branching_form()
    b = make_branching_form()
    b.id = "other"

    assert deep_equal(a, b)


def test_deep_equal_detects_text_changes():
    a = make_branching_form()
    b = make_branching_form()
    b.categories[0].questions[0].options[0].sub_questions[0].text = "Changed?"

    assert not deep_equal(a, b)


def test_deep_equal_respects_order():
    a = make_category(questions=[make_question("one?"), make_question("two?")])
    b = make_category(questions=[make_question("two?"), make_question("one?")])

    assert not deep_equal(a, b)
