from assessment_forms.domain.services.validator import (
    ValidationIssue,
    validate_categories,
    validate_form,
    validate_partial,
)

from tests.factories import (
    make_branching_form,
    make_category,
    make_form,
    make_option,
    make_question,
)


def _fields(issues):
    return [issue.field for issue in issues]


def test_valid_form_has_no_issues():
    assert validate_form(make_form()) == []


def test_branching_form_is_valid():
    assert validate_form(make_branching_form()) == []


def test_reports_every_header_problem_at_once():
    form = make_form(title="  ", description="", category="Math", status="live", created_by="")

    issues = validate_form(form)

    assert _fields(issues) == ["title", "description", "category", "status", "createdBy"]


def test_empty_category_list():
    issues = validate_form(make_form(categories=[]))

    assert _fields(issues) == ["categories"]


def test_empty_category_name_reports_name_once():
    category = make_category(name="", id="c1")

    issues = validate_form(make_form(categories=[category]))

    assert len(issues) == 1
    assert issues[0].field == "name"
    assert issues[0].category_id == "c1"


def test_category_without_questions():
    issues = validate_categories([make_category(questions=[])])

    assert _fields(issues) == ["categoryQuestions"]


def test_question_with_single_option():
    question = make_question(options=[make_option("Only")], id="q1")

    issues = validate_categories([make_category(questions=[question], id="c1")])

    assert _fields(issues) == ["questionOptions"]
    assert issues[0].path == "categories[c1].questions[q1].questionOptions"


def test_question_text_and_type():
    question = make_question(text="")
    question.type = "free_text"

    issues = validate_categories([make_category(questions=[question])])

    assert _fields(issues) == ["questionText", "questionType"]


def test_blank_option_text():
    question = make_question(options=[make_option("Yes"), make_option("  ", id="o2")])

    issues = validate_categories([make_category(questions=[question])])

    assert _fields(issues) == ["optionText"]
    assert issues[0].option_id == "o2"


def test_flag_without_sub_questions():
    option = make_option("Some", has_sub_questions=True)
    question = make_question(options=[option, make_option("None")])

    issues = validate_categories([make_category(questions=[question])])

    assert _fields(issues) == ["hasSubQuestions"]


def test_sub_questions_without_flag_are_still_checked():
    bad_child = make_question(text="", options=[make_option("x")])
    option = make_option("Some", [bad_child], has_sub_questions=False)
    question = make_question(options=[option, make_option("None")])

    issues = validate_categories([make_category(questions=[question])])

    assert _fields(issues) == ["hasSubQuestions", "questionText", "questionOptions"]


def test_errors_deep_in_the_tree_are_found():
    form = make_branching_form()
    grandchild = (
        form.categories[0].questions[0].options[0].sub_questions[0].options[0].sub_questions[0]
    )
    grandchild.options = grandchild.options[:1]

    issues = validate_form(form)

    assert _fields(issues) == ["questionOptions"]
    assert issues[0].question_id == grandchild.id


def test_duplicate_ids():
    first = make_question(id="q1", options=[make_option("A", id="o1"), make_option("B", id="o1")])
    second = make_question(id="q1")
    categories = [
        make_category(questions=[first, second], id="c1"),
        make_category(id="c1"),
    ]

    issues = validate_categories(categories)

    assert sorted(_fields(issues)) == [
        "duplicateCategoryId",
        "duplicateOptionId",
        "duplicateQuestionId",
    ]


def test_question_ids_may_repeat_across_categories():
    categories = [
        make_category(questions=[make_question(id="q1")]),
        make_category(questions=[make_question(id="q1")]),
    ]

    assert validate_categories(categories) == []


def test_nesting_depth_guard():
    question = make_question("leaf?")
    for level in range(5):
        question = make_question(f"level {level}?", [make_option("Go", [question]), make_option("Stop")])
    form = make_form(categories=[make_category(questions=[question])])

    assert validate_form(form, max_depth=5) == []
    assert _fields(validate_form(form, max_depth=4)) == ["nestingDepth"]


def test_very_deep_tree_does_not_exhaust_the_stack():
    question = make_question("leaf?")
    for level in range(3000):
        question = make_question(f"level {level}?", [make_option("Go", [question]), make_option("Stop")])
    form = make_form(categories=[make_category(questions=[question])])

    assert _fields(validate_form(form, max_depth=32)) == ["nestingDepth"]


def test_validate_form_does_not_mutate_input():
    form = make_form(title="")
    before = repr(form)

    validate_form(form)

    assert repr(form) == before


def test_partial_ignores_omitted_fields():
    assert validate_partial({}) == []
    assert validate_partial({"title": "New title"}) == []


def test_partial_checks_present_fields():
    issues = validate_partial(
        {"title": "", "category": "Math", "status": "published", "categories": []}
    )

    assert _fields(issues) == ["title", "category", "status", "categories"]


def test_issue_serialization():
    issue = ValidationIssue("optionText", "Option text is required", "c1", "q1", "o1")

    assert issue.to_dict() == {
        "field": "optionText",
        "message": "Option text is required",
        "path": "categories[c1].questions[q1].options[o1].optionText",
        "categoryId": "c1",
        "questionId": "q1",
        "optionId": "o1",
    }
