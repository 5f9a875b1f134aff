"""Tree operations over assessment forms: field counts, duplication, shape equality."""

import copy
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, List, Optional

from ..entities.assessment_form import AnswerOption, AssessmentForm, Category, Question
from ..errors import MalformedInputError
from ..value_objects.node_id import NodeId
from .validator import DEFAULT_MAX_DEPTH

# Placeholder timestamp for id-stripped copies.
_EPOCH = datetime(1970, 1, 1)


def compute_field_count(form: AssessmentForm) -> int:
    """Count the fillable prompts of a form.

    Every top-level question counts once, and every sub-question directly
    under an option of a top-level question counts once when that option has
    ``has_sub_questions`` set. Deeper sub-questions are not counted.
    """
    count = 0
    for category in form.categories:
        count += len(category.questions)
        for question in category.questions:
            for option in question.options:
                if option.has_sub_questions:
                    count += len(option.sub_questions)
    return count


def _new_id() -> str:
    return NodeId.generate().value


def clone_with_fresh_identity(
    form: AssessmentForm,
    id_factory: Optional[Callable[[], str]] = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
    **overrides: Any,
) -> AssessmentForm:
    """Deep-copy a form, giving every node at every depth a new id.

    ``overrides`` replace top-level form fields; everything else is copied
    verbatim. The copy has no form id until the repository assigns one.
    """
    new_id = id_factory or _new_id
    categories = [
        Category(
            id=new_id(),
            name=category.name,
            description=category.description,
            questions=_clone_questions(category.questions, new_id, 0, max_depth),
        )
        for category in form.categories
    ]
    fields = {"id": None, "categories": categories}
    fields.update(overrides)
    return replace(form, **fields)


def _clone_questions(
    questions: List[Question], new_id: Callable[[], str], depth: int, max_depth: int
) -> List[Question]:
    if questions and depth > max_depth:
        raise MalformedInputError(
            f"Sub-questions nested deeper than {max_depth} levels"
        )
    return [
        Question(
            id=new_id(),
            text=question.text,
            type=question.type,
            options=[
                AnswerOption(
                    id=new_id(),
                    text=option.text,
                    has_sub_questions=option.has_sub_questions,
                    sub_questions=_clone_questions(
                        option.sub_questions, new_id, depth + 1, max_depth
                    ),
                )
                for option in question.options
            ],
        )
        for question in questions
    ]


def collect_node_ids(form: AssessmentForm) -> List[str]:
    """Every category, question and option id in the tree, in document order."""
    ids: List[str] = []
    for category in form.categories:
        ids.append(category.id)
        stack = list(reversed(category.questions))
        while stack:
            question = stack.pop()
            ids.append(question.id)
            children: List[Question] = []
            for option in question.options:
                ids.append(option.id)
                children.extend(option.sub_questions)
            stack.extend(reversed(children))
    return ids


def strip_ids(node: Any) -> Any:
    """Return a copy of a form, node or node list with every id blanked.

    Timestamps of a form are reset to a fixed value as well.
    """
    stripped = copy.deepcopy(node)
    _blank_ids(stripped)
    return stripped


def _blank_ids(node: Any) -> None:
    stack = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, list):
            stack.extend(current)
        elif isinstance(current, AssessmentForm):
            current.id = None
            current.created_at = current.updated_at = _EPOCH
            stack.extend(current.categories)
        elif isinstance(current, Category):
            current.id = ""
            stack.extend(current.questions)
        elif isinstance(current, Question):
            current.id = ""
            stack.extend(current.options)
        elif isinstance(current, AnswerOption):
            current.id = ""
            stack.extend(current.sub_questions)


def _shape(node: Any) -> Any:
    if isinstance(node, list):
        return tuple(_shape(child) for child in node)
    if isinstance(node, AssessmentForm):
        return (
            "form",
            node.title,
            node.description,
            node.category,
            node.status,
            node.created_by,
            node.usage_count,
            node.is_active,
            _shape(node.categories),
        )
    if isinstance(node, Category):
        return ("category", node.name, node.description, _shape(node.questions))
    if isinstance(node, Question):
        return ("question", node.text, node.type, _shape(node.options))
    if isinstance(node, AnswerOption):
        return (
            "option",
            node.text,
            bool(node.has_sub_questions),
            _shape(node.sub_questions),
        )
    return node


def deep_equal(a: Any, b: Any) -> bool:
    """Structural equality of two forms, nodes or node lists.

    Ids and timestamps are ignored; everything else, including order, must
    match.
    """
    return _shape(a) == _shape(b)
