"""Mapping of plain payload data onto the assessment form tree.

Payloads may use either snake_case or camelCase keys. Anything that cannot be
read as a tree at all (wrong container types, non-string text, nesting past
the depth guard) raises ``MalformedInputError`` before any validation rule
runs. String fields are trimmed, and nodes without an id get a fresh one.
"""

from typing import Any, Dict, List, Mapping

from ...domain.entities.assessment_form import (
    AnswerOption,
    Category,
    Question,
    QuestionType,
)
from ...domain.errors import MalformedInputError
from ...domain.services.validator import DEFAULT_MAX_DEPTH, UPDATABLE_FIELDS
from ...domain.value_objects.node_id import NodeId

_TEXT_FIELDS = tuple(name for name in UPDATABLE_FIELDS if name != "categories")


def _get(data: Mapping[str, Any], snake: str, camel: str, default: Any = None) -> Any:
    if snake in data:
        return data[snake]
    return data.get(camel, default)


def _as_mapping(value: Any, location: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise MalformedInputError(f"Expected an object at {location}", location)
    return value


def _as_list(value: Any, location: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise MalformedInputError(f"Expected a list at {location}", location)
    return list(value)


def clean_text(value: Any, location: str) -> str:
    """Trim a string field; None reads as empty."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise MalformedInputError(f"Expected a string at {location}", location)
    return value.strip()


def _node_id(value: Any, location: str) -> str:
    if value is None or (isinstance(value, str) and not value.strip()):
        return NodeId.generate().value
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise MalformedInputError(f"Expected a string id at {location}", location)
    return str(value)


def categories_from_payload(
    payload: Any, max_depth: int = DEFAULT_MAX_DEPTH
) -> List[Category]:
    """Build the category list of a form from plain data."""
    categories = []
    for index, raw in enumerate(_as_list(payload, "categories")):
        location = f"categories[{index}]"
        data = _as_mapping(raw, location)
        categories.append(
            Category(
                id=_node_id(data.get("id"), f"{location}.id"),
                name=clean_text(data.get("name"), f"{location}.name"),
                description=clean_text(data.get("description"), f"{location}.description"),
                questions=_questions_from_payload(
                    data.get("questions"), f"{location}.questions", 0, max_depth
                ),
            )
        )
    return categories


def _questions_from_payload(
    payload: Any, location: str, depth: int, max_depth: int
) -> List[Question]:
    items = _as_list(payload, location)
    if items and depth > max_depth:
        raise MalformedInputError(
            f"Sub-questions nested deeper than {max_depth} levels", location
        )
    questions = []
    for index, raw in enumerate(items):
        here = f"{location}[{index}]"
        data = _as_mapping(raw, here)
        question_type = data.get("type")
        questions.append(
            Question(
                id=_node_id(data.get("id"), f"{here}.id"),
                text=clean_text(data.get("text"), f"{here}.text"),
                type=(
                    QuestionType.MULTIPLE_CHOICE.value
                    if question_type is None
                    else clean_text(question_type, f"{here}.type")
                ),
                options=_options_from_payload(
                    data.get("options"), f"{here}.options", depth, max_depth
                ),
            )
        )
    return questions


def _options_from_payload(
    payload: Any, location: str, depth: int, max_depth: int
) -> List[AnswerOption]:
    options = []
    for index, raw in enumerate(_as_list(payload, location)):
        here = f"{location}[{index}]"
        data = _as_mapping(raw, here)
        sub_questions = _questions_from_payload(
            _get(data, "sub_questions", "subQuestions"),
            f"{here}.subQuestions",
            depth + 1,
            max_depth,
        )
        flag = _get(data, "has_sub_questions", "hasSubQuestions")
        if flag is None:
            flag = bool(sub_questions)
        elif not isinstance(flag, bool):
            raise MalformedInputError(
                f"Expected a boolean at {here}.hasSubQuestions", f"{here}.hasSubQuestions"
            )
        options.append(
            AnswerOption(
                id=_node_id(data.get("id"), f"{here}.id"),
                text=clean_text(data.get("text"), f"{here}.text"),
                has_sub_questions=flag,
                sub_questions=sub_questions,
            )
        )
    return options


def changes_from_payload(
    payload: Mapping[str, Any], max_depth: int = DEFAULT_MAX_DEPTH
) -> Dict[str, Any]:
    """Normalize the present fields of a partial update.

    Absent keys are dropped, as are keys that are not updatable (ids,
    ownership, usage and lifecycle fields). A present ``None`` is kept: it
    reads as empty text, or as an empty category list, so the validator
    rejects it.
    """
    data = _as_mapping(payload, "body")
    changes: Dict[str, Any] = {}
    for name in _TEXT_FIELDS:
        if name in data:
            changes[name] = clean_text(data[name], name)
    if "categories" in data:
        changes["categories"] = categories_from_payload(data["categories"], max_depth)
    return changes
