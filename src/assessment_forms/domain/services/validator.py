"""Structural and content validation of assessment form trees.

``validate_form`` walks the whole tree depth-first with an explicit stack and
collects every problem it finds; it never raises and never mutates its input.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set

from ..entities.assessment_form import (
    FORM_CATEGORIES,
    FORM_STATUSES,
    QUESTION_TYPES,
    AssessmentForm,
    Category,
    Question,
)

DEFAULT_MAX_DEPTH = 32

# Fields an update may carry; anything else is ignored by partial validation.
UPDATABLE_FIELDS = ("title", "description", "category", "status", "categories")


@dataclass(frozen=True)
class ValidationIssue:
    """A single rule violation at a location in the form tree."""

    field: str
    message: str
    category_id: Optional[str] = None
    question_id: Optional[str] = None
    option_id: Optional[str] = None

    @property
    def path(self) -> str:
        parts = []
        if self.category_id is not None:
            parts.append(f"categories[{self.category_id}]")
        if self.question_id is not None:
            parts.append(f"questions[{self.question_id}]")
        if self.option_id is not None:
            parts.append(f"options[{self.option_id}]")
        parts.append(self.field)
        return ".".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field": self.field,
            "message": self.message,
            "path": self.path,
            "categoryId": self.category_id,
            "questionId": self.question_id,
            "optionId": self.option_id,
        }


def _blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def validate_form(
    form: AssessmentForm, max_depth: int = DEFAULT_MAX_DEPTH
) -> List[ValidationIssue]:
    """Validate a complete form. An empty list means it may be persisted."""
    issues: List[ValidationIssue] = []
    issues.extend(_validate_header(form.title, form.description, form.category))
    if form.status not in FORM_STATUSES:
        issues.append(
            ValidationIssue(
                "status", f"Status must be one of: {', '.join(FORM_STATUSES)}"
            )
        )
    if _blank(form.created_by):
        issues.append(ValidationIssue("createdBy", "Creator ID is required"))
    issues.extend(validate_categories(form.categories, max_depth))
    return issues


def validate_partial(
    changes: Mapping[str, Any], max_depth: int = DEFAULT_MAX_DEPTH
) -> List[ValidationIssue]:
    """Validate only the fields present in an update.

    Omitted fields are fine; any present field must satisfy the same rule as
    in full validation.
    """
    issues: List[ValidationIssue] = []
    if "title" in changes and _blank(changes["title"]):
        issues.append(ValidationIssue("title", "Title cannot be empty"))
    if "description" in changes and _blank(changes["description"]):
        issues.append(ValidationIssue("description", "Description cannot be empty"))
    if "category" in changes and changes["category"] not in FORM_CATEGORIES:
        issues.append(ValidationIssue("category", "Valid category is required"))
    if "status" in changes and changes["status"] not in FORM_STATUSES:
        issues.append(
            ValidationIssue(
                "status", f"Status must be one of: {', '.join(FORM_STATUSES)}"
            )
        )
    if "categories" in changes:
        issues.extend(validate_categories(changes["categories"], max_depth))
    return issues


def _validate_header(title: Any, description: Any, category: Any) -> List[ValidationIssue]:
    issues = []
    if _blank(title):
        issues.append(ValidationIssue("title", "Title is required"))
    if _blank(description):
        issues.append(ValidationIssue("description", "Description is required"))
    if category not in FORM_CATEGORIES:
        issues.append(ValidationIssue("category", "Valid category is required"))
    return issues


def validate_categories(
    categories: List[Category], max_depth: int = DEFAULT_MAX_DEPTH
) -> List[ValidationIssue]:
    """Validate a form's category list and everything below it."""
    if not categories:
        return [ValidationIssue("categories", "At least one category is required")]

    issues: List[ValidationIssue] = []
    seen_category_ids: Set[str] = set()
    for category in categories:
        cid = category.id
        if cid in seen_category_ids:
            issues.append(
                ValidationIssue(
                    "duplicateCategoryId",
                    f"Category id '{cid}' is used more than once",
                    category_id=cid,
                )
            )
        seen_category_ids.add(cid)

        if _blank(category.name):
            issues.append(
                ValidationIssue(
                    "name", "Category name is required", category_id=cid
                )
            )
        if not category.questions:
            issues.append(
                ValidationIssue(
                    "categoryQuestions",
                    "Each category must have at least one question",
                    category_id=cid,
                )
            )
        issues.extend(_validate_question_tree(cid, category.questions, max_depth))
    return issues


def _validate_question_tree(
    category_id: str, questions: Iterable[Question], max_depth: int
) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    seen_question_ids: Set[str] = set()

    # (question, depth); reversed so questions are reported in document order
    stack = [(q, 0) for q in reversed(list(questions))]
    while stack:
        question, depth = stack.pop()
        qid = question.id
        if qid in seen_question_ids:
            issues.append(
                ValidationIssue(
                    "duplicateQuestionId",
                    f"Question id '{qid}' is used more than once in this category",
                    category_id=category_id,
                    question_id=qid,
                )
            )
        seen_question_ids.add(qid)

        if _blank(question.text):
            issues.append(
                ValidationIssue(
                    "questionText",
                    "Question text is required",
                    category_id=category_id,
                    question_id=qid,
                )
            )
        if question.type not in QUESTION_TYPES:
            issues.append(
                ValidationIssue(
                    "questionType",
                    f"Question type must be one of: {', '.join(QUESTION_TYPES)}",
                    category_id=category_id,
                    question_id=qid,
                )
            )
        if len(question.options) < 2:
            issues.append(
                ValidationIssue(
                    "questionOptions",
                    "Each question must have at least 2 options",
                    category_id=category_id,
                    question_id=qid,
                )
            )

        seen_option_ids: Set[str] = set()
        children: List[Question] = []
        for option in question.options:
            oid = option.id
            if oid in seen_option_ids:
                issues.append(
                    ValidationIssue(
                        "duplicateOptionId",
                        f"Option id '{oid}' is used more than once in this question",
                        category_id=category_id,
                        question_id=qid,
                        option_id=oid,
                    )
                )
            seen_option_ids.add(oid)

            if _blank(option.text):
                issues.append(
                    ValidationIssue(
                        "optionText",
                        "Option text is required",
                        category_id=category_id,
                        question_id=qid,
                        option_id=oid,
                    )
                )
            if bool(option.has_sub_questions) != bool(option.sub_questions):
                issues.append(
                    ValidationIssue(
                        "hasSubQuestions",
                        "hasSubQuestions must be true exactly when subQuestions is non-empty",
                        category_id=category_id,
                        question_id=qid,
                        option_id=oid,
                    )
                )
            if option.sub_questions:
                if depth + 1 > max_depth:
                    issues.append(
                        ValidationIssue(
                            "nestingDepth",
                            f"Sub-questions may be nested at most {max_depth} levels deep",
                            category_id=category_id,
                            question_id=qid,
                            option_id=oid,
                        )
                    )
                else:
                    children.extend(option.sub_questions)

        stack.extend((child, depth + 1) for child in reversed(children))
    return issues
