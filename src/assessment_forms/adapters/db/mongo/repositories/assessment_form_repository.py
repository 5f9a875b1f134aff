"""
MongoDB implementation of AssessmentFormRepository.
"""

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Dict, List, Optional

from beanie import UpdateResponse
from beanie.operators import Inc, Set
from pymongo.errors import ConnectionFailure, ExecutionTimeout, WTimeoutError

from assessment_forms.application.ports.repositories.assessment_form_repo import (
    EDITABLE_FIELDS,
    AssessmentFormRepository,
)
from assessment_forms.domain.entities.assessment_form import (
    AnswerOption,
    AssessmentForm,
    Category,
    Question,
)
from assessment_forms.domain.errors import StorageUnavailableError
from assessment_forms.domain.value_objects.node_id import FormId

from ..models.assessment_form_m import (
    AnswerOptionMongo,
    AssessmentFormMongo,
    CategoryMongo,
    QuestionMongo,
)

_UNAVAILABLE = (ConnectionFailure, ExecutionTimeout, WTimeoutError, asyncio.TimeoutError)


@asynccontextmanager
async def _storage_call(operation: str):
    """Translate driver connectivity and timeout errors into StorageUnavailableError."""
    try:
        yield
    except _UNAVAILABLE as e:
        raise StorageUnavailableError(operation, str(e) or e.__class__.__name__) from e


class MongoAssessmentFormRepository(AssessmentFormRepository):
    """MongoDB implementation of AssessmentFormRepository."""

    async def add(self, form: AssessmentForm) -> AssessmentForm:
        """Insert a new form document."""
        form_mongo = self._domain_to_mongo(form, FormId.generate().value)

        async with _storage_call("add"):
            await form_mongo.insert()

        return self._mongo_to_domain(form_mongo)

    async def update_active(
        self, form_id: FormId, fields: Dict[str, Any]
    ) -> Optional[AssessmentForm]:
        """$set only the given fields, and only on an active form document."""
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Fields cannot be updated: {sorted(unknown)}")

        update = dict(fields)
        if "categories" in update:
            update["categories"] = [
                category.model_dump()
                for category in self._categories_to_mongo(update["categories"])
            ]

        async with _storage_call("update_active"):
            form_mongo = await AssessmentFormMongo.find_one(
                AssessmentFormMongo.form_id == form_id.value,
                AssessmentFormMongo.is_active == True,  # noqa: E712
            ).update(Set(update), response_type=UpdateResponse.NEW_DOCUMENT)

        if not form_mongo:
            return None

        return self._mongo_to_domain(form_mongo)

    async def find_active_by_id(self, form_id: FormId) -> Optional[AssessmentForm]:
        """Find an active form by ID."""
        async with _storage_call("find_active_by_id"):
            form_mongo = await AssessmentFormMongo.find_one(
                AssessmentFormMongo.form_id == form_id.value,
                AssessmentFormMongo.is_active == True,  # noqa: E712
            )

        if not form_mongo:
            return None

        return self._mongo_to_domain(form_mongo)

    async def find_active(
        self, status: Optional[str] = None, category: Optional[str] = None
    ) -> List[AssessmentForm]:
        """Find active forms, most recently updated first."""
        conditions = [AssessmentFormMongo.is_active == True]  # noqa: E712
        if status is not None:
            conditions.append(AssessmentFormMongo.status == status)
        if category is not None:
            conditions.append(AssessmentFormMongo.category == category)

        async with _storage_call("find_active"):
            forms_mongo = (
                await AssessmentFormMongo.find(*conditions)
                .sort(-AssessmentFormMongo.updated_at)
                .to_list()
            )

        return [self._mongo_to_domain(form_mongo) for form_mongo in forms_mongo]

    async def increment_usage(self, form_id: FormId) -> Optional[int]:
        """Atomically increment the usage count with $inc."""
        async with _storage_call("increment_usage"):
            form_mongo = await AssessmentFormMongo.find_one(
                AssessmentFormMongo.form_id == form_id.value,
                AssessmentFormMongo.is_active == True,  # noqa: E712
            ).update(
                Inc({AssessmentFormMongo.usage_count: 1}),
                Set({AssessmentFormMongo.updated_at: datetime.utcnow()}),
                response_type=UpdateResponse.NEW_DOCUMENT,
            )

        if not form_mongo:
            return None

        return form_mongo.usage_count

    async def count_active_by_category(self) -> Dict[str, int]:
        """Count active forms per category with an aggregation pipeline."""
        async with _storage_call("count_active_by_category"):
            rows = await AssessmentFormMongo.find(
                AssessmentFormMongo.is_active == True  # noqa: E712
            ).aggregate(
                [{"$group": {"_id": "$category", "count": {"$sum": 1}}}]
            ).to_list()

        return {row["_id"]: row["count"] for row in rows}

    def _domain_to_mongo(self, form: AssessmentForm, form_id: str) -> AssessmentFormMongo:
        """Convert domain entity to MongoDB model."""
        return AssessmentFormMongo(
            form_id=form_id,
            title=form.title,
            description=form.description,
            category=form.category,
            status=form.status,
            categories=self._categories_to_mongo(form.categories),
            created_by=form.created_by,
            usage_count=form.usage_count,
            is_active=form.is_active,
            created_at=form.created_at,
            updated_at=form.updated_at,
        )

    def _categories_to_mongo(self, categories: List[Category]) -> List[CategoryMongo]:
        return [
            CategoryMongo(
                id=category.id,
                name=category.name,
                description=category.description,
                questions=self._questions_to_mongo(category.questions),
            )
            for category in categories
        ]

    def _questions_to_mongo(self, questions: List[Question]) -> List[QuestionMongo]:
        return [
            QuestionMongo(
                id=question.id,
                text=question.text,
                type=question.type,
                options=[
                    AnswerOptionMongo(
                        id=option.id,
                        text=option.text,
                        has_sub_questions=option.has_sub_questions,
                        sub_questions=self._questions_to_mongo(option.sub_questions),
                    )
                    for option in question.options
                ],
            )
            for question in questions
        ]

    def _mongo_to_domain(self, form_mongo: AssessmentFormMongo) -> AssessmentForm:
        """Convert MongoDB model to domain entity."""
        return AssessmentForm(
            id=form_mongo.form_id,
            title=form_mongo.title,
            description=form_mongo.description,
            category=form_mongo.category,
            status=form_mongo.status,
            categories=[
                Category(
                    id=category_mongo.id,
                    name=category_mongo.name,
                    description=category_mongo.description,
                    questions=self._questions_to_domain(category_mongo.questions),
                )
                for category_mongo in form_mongo.categories
            ],
            created_by=form_mongo.created_by,
            usage_count=form_mongo.usage_count,
            is_active=form_mongo.is_active,
            created_at=form_mongo.created_at,
            updated_at=form_mongo.updated_at,
        )

    def _questions_to_domain(self, questions_mongo: List[QuestionMongo]) -> List[Question]:
        return [
            Question(
                id=question_mongo.id,
                text=question_mongo.text,
                type=question_mongo.type,
                options=[
                    AnswerOption(
                        id=option_mongo.id,
                        text=option_mongo.text,
                        has_sub_questions=option_mongo.has_sub_questions,
                        sub_questions=self._questions_to_domain(
                            option_mongo.sub_questions
                        ),
                    )
                    for option_mongo in question_mongo.options
                ],
            )
            for question_mongo in questions_mongo
        ]
