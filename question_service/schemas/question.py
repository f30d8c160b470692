"""
Public question shape shared by the HTTP read path and the matching bus.

``format_question_response`` is the single place a stored question is
turned into its wire form, so both surfaces serialize it identically.
Field names are camelCase on the wire.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from question_service.models.question import Question


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ExampleImage(_WireModel):
    url: str | None = None
    provider: str | None = None
    key: str | None = None
    width: int | None = None
    height: int | None = None
    mime: str | None = None
    size: int | None = None


class Example(_WireModel):
    input: str
    output: str
    explanation: str | None = None
    image: ExampleImage | None = None


class CodeSnippet(_WireModel):
    language: str
    code: str


class SignatureParam(_WireModel):
    name: str
    type: str


class Signature(_WireModel):
    params: list[SignatureParam] = []
    return_type: str = Field("any", alias="returnType")


class TestCase(_WireModel):
    __test__ = False  # not a pytest class

    args: list[Any]
    expected: Any
    hidden: bool = False


class QuestionRecord(_WireModel):
    """A read-only snapshot of a question as exposed to callers."""
    id: str
    title: str
    difficulty: str
    topics: list[str]
    problem_statement: str = Field(alias="problemStatement")
    constraints: list[str]
    examples: list[Example]
    code_snippets: list[CodeSnippet] = Field(default_factory=list, alias="codeSnippets")
    entry_point: str = Field(alias="entryPoint")
    timeout: int
    signature: Signature | None = None
    test_cases: list[TestCase] = Field(alias="testCases")


class QuestionResponse(BaseModel):
    message: str
    data: QuestionRecord


class QuestionListResponse(BaseModel):
    message: str
    data: list[QuestionRecord]


def format_question_response(question: Question) -> QuestionRecord:
    """Strip storage details from *question* and return its public shape."""
    difficulty = question.difficulty
    return QuestionRecord(
        id=str(question.id),
        title=question.title,
        difficulty=getattr(difficulty, "value", difficulty),
        topics=list(question.topics or []),
        problem_statement=question.problem_statement,
        constraints=list(question.constraints or []),
        examples=question.examples or [],
        code_snippets=question.code_snippets or [],
        entry_point=question.entry_point,
        timeout=question.timeout,
        signature=question.signature,
        test_cases=question.test_cases or [],
    )
