"""
Resume analysis schemas.

Domain types shared by the analysis pipeline plus the JSON bodies returned by
the ATS and interview-prep endpoints.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel


class AnalysisMode(str, Enum):
    MATCH_ANALYSIS = "matchAnalysis"
    INTERVIEW_QUESTIONS = "interviewQuestions"

    @classmethod
    def from_form(cls, value: Optional[str]) -> "AnalysisMode":
        """Map the `analysisType` form field; the legacy 'resumeAnalysis' means match analysis."""
        if value == cls.INTERVIEW_QUESTIONS.value:
            return cls.INTERVIEW_QUESTIONS
        return cls.MATCH_ANALYSIS


@dataclass(frozen=True)
class AnalysisRequest:
    mode: AnalysisMode
    resume_text: str
    job_description: Optional[str] = None
    structured: bool = False


@dataclass(frozen=True)
class UploadedDocument:
    content: bytes
    filename: str
    kind: str


class MatchAnalysis(BaseModel):
    matchPercentage: Optional[str] = None
    strengths: Optional[str] = None
    missingSkills: Optional[str] = None
    rawText: str


class InterviewQuestionsText(BaseModel):
    rawText: str


class QuestionAnswer(BaseModel):
    question: str
    answer: str


class InterviewQuestions(BaseModel):
    questions: List[QuestionAnswer]


# --- API response bodies ---

class MatchAnalysisResponse(BaseModel):
    result: str
    matchPercentage: Optional[str] = None
    strengths: Optional[str] = None
    missingSkills: Optional[str] = None


class InterviewQuestionsTextResponse(BaseModel):
    interviewQuestions: str


class InterviewQuestionsResponse(BaseModel):
    questionsAndAnswers: List[QuestionAnswer]


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None


__all__ = [
    "AnalysisMode",
    "AnalysisRequest",
    "UploadedDocument",
    "MatchAnalysis",
    "InterviewQuestionsText",
    "QuestionAnswer",
    "InterviewQuestions",
    "MatchAnalysisResponse",
    "InterviewQuestionsTextResponse",
    "InterviewQuestionsResponse",
    "ErrorResponse",
]
