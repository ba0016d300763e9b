"""
AI Response Parsing

Two deliberately different contracts:

- `parse_match_analysis` is best effort. Gemini's prose layout is not
  guaranteed, so it extracts whatever labeled sections it can find and never
  raises; the raw text is always kept for display.
- `parse_interview_questions` is strict. The output must be a JSON array of
  {"question", "answer"} objects, otherwise a ParseError subclass is raised.
"""

import json
import re
from typing import Any, List, Optional

from jobtracker.schemas.analysis import MatchAnalysis, QuestionAnswer
from jobtracker.utils.logger import get_logger
from jobtracker.utils.exceptions import InvalidShape, MalformedJson, NotJson

logger = get_logger(__name__)

_MATCH_PERCENTAGE_RE = re.compile(r"match percentage[^\d%]*?(\d+(?:\.\d+)?)\s*%", re.IGNORECASE)
_STRENGTHS_RE = re.compile(r"strengths[:\s]*([\s\S]*?)(?:missing skills|$)", re.IGNORECASE)
_MISSING_SKILLS_RE = re.compile(r"missing skills[:\s]*([\s\S]*)", re.IGNORECASE)

# Markdown emphasis left around section labels, e.g. "**Strengths:**"
_LEADING_MARKUP_RE = re.compile(r"^(?:\*\*|__)\s*")
# ...and whatever opened the next section: "**", "###" or a "3." list number
_TRAILING_MARKUP_RE = re.compile(r"(?:\s*(?:\*\*|__|#+)|\s*\n\s*\d+\.)+\s*$")


def _clean_section(text: str) -> str:
    text = _LEADING_MARKUP_RE.sub("", text.strip())
    return _TRAILING_MARKUP_RE.sub("", text).strip()


def parse_match_analysis(raw: str) -> MatchAnalysis:
    """Extract match percentage, strengths and missing skills from prose."""
    raw = raw or ""

    match_percentage: Optional[str] = None
    m = _MATCH_PERCENTAGE_RE.search(raw)
    if m:
        match_percentage = f"{m.group(1)}%"

    strengths: Optional[str] = None
    m = _STRENGTHS_RE.search(raw)
    if m:
        strengths = _clean_section(m.group(1))

    missing_skills: Optional[str] = None
    m = _MISSING_SKILLS_RE.search(raw)
    if m:
        missing_skills = _clean_section(m.group(1))

    if match_percentage is None and strengths is None and missing_skills is None:
        logger.warning("[ResponseParser] No labeled sections found in match analysis; returning raw text only")

    return MatchAnalysis(
        matchPercentage=match_percentage,
        strengths=strengths,
        missingSkills=missing_skills,
        rawText=raw,
    )


def _strip_code_fence(text: str) -> str:
    if text.startswith("```json"):
        text = text[7:].strip()
    elif text.startswith("```"):
        text = text[3:].strip()
    if text.endswith("```"):
        text = text[:-3].strip()
    return text


def _locate_json_start(text: str) -> int:
    starts = [i for i in (text.find("["), text.find("{")) if i != -1]
    return min(starts) if starts else -1


def clean_json_text(raw: str) -> str:
    """
    Trim fences and leading commentary so the text starts at the first
    '[' or '{'.

    Raises:
        NotJson: neither '[' nor '{' occurs in the response
    """
    cleaned = _strip_code_fence((raw or "").strip())

    start = _locate_json_start(cleaned)
    if start == -1:
        raise NotJson(
            details="Response does not appear to contain JSON data (missing starting '[' or '{')."
        )
    if start > 0:
        logger.warning(f"[ResponseParser] Extraneous text found before JSON start. Trimming {start} characters.")
        cleaned = cleaned[start:]
    return cleaned


def _validate_questions(data: Any) -> List[QuestionAnswer]:
    if not isinstance(data, list) or not data:
        raise InvalidShape(
            details='Expected a non-empty JSON array of objects with "question" and "answer" strings.'
        )

    questions = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise InvalidShape(details=f"Item {index} is not an object.")
        question = item.get("question")
        answer = item.get("answer")
        if not isinstance(question, str) or not isinstance(answer, str):
            raise InvalidShape(
                details=f'Item {index} must have string "question" and "answer" fields.'
            )
        questions.append(QuestionAnswer(question=question, answer=answer))
    return questions


def parse_interview_questions(raw: str) -> List[QuestionAnswer]:
    """
    Parse Gemini's JSON answer into ordered question/answer pairs.

    Raises:
        NotJson: no JSON start character in the response
        MalformedJson: JSON decoding failed (details carry the decoder message)
        InvalidShape: decoded value is not a non-empty list of {question, answer}
    """
    cleaned = clean_json_text(raw)

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error(f"[ResponseParser] JSON parsing failed after cleaning: {e.msg}")
        raise MalformedJson(details=f"Failed to parse cleaned AI response as JSON: {str(e)}")

    return _validate_questions(data)
