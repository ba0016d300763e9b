"""
Resume Analysis Pipeline

One pipeline for every AI feature: validate the upload, extract the resume
text, compose the prompt, call Gemini and parse the answer.

    Received -> Validated -> Extracted -> Prompted -> AwaitingModel -> Parsed -> Done
                           (any step) -> Failed(reason)

The uploaded bytes live in a temporary file for the duration of one `run`
call and are deleted on every exit path. Nothing is cached and nothing is
retried; calling `run` twice calls Gemini twice.
"""

import asyncio
import uuid
from enum import Enum
from typing import List, Optional, Union

from jobtracker.config import Config
from jobtracker.schemas.analysis import (
    AnalysisMode,
    AnalysisRequest,
    InterviewQuestions,
    InterviewQuestionsText,
    MatchAnalysis,
    QuestionAnswer,
    UploadedDocument,
)
from jobtracker.services.prompt_service import compose_for_request
from jobtracker.services.response_parser import parse_interview_questions, parse_match_analysis
from jobtracker.services.text_extractor import TextExtractor, infer_kind
from jobtracker.utils.logger import get_logger
from jobtracker.utils.temp_files import temporary_upload
from jobtracker.utils.exceptions import (
    AnalysisError,
    FileTooLarge,
    MissingFile,
    MissingJobDescription,
    OracleError,
    OracleTransportError,
    ParseError,
    UnsupportedFileType,
)

logger = get_logger(__name__)

AnalysisResponse = Union[MatchAnalysis, InterviewQuestionsText, InterviewQuestions]


class PipelineState(str, Enum):
    RECEIVED = "Received"
    VALIDATED = "Validated"
    EXTRACTED = "Extracted"
    PROMPTED = "Prompted"
    AWAITING_MODEL = "AwaitingModel"
    PARSED = "Parsed"
    DONE = "Done"
    FAILED = "Failed"


def build_document(content: Optional[bytes], filename: Optional[str]) -> Optional[UploadedDocument]:
    """Wrap raw upload data; returns None when no file was attached."""
    if content is None or not filename:
        return None
    return UploadedDocument(content=content, filename=filename, kind=infer_kind(filename))


class AnalysisPipeline:
    """Runs one resume analysis per call against an injected AI client."""

    def __init__(self, config: Config, oracle, extractor: Optional[TextExtractor] = None):
        """
        Args:
            config: Application config (upload dir, limits, timeouts)
            oracle: Object with `async generate(prompt: str) -> str`, normally a GeminiClient
            extractor: Text extractor, defaults to TextExtractor()
        """
        self.config = config
        self.oracle = oracle
        self.extractor = extractor or TextExtractor()
        self.timeout_seconds = config.gemini.timeout_seconds
        self.question_count = config.upload.interview_question_count

    def job_description_required(self, mode: AnalysisMode, structured: bool) -> bool:
        if mode == AnalysisMode.INTERVIEW_QUESTIONS and structured:
            return self.config.upload.interview_require_job_description
        return True

    async def run(
        self,
        document: Optional[UploadedDocument],
        mode: AnalysisMode,
        job_description: Optional[str] = None,
        structured: bool = False,
    ) -> AnalysisResponse:
        """
        Analyze one uploaded resume.

        Raises:
            AnalysisError: any classified failure (input, extraction, AI service, parse)
        """
        run_id = uuid.uuid4().hex[:8]
        self._transition(run_id, PipelineState.RECEIVED, f"mode={mode.value} structured={structured}")
        try:
            job_description = self._validate(document, mode, job_description, structured)
            self._transition(run_id, PipelineState.VALIDATED, document.filename)

            with temporary_upload(
                document.content,
                suffix=f".{document.kind}",
                directory=self.config.upload.upload_dir,
            ) as path:
                content = path.read_bytes()
                resume_text = await asyncio.to_thread(self.extractor.extract, content, document.kind)
                self._transition(run_id, PipelineState.EXTRACTED, f"{len(resume_text)} chars")

                request = AnalysisRequest(
                    mode=mode,
                    resume_text=resume_text,
                    job_description=job_description,
                    structured=structured,
                )
                prompt = compose_for_request(request, self.question_count)
                self._transition(run_id, PipelineState.PROMPTED, f"{len(prompt)} chars")

                self._transition(run_id, PipelineState.AWAITING_MODEL)
                raw = await self._call_oracle(prompt)

                result = self._parse(request, raw)
                self._transition(run_id, PipelineState.PARSED)

            self._transition(run_id, PipelineState.DONE)
            return result
        except AnalysisError as e:
            self._transition(run_id, PipelineState.FAILED, f"{type(e).__name__}: {e.details or e.message}")
            raise

    def _validate(
        self,
        document: Optional[UploadedDocument],
        mode: AnalysisMode,
        job_description: Optional[str],
        structured: bool,
    ) -> Optional[str]:
        if document is None or not document.filename:
            raise MissingFile()

        if job_description is not None and not job_description.strip():
            job_description = None
        if job_description is None and self.job_description_required(mode, structured):
            raise MissingJobDescription()

        if document.kind == "unsupported":
            raise UnsupportedFileType(
                f"Unsupported file type: '{document.filename}'. Please upload a PDF, DOCX or TXT file."
            )

        max_bytes = self.config.upload.max_upload_size_bytes
        if len(document.content) > max_bytes:
            raise FileTooLarge(
                f"File size exceeds maximum of {self.config.upload.max_upload_size_mb}MB"
            )
        return job_description

    async def _call_oracle(self, prompt: str) -> str:
        try:
            return await asyncio.wait_for(self.oracle.generate(prompt), timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            logger.error(f"[Pipeline] AI service did not answer within {self.timeout_seconds}s")
            raise OracleTransportError(details=f"AI service did not respond within {self.timeout_seconds} seconds")
        except AnalysisError:
            raise
        except Exception as e:
            logger.error(f"[Pipeline] Unexpected AI client error: {str(e)}", exc_info=True)
            raise OracleError(details=str(e))

    def _parse(self, request: AnalysisRequest, raw: str) -> AnalysisResponse:
        if request.mode == AnalysisMode.MATCH_ANALYSIS:
            return parse_match_analysis(raw)

        if not request.structured:
            return InterviewQuestionsText(rawText=raw)

        try:
            questions: List[QuestionAnswer] = parse_interview_questions(raw)
        except ParseError:
            logger.error(f"[Pipeline] Raw response that failed parsing: {raw[:1000]}")
            raise

        if len(questions) != self.question_count:
            logger.warning(
                f"[Pipeline] ⚠️ Requested {self.question_count} questions, AI returned {len(questions)}"
            )
        return InterviewQuestions(questions=questions)

    def _transition(self, run_id: str, state: PipelineState, note: str = "") -> None:
        suffix = f" ({note})" if note else ""
        if state == PipelineState.FAILED:
            logger.warning(f"[Pipeline] {run_id} -> {state.value}{suffix}")
        else:
            logger.info(f"[Pipeline] {run_id} -> {state.value}{suffix}")
