import asyncio
import dataclasses
import json

import pytest

from jobtracker.schemas.analysis import (
    AnalysisMode,
    InterviewQuestions,
    InterviewQuestionsText,
    MatchAnalysis,
)
from jobtracker.services.analysis_pipeline import AnalysisPipeline, build_document
from jobtracker.services.text_extractor import TextExtractor
from jobtracker.utils import temp_files
from jobtracker.utils.exceptions import (
    CorruptDocument,
    FileTooLarge,
    InvalidShape,
    MissingFile,
    MissingJobDescription,
    NoExtractableText,
    NotJson,
    OracleError,
    OracleQuotaError,
    OracleTransportError,
    UnsupportedFileType,
)
from tests.helpers import FakeOracle, make_docx, make_pdf

JOB = "Backend engineer: Python, SQL, Kubernetes"
MATCH_TEXT = "Match Percentage: 72%\nStrengths: Python, SQL\nMissing Skills: Kubernetes"
QUESTIONS_JSON = json.dumps(
    [{"question": f"Q{i}", "answer": f"A{i}"} for i in range(1, 11)]
)


def _run(pipeline, document, mode=AnalysisMode.MATCH_ANALYSIS, job_description=JOB, structured=False):
    return asyncio.run(pipeline.run(document, mode, job_description, structured=structured))


def _pdf_document(pages=("Jane Doe", "Python and SQL")):
    return build_document(make_pdf(list(pages)), "resume.pdf")


def test_match_analysis_end_to_end(config, upload_dir):
    oracle = FakeOracle(MATCH_TEXT)
    pipeline = AnalysisPipeline(config, oracle)

    result = _run(pipeline, _pdf_document())

    assert isinstance(result, MatchAnalysis)
    assert result.matchPercentage == "72%"
    assert result.rawText == MATCH_TEXT
    assert oracle.calls == 1
    assert "Jane Doe\nPython and SQL" in oracle.prompts[0]
    assert JOB in oracle.prompts[0]
    assert list(upload_dir.iterdir()) == []


def test_free_text_interview_questions(config):
    oracle = FakeOracle("1. Tell me about SQL?\n2. Why Python?")
    pipeline = AnalysisPipeline(config, oracle)

    result = _run(pipeline, build_document(b"Python developer", "cv.txt"), AnalysisMode.INTERVIEW_QUESTIONS)

    assert isinstance(result, InterviewQuestionsText)
    assert result.rawText.startswith("1. Tell me")


def test_structured_interview_questions_resume_only(config, upload_dir):
    oracle = FakeOracle("```json\n" + QUESTIONS_JSON + "\n```")
    pipeline = AnalysisPipeline(config, oracle)
    document = build_document(make_docx(["Jane Doe", "Built APIs with FastAPI"]), "cv.docx")

    result = _run(pipeline, document, AnalysisMode.INTERVIEW_QUESTIONS, job_description=None, structured=True)

    assert isinstance(result, InterviewQuestions)
    assert [q.question for q in result.questions][:2] == ["Q1", "Q2"]
    assert len(result.questions) == 10
    assert list(upload_dir.iterdir()) == []


def test_structured_questions_accept_fewer_than_requested(config):
    oracle = FakeOracle('[{"question": "Only one?", "answer": "Yes"}]')
    pipeline = AnalysisPipeline(config, oracle)

    result = _run(pipeline, build_document(b"Go developer", "cv.txt"), AnalysisMode.INTERVIEW_QUESTIONS, None, True)

    assert len(result.questions) == 1


def test_job_description_flag_for_structured_questions(config):
    strict = dataclasses.replace(
        config, upload=dataclasses.replace(config.upload, interview_require_job_description=True)
    )
    oracle = FakeOracle(QUESTIONS_JSON)
    pipeline = AnalysisPipeline(strict, oracle)

    with pytest.raises(MissingJobDescription):
        _run(pipeline, build_document(b"Go developer", "cv.txt"), AnalysisMode.INTERVIEW_QUESTIONS, None, True)
    assert oracle.calls == 0


def test_missing_file(config):
    oracle = FakeOracle(MATCH_TEXT)
    with pytest.raises(MissingFile):
        _run(AnalysisPipeline(config, oracle), None)
    assert oracle.calls == 0


@pytest.mark.parametrize("job_description", [None, "", "   \n"])
def test_match_requires_job_description(config, job_description):
    oracle = FakeOracle(MATCH_TEXT)
    with pytest.raises(MissingJobDescription) as exc_info:
        _run(AnalysisPipeline(config, oracle), _pdf_document(), job_description=job_description)
    assert exc_info.value.status_code == 400
    assert oracle.calls == 0


def test_unsupported_file_never_reaches_oracle(config, upload_dir):
    oracle = FakeOracle(MATCH_TEXT)

    with pytest.raises(UnsupportedFileType) as exc_info:
        _run(AnalysisPipeline(config, oracle), build_document(b"MZ\x90\x00", "setup.exe"))

    assert exc_info.value.status_code == 400
    assert oracle.calls == 0
    assert list(upload_dir.iterdir()) == []


def test_file_too_large(config):
    small = dataclasses.replace(config, upload=dataclasses.replace(config.upload, max_upload_size_mb=0))
    with pytest.raises(FileTooLarge):
        _run(AnalysisPipeline(small, FakeOracle(MATCH_TEXT)), build_document(b"some text", "cv.txt"))


def test_extraction_failures_clean_up(config, upload_dir):
    oracle = FakeOracle(MATCH_TEXT)
    pipeline = AnalysisPipeline(config, oracle)

    with pytest.raises(NoExtractableText):
        _run(pipeline, build_document(b"   ", "cv.txt"))
    with pytest.raises(CorruptDocument):
        _run(pipeline, build_document(b"garbage", "cv.pdf"))

    assert oracle.calls == 0
    assert list(upload_dir.iterdir()) == []


def test_oracle_error_propagates_and_cleans_up(config, upload_dir):
    oracle = FakeOracle(error=OracleQuotaError())

    with pytest.raises(OracleQuotaError):
        _run(AnalysisPipeline(config, oracle), _pdf_document())

    assert list(upload_dir.iterdir()) == []


def _failing_remove(path):
    raise PermissionError(f"locked: {path}")


def test_failed_cleanup_does_not_mask_result(config, upload_dir, monkeypatch):
    monkeypatch.setattr(temp_files.os, "remove", _failing_remove)
    oracle = FakeOracle("Match Percentage: 10%\nStrengths: SQL\nMissing Skills: Go")

    result = _run(AnalysisPipeline(config, oracle), _pdf_document())

    assert isinstance(result, MatchAnalysis)
    assert result.matchPercentage == "10%"
    assert len(list(upload_dir.iterdir())) == 1


def test_failed_cleanup_does_not_mask_error(config, monkeypatch):
    monkeypatch.setattr(temp_files.os, "remove", _failing_remove)
    oracle = FakeOracle(error=OracleQuotaError())

    with pytest.raises(OracleQuotaError):
        _run(AnalysisPipeline(config, oracle), _pdf_document())


def test_unexpected_oracle_exception_is_unclassified(config):
    oracle = FakeOracle(error=RuntimeError("boom"))

    with pytest.raises(OracleError) as exc_info:
        _run(AnalysisPipeline(config, oracle), _pdf_document())

    assert exc_info.value.details == "boom"


def test_oracle_timeout_is_transport_error(config, upload_dir):
    fast = dataclasses.replace(config, gemini=dataclasses.replace(config.gemini, timeout_seconds=0.05))
    oracle = FakeOracle(MATCH_TEXT, delay=1.0)

    with pytest.raises(OracleTransportError):
        _run(AnalysisPipeline(fast, oracle), _pdf_document())

    assert list(upload_dir.iterdir()) == []


def test_parse_errors_are_distinct_and_clean_up(config, upload_dir):
    pipeline = AnalysisPipeline(config, FakeOracle("Sorry, I cannot help with that."))
    with pytest.raises(NotJson) as exc_info:
        _run(pipeline, _pdf_document(), AnalysisMode.INTERVIEW_QUESTIONS, None, True)
    assert exc_info.value.status_code == 500

    pipeline = AnalysisPipeline(config, FakeOracle('[{"question": "Q1"}]'))
    with pytest.raises(InvalidShape):
        _run(pipeline, _pdf_document(), AnalysisMode.INTERVIEW_QUESTIONS, None, True)

    assert list(upload_dir.iterdir()) == []


def test_cancellation_still_cleans_up(config, upload_dir):
    oracle = FakeOracle(MATCH_TEXT, delay=1.0)
    pipeline = AnalysisPipeline(config, oracle)

    async def run_and_cancel():
        task = asyncio.create_task(pipeline.run(_pdf_document(), AnalysisMode.MATCH_ANALYSIS, JOB))
        while oracle.calls == 0:
            await asyncio.sleep(0.01)
        assert len(list(upload_dir.iterdir())) == 1
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(run_and_cancel())
    assert list(upload_dir.iterdir()) == []


def test_identical_calls_are_independent(config, upload_dir):
    oracle = FakeOracle(MATCH_TEXT)
    pipeline = AnalysisPipeline(config, oracle)
    document = _pdf_document()

    first = _run(pipeline, document)
    second = _run(pipeline, document)

    assert first == second
    assert oracle.calls == 2
    assert list(upload_dir.iterdir()) == []


def test_extractor_receives_declared_kind(config):
    seen = {}

    class RecordingExtractor(TextExtractor):
        def extract(self, file_content, extension):
            seen["kind"] = extension
            seen["content"] = file_content
            return "resume text"

    pipeline = AnalysisPipeline(config, FakeOracle(MATCH_TEXT), extractor=RecordingExtractor())
    _run(pipeline, build_document(b"raw bytes", "CV.TXT"))

    assert seen == {"kind": "txt", "content": b"raw bytes"}
