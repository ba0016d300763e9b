from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile, status

from jobtracker.api.uploads import read_upload
from jobtracker.schemas.analysis import AnalysisMode, ErrorResponse, InterviewQuestionsResponse
from jobtracker.services.analysis_pipeline import AnalysisPipeline
from jobtracker.services.container import get_analysis_pipeline
from jobtracker.utils.exceptions import AnalysisError
from jobtracker.utils.limiter import limiter
from jobtracker.utils.logger import get_logger

logger = get_logger(__name__)

# Structured interview question generation
router = APIRouter(prefix="/api/interview-prep", tags=["Interview Prep"])


@router.post(
    "/interview-questions",
    response_model=InterviewQuestionsResponse,
    responses={code: {"model": ErrorResponse} for code in (400, 429, 500, 502)},
)
@limiter.limit("30/minute")
async def interview_questions(
    request: Request,
    resume: Optional[UploadFile] = File(None),
    jobDescription: Optional[str] = Form(None),
    pipeline: AnalysisPipeline = Depends(get_analysis_pipeline),
):
    """
    Generate interview questions with model answers from an uploaded resume.

    The job description is optional unless INTERVIEW_REQUIRE_JOB_DESCRIPTION
    is enabled; when given it steers which resume skills are asked about.
    """
    try:
        document = await read_upload(resume)
        logger.info(f"[API] interview-questions request: file={document.filename if document else None}")

        result = await pipeline.run(
            document,
            AnalysisMode.INTERVIEW_QUESTIONS,
            jobDescription,
            structured=True,
        )

        logger.info(f"[API] ✅ Generated {len(result.questions)} interview questions")
        return InterviewQuestionsResponse(questionsAndAnswers=result.questions)

    except (AnalysisError, HTTPException):
        raise
    except Exception as e:
        logger.error(f"[API] Error processing interview-questions: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred while generating interview questions.",
        )
