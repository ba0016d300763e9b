from typing import Optional, Union

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile, status

from jobtracker.api.uploads import read_upload
from jobtracker.schemas.analysis import (
    AnalysisMode,
    ErrorResponse,
    InterviewQuestionsTextResponse,
    MatchAnalysis,
    MatchAnalysisResponse,
)
from jobtracker.services.analysis_pipeline import AnalysisPipeline
from jobtracker.services.container import get_analysis_pipeline
from jobtracker.utils.exceptions import AnalysisError
from jobtracker.utils.limiter import limiter
from jobtracker.utils.logger import get_logger

logger = get_logger(__name__)

# Resume vs job description analysis (ATS scoring)
router = APIRouter(prefix="/api/ats", tags=["ATS"])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


@router.post(
    "/analyze-ai",
    response_model=Union[MatchAnalysisResponse, InterviewQuestionsTextResponse],
    responses=_ERROR_RESPONSES,
)
@limiter.limit("30/minute")
async def analyze_ai(
    request: Request,
    resume: Optional[UploadFile] = File(None),
    jobDescription: Optional[str] = Form(None),
    analysisType: Optional[str] = Form(None),
    pipeline: AnalysisPipeline = Depends(get_analysis_pipeline),
):
    """
    Analyze a resume against a job description.

    `analysisType` selects match analysis (default, also 'resumeAnalysis') or
    free-text 'interviewQuestions'.
    """
    mode = AnalysisMode.from_form(analysisType)
    try:
        document = await read_upload(resume)
        logger.info(
            f"[API] analyze-ai request: mode={mode.value}, "
            f"file={document.filename if document else None}"
        )

        result = await pipeline.run(document, mode, jobDescription, structured=False)

        if isinstance(result, MatchAnalysis):
            return MatchAnalysisResponse(
                result=result.rawText,
                matchPercentage=result.matchPercentage,
                strengths=result.strengths,
                missingSkills=result.missingSkills,
            )
        return InterviewQuestionsTextResponse(interviewQuestions=result.rawText)

    except (AnalysisError, HTTPException):
        raise
    except Exception as e:
        logger.error(f"[API] Error during analysis: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="AI analysis failed",
        )
