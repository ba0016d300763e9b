from jobtracker.config import get_config
from jobtracker.services.analysis_pipeline import AnalysisPipeline
from jobtracker.services.auth_service import AuthService
from jobtracker.services.gemini_client import GeminiClient
from jobtracker.services.job_service import JobService
from jobtracker.services.text_extractor import TextExtractor

config = get_config()

# Shared, read-only Gemini client; built once per process and injected into the pipeline
gemini_client = GeminiClient(config.gemini)

# Initialize services
analysis_pipeline = AnalysisPipeline(config, oracle=gemini_client, extractor=TextExtractor())
auth_service = AuthService(config)
job_service = JobService(config)


# FastAPI dependencies (tests replace these through app.dependency_overrides)

def get_analysis_pipeline() -> AnalysisPipeline:
    return analysis_pipeline


def get_auth_service() -> AuthService:
    return auth_service


def get_job_service() -> JobService:
    return job_service
