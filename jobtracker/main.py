"""
Application entrypoint.

Builds on the FastAPI `app` from `jobtracker.api.main` and registers the
feature routers.
"""

from jobtracker.config import get_config
from jobtracker.utils.logger import get_logger, setup_logging

config = get_config()
setup_logging(config)
logger = get_logger(__name__)

from jobtracker.api.main import app  # noqa: E402
from jobtracker.api import ats as ats_api  # noqa: E402
from jobtracker.api import auth as auth_api  # noqa: E402
from jobtracker.api import interview_prep as interview_prep_api  # noqa: E402
from jobtracker.api import jobs as jobs_api  # noqa: E402

app.include_router(auth_api.router)
app.include_router(jobs_api.router)
app.include_router(ats_api.router)
app.include_router(interview_prep_api.router)

logger.info("[API] Routers registered: auth, jobs, ats, interview-prep")
