"""
Application exceptions.

`AgentError` is the base for service-level failures. The analysis pipeline
raises the `AnalysisError` family; each class knows the HTTP status and the
user-facing message the API returns for it.
"""

from typing import Optional


class AgentError(Exception):
    """Service-level error tagged with the component that raised it."""

    def __init__(self, message: str, component: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.component = component


class AnalysisError(AgentError):
    """Base for every failure of one resume analysis invocation."""

    status_code = 500
    default_message = "AI analysis failed"

    def __init__(self, message: Optional[str] = None, details: Optional[str] = None):
        super().__init__(message or self.default_message, "AnalysisPipeline")
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


# --- Input errors (400) ---

class InputError(AnalysisError):
    status_code = 400
    default_message = "Invalid request"


class MissingFile(InputError):
    default_message = "No file uploaded. Please include a 'resume' file in your request."


class MissingJobDescription(InputError):
    default_message = "Job description is required."


class UnsupportedFileType(InputError):
    default_message = "Unsupported file type. Please upload a PDF, DOCX or TXT file."


class FileTooLarge(InputError):
    default_message = "Uploaded file is too large."


# --- Extraction errors (400) ---

class ExtractionError(AnalysisError):
    status_code = 400
    default_message = "Could not process the uploaded file."


class CorruptDocument(ExtractionError):
    default_message = "Could not read the uploaded file. It may be corrupted or password protected."


class NoExtractableText(ExtractionError):
    default_message = "Could not extract any text content from the uploaded file."


# --- Oracle (Gemini) errors ---

class OracleError(AnalysisError):
    """Unclassified failure talking to the AI service."""

    status_code = 500
    default_message = "AI analysis failed"


class OracleConfigError(OracleError):
    status_code = 500
    default_message = "AI service configuration error. Please contact the administrator."


class OracleQuotaError(OracleError):
    status_code = 429
    default_message = "AI service usage quota exceeded. Please try again later."


class OracleSafetyBlock(OracleError):
    status_code = 400
    default_message = "Content generation was blocked by the AI service safety filters."


class OracleTransportError(OracleError):
    status_code = 502
    default_message = "AI service communication failed"


# --- Parse errors (500, the model answered but the output is unusable) ---

class ParseError(AnalysisError):
    status_code = 500
    default_message = (
        "The AI response was not in the expected format. Please try again later."
    )


class NotJson(ParseError):
    pass


class MalformedJson(ParseError):
    pass


class InvalidShape(ParseError):
    pass
