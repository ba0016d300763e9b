"""
Gemini Client

Thin async wrapper over the Gemini `generateContent` REST endpoint. One
instance is built at startup and injected into the analysis pipeline; every
failure is mapped onto the Oracle* exceptions so the API can pick a status.
"""

from typing import Any, Dict, Optional

import httpx

from jobtracker.config import GeminiConfig
from jobtracker.utils.logger import get_logger
from jobtracker.utils.exceptions import (
    OracleConfigError,
    OracleError,
    OracleQuotaError,
    OracleSafetyBlock,
    OracleTransportError,
)

logger = get_logger(__name__)

SAFETY_FINISH_REASONS = {"SAFETY", "BLOCKLIST", "PROHIBITED_CONTENT", "SPII", "RECITATION"}


class GeminiClient:
    """Async text-completion client for Google Gemini."""

    def __init__(self, config: GeminiConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self._client = httpx.AsyncClient(
            timeout=config.timeout_seconds,
            transport=transport,
        )

    @property
    def url(self) -> str:
        return f"{self.config.base_url}/models/{self.config.model}:generateContent"

    async def generate(self, prompt: str) -> str:
        """
        Send one prompt and return the generated text.

        Raises:
            OracleConfigError: credentials rejected
            OracleQuotaError: rate limit / quota exhausted
            OracleSafetyBlock: prompt or answer blocked by safety filters
            OracleTransportError: network failure, timeout or upstream 5xx
            OracleError: anything else, including an empty answer
        """
        payload: Dict[str, Any] = {"contents": [{"parts": [{"text": prompt}]}]}
        if self.config.temperature is not None:
            payload["generationConfig"] = {"temperature": self.config.temperature}

        logger.info(f"[Gemini] Sending prompt ({len(prompt)} chars) to {self.config.model}")
        try:
            response = await self._client.post(
                self.url,
                headers={
                    "x-goog-api-key": self.config.api_key,
                    "Content-Type": "application/json",
                },
                json=payload,
            )
        except httpx.TimeoutException as e:
            logger.error(f"[Gemini] Request timed out: {e!r}")
            raise OracleTransportError(details="Request to the AI service timed out")
        except httpx.TransportError as e:
            logger.error(f"[Gemini] Transport error: {e!r}")
            raise OracleTransportError(details=f"{type(e).__name__}: {str(e)}")

        if response.status_code >= 400:
            raise self._classify_http_error(response)

        try:
            data = response.json()
        except ValueError:
            logger.error("[Gemini] Response body is not JSON")
            raise OracleError(details="AI service returned a non-JSON response")

        return self._extract_text(data)

    def _classify_http_error(self, response: httpx.Response) -> OracleError:
        status_code = response.status_code
        message = ""
        api_status = ""
        try:
            error = response.json().get("error") or {}
            message = str(error.get("message", ""))
            api_status = str(error.get("status", ""))
        except (ValueError, AttributeError):
            message = response.text[:200]

        logger.error(f"[Gemini] HTTP {status_code} ({api_status or 'no status'}): {message}")

        lowered = message.lower()
        if status_code in (401, 403) or (status_code == 400 and "api key" in lowered):
            # Never echo credential details back to the caller
            return OracleConfigError()
        if status_code == 429 or api_status == "RESOURCE_EXHAUSTED" or "quota" in lowered:
            return OracleQuotaError()
        if status_code >= 500:
            return OracleTransportError(details=f"AI service returned HTTP {status_code}")
        return OracleError(details=f"AI service returned HTTP {status_code}: {message}")

    def _extract_text(self, data: Dict[str, Any]) -> str:
        block_reason = (data.get("promptFeedback") or {}).get("blockReason")
        if block_reason:
            logger.warning(f"[Gemini] Prompt blocked: {block_reason}")
            raise OracleSafetyBlock(
                message=f"Content generation blocked. Reason: {block_reason}.",
                details=block_reason,
            )

        candidates = data.get("candidates") or []
        if not candidates:
            logger.error("[Gemini] No candidates in response")
            raise OracleError(details="AI service returned no candidates")

        candidate = candidates[0]
        finish_reason = candidate.get("finishReason")
        if finish_reason in SAFETY_FINISH_REASONS:
            logger.warning(f"[Gemini] Generation stopped: {finish_reason}")
            raise OracleSafetyBlock(
                message=f"Content generation stopped. Reason: {finish_reason}.",
                details=finish_reason,
            )

        parts = (candidate.get("content") or {}).get("parts") or []
        text = "".join(part.get("text", "") for part in parts if isinstance(part, dict))
        if not text.strip():
            if finish_reason and finish_reason != "STOP":
                raise OracleError(details=f"AI generation finished unexpectedly. Reason: {finish_reason}")
            raise OracleError(details="Could not retrieve analysis from AI")

        logger.info(f"[Gemini] ✅ Received {len(text)} characters (finishReason={finish_reason})")
        return text

    async def aclose(self) -> None:
        await self._client.aclose()
