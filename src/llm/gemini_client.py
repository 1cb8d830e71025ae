import time
from typing import Optional

from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from config import (
    BACKOFF_STEP_SECONDS,
    GEMINI_API_KEY,
    GEMINI_MODEL,
    LLM_TEMPERATURE,
    MAX_ATTEMPTS,
)
from utils.logger import logger

# Lazy initialization
_gemini = None


class CompletionError(Exception):
    """Raised when Gemini fails to produce a completion."""
    def __init__(self, message: str, code: Optional[int] = None, status: Optional[str] = None):
        self.code = code
        self.status = status
        super().__init__(message)

    @property
    def overloaded(self) -> bool:
        return is_overloaded(self)


def is_overloaded(error) -> bool:
    """True if the error carries Gemini's transient 503 / UNAVAILABLE signal."""
    return getattr(error, "code", None) == 503 or getattr(error, "status", None) == "UNAVAILABLE"


def _get_gemini_client():
    """Lazily initialize Gemini client."""
    global _gemini
    if _gemini is None:
        if not GEMINI_API_KEY:
            raise CompletionError("GEMINI_API_KEY is not set")
        logger.info(f"Initializing Gemini client for model: {GEMINI_MODEL}")
        _gemini = genai.Client(api_key=GEMINI_API_KEY)
    return _gemini


def _generate(client, prompt):
    return client.models.generate_content(
        model=GEMINI_MODEL,
        contents=[
            genai_types.Content(
                role="user",
                parts=[genai_types.Part(text=prompt)],
            )
        ],
        config=genai_types.GenerateContentConfig(temperature=LLM_TEMPERATURE),
    )


def generate_with_retry(prompt, client=None, sleep=None):
    """
    Send the prompt to Gemini, retrying while the model is overloaded.

    Args:
        prompt: Full prompt text, sent as a single user message
        client: genai.Client to use; defaults to the shared lazy client
        sleep: Delay function (default time.sleep), called with k * 0.5 seconds
            before attempt k + 1

    Returns:
        The response text (None if the model returned no text)

    Raises:
        CompletionError: On a non-overload API error, or when every attempt
            was rejected as overloaded
    """
    client = client or _get_gemini_client()
    sleep = sleep or time.sleep

    for attempt in range(1, MAX_ATTEMPTS + 1):
        logger.info(f"Calling Gemini model: {GEMINI_MODEL} (attempt {attempt}/{MAX_ATTEMPTS})")
        try:
            response = _generate(client, prompt)
            return response.text
        except genai_errors.APIError as e:
            if is_overloaded(e) and attempt < MAX_ATTEMPTS:
                backoff = attempt * BACKOFF_STEP_SECONDS
                logger.warning(f"Gemini overloaded ({e.code} {e.status}), retrying in {backoff}s")
                sleep(backoff)
                continue

            logger.error(f"Gemini LLM error: {e}")
            raise CompletionError(f"Gemini request failed: {e}", code=e.code, status=e.status) from e

    raise CompletionError("Gemini request failed")
