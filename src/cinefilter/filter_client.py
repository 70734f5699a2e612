"""
Client for the filter-generation service.

Write path: fixed instruction -> structured LLM call -> raw JSON text ->
independent validation -> filter descriptor.

The service is asked to constrain its reply to FilterResponse, but that
promise is advisory: the raw text is always re-parsed and re-validated here.
"""
import json
import logging
from time import time
from typing import Any

from langchain_core.messages import HumanMessage
from pydantic import ValidationError

from .exceptions import (
    EmptyResponseError,
    InvalidFilterValueError,
    MalformedResponseError,
    ServiceUnavailableError,
)
from .prompts import VIVID_WARM_PROMPT
from .schemas import FilterResponse

logger = logging.getLogger(__name__)


class FilterServiceClient:
    """
    Issues filter-generation requests and classifies their failures.

    No retries are performed; a failed call raises one of the
    FilterGenerationError subclasses and the caller decides what to do.
    """

    def __init__(self, llm: Any, prompt: str = VIVID_WARM_PROMPT, structured_method: str = "json_schema"):
        """
        :param llm: LangChain chat model (temperature is fixed at construction)
        :param prompt: Instruction sent on every request
        :param structured_method: Method passed to with_structured_output
        """
        self._llm = llm
        self._prompt = prompt
        self._runnable = llm.with_structured_output(
            FilterResponse,
            method=structured_method,
            include_raw=True,
        )

    def generate(self) -> str:
        """
        Request a filter descriptor.

        :return: Validated, non-empty CSS filter string
        :raises: ServiceUnavailableError, EmptyResponseError,
                 MalformedResponseError, InvalidFilterValueError
        """
        logger.info("Requesting filter from generation service")
        start_time = time()
        try:
            result = self._runnable.invoke(self._messages())
        except Exception as e:
            logger.error(f"Filter service call failed: {e}", exc_info=True)
            raise ServiceUnavailableError(f"Filter service error: {e}") from e

        return self._finish(result, start_time)

    async def agenerate(self) -> str:
        """Async counterpart of generate(); the await is the only suspension point."""
        logger.info("Requesting filter from generation service (async)")
        start_time = time()
        try:
            result = await self._runnable.ainvoke(self._messages())
        except Exception as e:
            logger.error(f"Filter service call failed: {e}", exc_info=True)
            raise ServiceUnavailableError(f"Filter service error: {e}") from e

        return self._finish(result, start_time)

    def _messages(self) -> list:
        return [HumanMessage(content=self._prompt)]

    def _finish(self, result: Any, start_time: float) -> str:
        css_filter = parse_filter_payload(extract_raw_text(result))
        latency_ms = int((time() - start_time) * 1000)
        logger.info(f"Filter generated in {latency_ms}ms: {css_filter}")
        return css_filter


def extract_raw_text(result: Any) -> str:
    """
    Pull the raw reply text out of a structured-output result.

    with_structured_output(include_raw=True) returns a dict whose "raw" entry
    is the model message; message content is either a string or a list of
    content parts.
    """
    if isinstance(result, dict):
        result = result.get("raw")

    content = getattr(result, "content", result)
    if content is None:
        return ""
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(str(part.get("text", "")))
        return "".join(parts)
    return str(content)


def parse_filter_payload(raw_text: str) -> str:
    """
    Validate a raw reply and return its filter descriptor.

    :param raw_text: Reply text from the service
    :return: The filter string, unmodified
    :raises: EmptyResponseError, MalformedResponseError, InvalidFilterValueError
    """
    text = (raw_text or "").strip()
    if not text:
        logger.warning("Filter service returned an empty response")
        raise EmptyResponseError("API returned an empty response.")

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning(f"Filter service returned non-JSON payload: {text[:200]}")
        raise MalformedResponseError(f"API response is not valid JSON: {e.msg}") from e

    if not isinstance(payload, dict):
        logger.warning(f"Filter service returned a non-object payload: {text[:200]}")
        raise MalformedResponseError("API response is not a JSON object.")

    try:
        response = FilterResponse.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Filter service returned an invalid filter value: {text[:200]}")
        raise InvalidFilterValueError("Invalid or empty filter value in API response.") from e

    return response.filter
