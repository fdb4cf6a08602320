import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from models.grammar import GrammarCheckRequest, GrammarCheckResponse
from services.grammar_check.client import ModelClient
from services.grammar_check.errors import GrammarCheckError, InternalError, ValidationError
from services.grammar_check.extractor import extract_response
from services.grammar_check.language import detect_language
from services.grammar_check.prompts import build_system_prompt, build_user_prompt
from shared.utils import truncate_for_log


class GrammarCheckService:
    """Runs one grammar check: heuristic, prompts, model call, extraction.

    Holds no per-request state; concurrent checks share only the client.
    """

    def __init__(self, logger: logging.Logger, client: ModelClient | None = None):
        self.logger = logger
        self.client = client or ModelClient()

    async def check_grammar(
        self, request: GrammarCheckRequest | Mapping[str, Any]
    ) -> GrammarCheckResponse:
        style = request.get("style") if isinstance(request, Mapping) else request.style
        text = request.get("text") if isinstance(request, Mapping) else request.text
        try:
            request = self._validate(request)

            detected_language = detect_language(request.text)
            system_prompt = build_system_prompt(request.style, detected_language)
            user_prompt = build_user_prompt(request.text, detected_language)

            raw_text = await self.client.invoke(system_prompt, user_prompt)
            return extract_response(raw_text, request.text, detected_language)
        except GrammarCheckError as e:
            self._log_failure(e, style, text)
            raise
        except Exception as e:
            self._log_failure(e, style, text)
            raise InternalError("Grammar check failed") from e

    # The pipeline's public name for a single run
    run = check_grammar

    def _validate(self, request: GrammarCheckRequest | Mapping[str, Any]) -> GrammarCheckRequest:
        if isinstance(request, GrammarCheckRequest):
            return request
        try:
            return GrammarCheckRequest.model_validate(dict(request))
        except PydanticValidationError as e:
            raise ValidationError(
                "Invalid request data",
                details=e.errors(include_url=False, include_context=False),
            ) from e

    def _log_failure(self, error: Exception, style: Any, text: Any) -> None:
        style_value = getattr(style, "value", style)
        sample = truncate_for_log(text) if isinstance(text, str) else repr(text)
        self.logger.error(
            f"Grammar check failed ({type(error).__name__}): {error!s} "
            f"[style={style_value}, text={sample!r}]"
        )
