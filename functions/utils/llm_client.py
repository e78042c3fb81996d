# functions/utils/llm_client.py
from __future__ import annotations

import os
import time
from functools import lru_cache
from typing import Any, Dict, Optional, cast

import google.generativeai as genai
import structlog
from google.api_core import exceptions as google_exceptions

from functions.utils.common import ROOT, get_param_section, load_yaml_dict
from functions.utils.errors import LLMCallError, UpstreamRateLimitError

logger = structlog.get_logger().bind(module="llm_client")

STUB_PREFIX = "[STUB:"


# ---------------------------------------------------------------------------
# String subclass that can carry usage metadata
# ---------------------------------------------------------------------------
class LLMText(str):
    """
    String that also exposes:
      - .usage: dict-like {prompt_tokens, completion_tokens, total_tokens}
      - .raw: raw SDK response object
    """
    def __new__(
        cls,
        text: str,
        usage: Optional[Dict[str, Any]] = None,
        raw: Any = None,
    ) -> "LLMText":
        obj = cast(LLMText, str.__new__(cls, text or ""))
        obj.usage = usage or {}
        obj.raw = raw
        return obj


def is_stub_text(text: str) -> bool:
    return isinstance(text, str) and text.startswith(STUB_PREFIX)


def _safe_get_text(resp: Any, model: str) -> str:
    """Extract response text; the SDK raises on `.text` when generation was blocked."""
    try:
        txt = resp.text
    except (ValueError, AttributeError) as exc:
        logger.warning(
            "gemini_empty_text",
            reason="exception_on_text_accessor",
            model=model,
            error=str(exc),
        )
        raise LLMCallError(f"No text returned by {model}") from exc

    if not txt or not str(txt).strip():
        logger.warning("gemini_empty_text", reason="blank_text_returned", model=model)
        raise LLMCallError(f"Blank text returned by {model}")

    return str(txt).strip()


# ---------------------------------------------------------------------------
# Credentials / stub selection
# ---------------------------------------------------------------------------
@lru_cache(maxsize=1)
def _load_credentials() -> Dict[str, Any]:
    return load_yaml_dict(ROOT / "parameters" / "credentials.yaml")


def _get_api_key() -> Optional[str]:
    api_key = os.environ.get("GOOGLE_API_KEY")
    if api_key:
        return api_key
    creds = _load_credentials()
    api_key = creds.get("GOOGLE_API_KEY") or creds.get("google_api_key")
    if not api_key:
        return None
    return str(api_key)


def has_api_key() -> bool:
    return bool(_get_api_key())


def stub_forced() -> bool:
    """True when parameters.yaml explicitly asks for the stub LLM."""
    return get_param_section("generation").get("use_stub") is True


def use_stub_llm() -> bool:
    """
    Decide whether to use a stub LLM.

    Order:
      1) parameters.yaml generation.use_stub → True
      2) No API key → True
      3) Else False
    """
    gen_cfg = get_param_section("generation")
    if gen_cfg.get("use_stub") is True:
        logger.info("llm_stub_enabled_by_generation_config")
        return True

    if not _get_api_key():
        logger.info("llm_stub_enabled_no_api_key")
        return True

    return False


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def _genai_call(
    prompt: str,
    *,
    model: str,
    temperature: float,
    top_p: float,
    max_output_tokens: int,
    timeout: int,
    max_retries: int,
    response_schema: Optional[Dict[str, Any]],
) -> LLMText:
    """Real call via google-generativeai with usage_metadata surfaced."""
    genai.configure(api_key=_get_api_key())
    gen_model = genai.GenerativeModel(model)

    gen_cfg: Dict[str, Any] = {
        "temperature": temperature,
        "top_p": top_p,
        "max_output_tokens": max_output_tokens,
    }
    if response_schema is not None:
        gen_cfg["response_mime_type"] = "application/json"
        gen_cfg["response_schema"] = response_schema

    logger.info(
        "llm_real_call_start",
        model=model,
        temperature=temperature,
        top_p=top_p,
        max_output_tokens=max_output_tokens,
        structured=response_schema is not None,
        max_retries=max_retries,
    )

    last_error: Exception | None = None
    for attempt in range(1, max_retries + 1):
        try:
            resp = gen_model.generate_content(
                prompt,
                generation_config=gen_cfg,
                request_options={"timeout": timeout},
            )
        except google_exceptions.TooManyRequests as e:
            logger.warning("llm_rate_limited", model=model, attempt=attempt, error=str(e))
            raise UpstreamRateLimitError(str(e)) from e
        except google_exceptions.GoogleAPIError as e:
            last_error = e
            logger.exception(
                "llm_real_call_failed",
                error=str(e),
                attempt=attempt,
                model=model,
            )
            if attempt < max_retries:
                time.sleep(1.5 * attempt)
            continue

        text = _safe_get_text(resp, model)

        um = getattr(resp, "usage_metadata", None)
        usage = {
            "prompt_tokens": getattr(um, "prompt_token_count", None) if um else None,
            "completion_tokens": getattr(um, "candidates_token_count", None) if um else None,
            "total_tokens": getattr(um, "total_token_count", None) if um else None,
        }

        logger.info(
            "llm_real_call_success",
            model=model,
            result_preview=text[:200],
            prompt_tokens=usage["prompt_tokens"],
            output_tokens=usage["completion_tokens"],
            total_tokens=usage["total_tokens"],
        )
        return LLMText(text, usage=usage, raw=resp)

    error_preview = str(last_error)[:200] if last_error else "Unknown error"
    raise LLMCallError(f"LLM call failed after {max_retries} attempt(s): {error_preview}")


def call_llm(
    prompt: str,
    *,
    response_schema: Optional[Dict[str, Any]] = None,
    **kwargs: Any,
) -> LLMText:
    """
    Call the LLM and return generated text (string subclass with usage).

    `response_schema` switches the call to JSON mode constrained by that schema.
    Raises UpstreamRateLimitError on quota exhaustion and LLMCallError on any
    other provider failure.
    """
    generation_cfg = get_param_section("generation")

    model = kwargs.get("model", generation_cfg.get("model_name", "gemini-2.0-flash"))
    temperature = float(kwargs.get("temperature", generation_cfg.get("temperature", 0.7)))
    top_p = float(kwargs.get("top_p", generation_cfg.get("top_p", 0.95)))
    max_output_tokens = int(kwargs.get("max_output_tokens", generation_cfg.get("max_tokens", 2048)))
    timeout = int(kwargs.get("timeout", generation_cfg.get("timeout_seconds", 30)))
    max_retries = max(1, int(kwargs.get("max_retries", generation_cfg.get("max_retries", 1))))

    if use_stub_llm():
        logger.info(
            "llm_stub_call",
            model=model,
            temperature=temperature,
            structured=response_schema is not None,
        )
        return LLMText(f"{STUB_PREFIX}{model}] " + prompt.strip()[:200])

    return _genai_call(
        prompt,
        model=model,
        temperature=temperature,
        top_p=top_p,
        max_output_tokens=max_output_tokens,
        timeout=timeout,
        max_retries=max_retries,
        response_schema=response_schema,
    )
