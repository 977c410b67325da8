"""
Resilient client for OpenRouter-compatible chat completion APIs.

Wraps a single ``POST /chat/completions`` call with credential caching,
timeouts, retries with backoff (honouring ``Retry-After``) and JSON Schema
validation of structured output. ``send_message`` never raises provider
errors; every outcome is a ``Success`` or a ``Failure(ServiceError)``.
"""

import asyncio
import dataclasses
import inspect
import json
import random
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

import httpx
import structlog
from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError
from tenacity import RetryCallState

from tencards.application.common.result import Failure, Success
from tencards.domain.learning.value_objects import DEFAULT_MODEL
from tencards.infrastructure.ai.exceptions import (
    CredentialError,
    InvalidResponseError,
    InvalidSchemaError,
    ModelAPIError,
    ModelClientError,
    ModelNetworkError,
    ModelTimeoutError,
    SchemaMismatchError,
    ServiceError,
)
from tencards.infrastructure.ai.retry_policy import RetryConfig, RetryPolicy

logger = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_TIMEOUT_SECONDS = 30.0
CREDENTIAL_TTL_SECONDS = 5 * 60

ApiKeyProvider = Callable[[], str | None | Awaitable[str | None]]
Message = dict[str, str]


@dataclass
class UsageMetrics:
    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    total_tokens: int = 0


@dataclass(frozen=True)
class ResponseMetadata:
    status: int | None = None
    headers: dict[str, str] = field(default_factory=dict)
    latency_ms: float | None = None
    request_id: str | None = None


@dataclass(frozen=True)
class HealthCheckResult:
    ok: bool
    latency_ms: float
    message: str


def json_schema_response_format(
    name: str, schema: dict[str, Any], strict: bool = True
) -> dict[str, Any]:
    """Build a ``response_format`` requesting schema-constrained JSON output."""
    return {
        "type": "json_schema",
        "json_schema": {"name": name, "strict": strict, "schema": schema},
    }


def _is_json_schema(response_format: dict[str, Any] | None) -> bool:
    return bool(response_format) and response_format.get("type") == "json_schema"


class ResilientModelClient:
    """
    Chat completion client with retry, credential caching and schema validation.

    One instance is shared per process. It runs on a single event loop and
    never updates its counters or cache across an ``await``, so it needs no
    locking.
    """

    def __init__(
        self,
        api_key_provider: ApiKeyProvider,
        base_url: str = DEFAULT_BASE_URL,
        default_model: str = DEFAULT_MODEL,
        default_params: dict[str, Any] | None = None,
        timeout_s: float = DEFAULT_TIMEOUT_SECONDS,
        retry: RetryConfig | None = None,
        app_url: str | None = None,
        app_title: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
        rng: Callable[[], float] = random.random,
    ) -> None:
        self.api_key_provider = api_key_provider
        self.base_url = base_url.rstrip("/")
        self.default_model = default_model
        self.default_params = default_params or {}
        self.timeout_s = timeout_s
        self.retry_policy = RetryPolicy(retry, rng=rng)
        self.app_url = app_url
        self.app_title = app_title
        self._http_client = http_client
        self._sleep = sleep
        self._clock = clock

        self._cached_key: str | None = None
        self._cached_key_expires_at = 0.0
        self._validators: dict[tuple[str, str], Draft202012Validator] = {}
        self._usage = UsageMetrics()
        self._last_response_metadata = ResponseMetadata()

    @property
    def usage(self) -> UsageMetrics:
        """Snapshot of the usage counters."""
        return dataclasses.replace(self._usage)

    @property
    def last_response_metadata(self) -> ResponseMetadata:
        return self._last_response_metadata

    def set_default_model(self, model: str) -> None:
        self.default_model = model
        logger.info("model_default_changed", model=model)

    async def send_message(
        self,
        user_message: str | None = None,
        *,
        system_message: str | None = None,
        conversation: list[Message] | None = None,
        model: str | None = None,
        params: dict[str, Any] | None = None,
        response_format: dict[str, Any] | None = None,
    ) -> Success[Any] | Failure[ServiceError]:
        """
        Send a chat completion request.

        Args:
            user_message: The active user message
            system_message: Optional system instruction, sent first
            conversation: Optional prior messages, sent between system and user message
            model: Model identifier, defaults to the client's default model
            params: Model parameters overriding the default parameters
            response_format: Optional ``json_schema`` response format; when given the
                model output is parsed and validated against the schema

        Returns:
            Success with the parsed JSON (schema mode) or
            ``{content, finish_reason, usage}``; Failure with a ServiceError otherwise
        """
        self._usage.total_requests += 1
        try:
            if not user_message and not conversation:
                raise ModelClientError(
                    "Either a user message or a conversation is required", code="BAD_REQUEST"
                )
            validator = self._get_validator(response_format) if _is_json_schema(response_format) else None
            payload = self.build_payload(
                user_message,
                system_message=system_message,
                conversation=conversation,
                model=model,
                params=params,
                response_format=response_format,
            )
            body = await self.send_raw(payload)
            data = self._format_response(body, validator, response_format)
        except ModelClientError as e:
            self._usage.failed_requests += 1
            logger.warning(
                "model_request_failed",
                error_code=e.code,
                error=e.message,
                model=model or self.default_model,
            )
            return Failure(e.to_service_error())

        self._usage.successful_requests += 1
        usage = body.get("usage")
        if isinstance(usage, dict) and isinstance(usage.get("total_tokens"), int):
            self._usage.total_tokens += usage["total_tokens"]
        return Success(data)

    async def send_raw(self, payload: dict[str, Any]) -> dict[str, Any]:
        """
        Low-level call without schema validation.

        Raises:
            ModelClientError: On credential, transport or provider failure
        """
        api_key = await self._resolve_api_key()
        headers = self._build_headers(api_key)
        if self._http_client is not None:
            return await self._request_with_retry(self._http_client, payload, headers)
        async with httpx.AsyncClient(timeout=self.timeout_s) as client:
            return await self._request_with_retry(client, payload, headers)

    async def health_check(self) -> HealthCheckResult:
        """Send a minimal ping completion and report reachability."""
        started = self._clock()
        payload = {
            "model": self.default_model,
            "messages": [{"role": "user", "content": "ping"}],
            "max_tokens": 5,
        }
        try:
            await self.send_raw(payload)
        except ModelClientError as e:
            return HealthCheckResult(
                ok=False, latency_ms=self._elapsed_ms(started), message=e.message
            )
        return HealthCheckResult(
            ok=True, latency_ms=self._elapsed_ms(started), message="Model provider is reachable"
        )

    def build_payload(
        self,
        user_message: str | None = None,
        *,
        system_message: str | None = None,
        conversation: list[Message] | None = None,
        model: str | None = None,
        params: dict[str, Any] | None = None,
        response_format: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Assemble the request body: system, conversation, then user message."""
        messages: list[Message] = []
        if system_message:
            messages.append({"role": "system", "content": system_message})
        if conversation:
            messages.extend(conversation)
        if user_message:
            messages.append({"role": "user", "content": user_message})

        payload: dict[str, Any] = {
            "model": model or self.default_model,
            "messages": messages,
            **self.default_params,
            **(params or {}),
        }
        if response_format:
            payload["response_format"] = response_format
        return payload

    async def _resolve_api_key(self) -> str:
        now = self._clock()
        if self._cached_key and now < self._cached_key_expires_at:
            return self._cached_key

        try:
            key = self.api_key_provider()
            if inspect.isawaitable(key):
                key = await key
        except Exception as e:
            raise CredentialError(f"API key provider failed: {e}") from e
        if not key:
            raise CredentialError("API key provider returned an empty key")

        self._cached_key = key
        self._cached_key_expires_at = now + CREDENTIAL_TTL_SECONDS
        return key

    def _build_headers(self, api_key: str) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        if self.app_url:
            headers["HTTP-Referer"] = self.app_url
        if self.app_title:
            headers["X-Title"] = self.app_title
        return headers

    async def _request_with_retry(
        self, client: httpx.AsyncClient, payload: dict[str, Any], headers: dict[str, str]
    ) -> dict[str, Any]:
        retrying = self.retry_policy.retrying(sleep=self._sleep, before_sleep=_log_retry)
        return await retrying(self._send_once, client, payload, headers)

    async def _send_once(
        self, client: httpx.AsyncClient, payload: dict[str, Any], headers: dict[str, str]
    ) -> dict[str, Any]:
        started = self._clock()
        try:
            response = await client.post(
                f"{self.base_url}/chat/completions",
                json=payload,
                headers=headers,
                timeout=self.timeout_s,
            )
        except httpx.TimeoutException as e:
            raise ModelTimeoutError(f"Request timed out after {self.timeout_s}s") from e
        except httpx.HTTPError as e:
            raise ModelNetworkError(f"Network error: {e}") from e

        self._last_response_metadata = ResponseMetadata(
            status=response.status_code,
            headers=dict(response.headers),
            latency_ms=self._elapsed_ms(started),
            request_id=response.headers.get("x-request-id"),
        )

        if not response.is_success:
            raise ModelAPIError(
                _provider_error_message(response),
                response.status_code,
                retry_after=response.headers.get("retry-after"),
                details={"status": response.status_code},
            )

        try:
            body = response.json()
        except ValueError as e:
            raise InvalidResponseError("Provider returned a non-JSON body") from e
        if not isinstance(body, dict):
            raise InvalidResponseError("Provider returned an unexpected body")
        return body

    def _get_validator(self, response_format: dict[str, Any]) -> Draft202012Validator:
        json_schema = response_format.get("json_schema") or {}
        name = json_schema.get("name")
        schema = json_schema.get("schema")
        if not name or not isinstance(schema, dict):
            raise InvalidSchemaError("json_schema response format needs a name and a schema")

        cache_key = (name, json.dumps(schema, sort_keys=True))
        validator = self._validators.get(cache_key)
        if validator is None:
            try:
                Draft202012Validator.check_schema(schema)
            except SchemaError as e:
                raise InvalidSchemaError(f"Invalid JSON schema '{name}': {e.message}") from e
            validator = Draft202012Validator(schema)
            self._validators[cache_key] = validator
        return validator

    def _format_response(
        self,
        body: dict[str, Any],
        validator: Draft202012Validator | None,
        response_format: dict[str, Any] | None,
    ) -> Any:
        choices = body.get("choices")
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            raise InvalidResponseError("Provider response has no choices")
        choice = choices[0]
        message = choice.get("message") or {}
        content = message.get("content")

        if validator is None:
            return {
                "content": content,
                "finish_reason": choice.get("finish_reason"),
                "usage": body.get("usage"),
            }

        if not isinstance(content, str):
            raise InvalidResponseError("Provider response has no message content")
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise InvalidResponseError("Model output is not valid JSON") from e

        errors = sorted(validator.iter_errors(data), key=lambda err: err.json_path)
        if errors:
            details = [{"path": err.json_path, "message": err.message} for err in errors]
            logger.warning(
                "model_response_validation_failed",
                schema=(response_format or {}).get("json_schema", {}).get("name"),
                errors=details,
            )
            raise SchemaMismatchError(
                "Model output does not match the response schema", details=details
            )
        return data

    def _elapsed_ms(self, started: float) -> float:
        return max(0.0, (self._clock() - started) * 1000)


def _provider_error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return f"Provider returned HTTP {response.status_code}"


def _log_retry(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    delay_s = retry_state.next_action.sleep if retry_state.next_action else 0.0
    logger.warning(
        "model_request_retry",
        attempt=retry_state.attempt_number,
        error_code=getattr(error, "code", None),
        delay_ms=round(delay_s * 1000),
    )
