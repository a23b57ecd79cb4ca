import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from .exceptions import RemoteError, TransportError
from .settings import ShopConfig
from .utils import truncate

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

BODY_PREVIEW_CHARS = 400
TRANSIENT_STATUSES = {429, 500, 502, 503, 504}


def retry_always(error: TransportError) -> bool:
    return True


def transient_only(error: TransportError) -> bool:
    """Retry network failures, throttling and 5xx; give up on anything else."""
    return error.status_code is None or error.status_code in TRANSIENT_STATUSES


@dataclass(frozen=True)
class RetryPolicy:
    """
    How many times a request is attempted and which transport failures are
    worth another try. The default retries every TransportError three times
    back-to-back; RemoteError is never retried.
    """

    max_attempts: int = 3
    backoff_seconds: float = 0.0
    backoff_multiplier: float = 2.0
    retryable: Callable[[TransportError], bool] = retry_always

    def delay_for(self, attempt: int) -> float:
        if self.backoff_seconds <= 0:
            return 0.0
        return self.backoff_seconds * (self.backoff_multiplier ** (attempt - 1))


class ShopifyClient:
    """Authenticated POSTs against one store's Admin GraphQL endpoint."""

    def __init__(
        self,
        config: ShopConfig,
        retry_policy: RetryPolicy = RetryPolicy(),
        session: Optional[requests.Session] = None,
        timeout: float = 30,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        self.retry_policy = retry_policy
        self.timeout = timeout
        self._sleep = sleep
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/json",
                "Content-Type": "application/json",
                "X-Shopify-Access-Token": config.admin_token,
            }
        )

    def execute(self, query: str, variables: Optional[dict] = None) -> dict:
        """
        Runs one GraphQL document and returns the parsed JSON body.
        Raises TransportError once the retry budget is spent and RemoteError
        as soon as the payload carries `errors`.
        """
        policy = self.retry_policy
        attempt = 1
        while True:
            try:
                return self._post(query, variables)
            except TransportError as e:
                if attempt >= policy.max_attempts or not policy.retryable(e):
                    logger.error(f"❌ Shopify request failed after {attempt} attempt(s): {e}")
                    raise
                delay = policy.delay_for(attempt)
                logger.warning(
                    f"⚠️ Shopify request attempt {attempt}/{policy.max_attempts} failed ({e}). "
                    f"Retrying{f' in {delay:.1f}s' if delay else ''}..."
                )
                if delay:
                    self._sleep(delay)
                attempt += 1

    def execute_model(
        self, query: str, variables: Optional[dict], model: Type[M]
    ) -> M:
        """Like execute(), validated into the given response model."""
        payload = self.execute(query, variables)
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            raise TransportError(
                f"Unexpected response shape for {model.__name__}: {e}",
                status_code=200,
                content_type="application/json",
                body=truncate(str(payload), BODY_PREVIEW_CHARS),
            ) from e

    def _post(self, query: str, variables: Optional[dict]) -> dict:
        try:
            res = self.session.post(
                self.config.graphql_url,
                json={"query": query, "variables": variables or None},
                timeout=self.timeout,
                allow_redirects=False,
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Shopify GraphQL request error: {e}") from e

        code = res.status_code
        content_type = str(res.headers.get("Content-Type", ""))
        body = res.text or ""

        if code != 200:
            raise TransportError(
                f"Shopify GraphQL HTTP {code}; Content-Type={content_type}; "
                f"Body[0..{BODY_PREVIEW_CHARS}]= {truncate(body, BODY_PREVIEW_CHARS)}",
                status_code=code,
                content_type=content_type,
                body=truncate(body, BODY_PREVIEW_CHARS),
            )
        if "application/json" not in content_type.lower():
            raise TransportError(
                f"Expected JSON but got Content-Type={content_type}; "
                f"Body[0..{BODY_PREVIEW_CHARS}]= {truncate(body, BODY_PREVIEW_CHARS)}",
                status_code=code,
                content_type=content_type,
                body=truncate(body, BODY_PREVIEW_CHARS),
            )

        try:
            parsed: Any = res.json()
        except ValueError as e:
            raise TransportError(
                f"JSON parse error: {e}; Body[0..200]= {truncate(body, 200)}",
                status_code=code,
                content_type=content_type,
                body=truncate(body, BODY_PREVIEW_CHARS),
            ) from e

        if not isinstance(parsed, dict):
            raise TransportError(
                f"Expected a JSON object, got {type(parsed).__name__}",
                status_code=code,
                content_type=content_type,
                body=truncate(body, BODY_PREVIEW_CHARS),
            )
        if parsed.get("errors"):
            raise RemoteError(parsed["errors"])
        return parsed
