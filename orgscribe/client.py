"""Access to the hosted OpenAI API."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional, Type

import httpx
import openai
from openai import OpenAI

from .errors import OrgscribeError
from .models import API_BASE_URL, API_TIMEOUT


class APIError(OrgscribeError):
    """Raised when a request to the remote API fails or returns garbage."""


@contextmanager
def openai_client(
    api_key: str,
    *,
    timeout: float = API_TIMEOUT,
    http_client: Optional[httpx.Client] = None,
) -> Iterator[OpenAI]:
    """Yield a client that makes exactly one attempt per request."""

    with OpenAI(
        api_key=api_key,
        base_url=API_BASE_URL,
        timeout=timeout,
        max_retries=0,
        http_client=http_client,
    ) as client:
        yield client


@contextmanager
def api_errors(api_name: str, error_cls: Type[APIError] = APIError) -> Iterator[None]:
    """Re-raise SDK failures inside the block as ``error_cls`` naming ``api_name``."""

    try:
        yield
    except openai.APIStatusError as exc:
        raise error_cls(f"Error response from {api_name} API: {exc}") from exc
    except openai.APIConnectionError as exc:
        raise error_cls(f"Error sending request to {api_name} API: {exc}") from exc
    except openai.APIError as exc:
        raise error_cls(f"Error unmarshalling {api_name} response: {exc}") from exc
