import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from product_form.config import settings
from product_form.schemas.product import ProductDraft

logger = logging.getLogger(__name__)


class SubmissionError(Exception):
    """The create request failed: network error or a non-2xx response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass
class SubmissionResult:
    status_code: int
    body: Any = None


def build_payload(draft: ProductDraft, image: Optional[str], placeholder: str) -> Dict[str, Any]:
    """
    JSON body for the create request: the draft fields plus `image`, which is
    the uploaded data URL or the placeholder when nothing was uploaded.
    An absent description is left out.
    """
    payload = draft.model_dump(mode="json", exclude_none=True)
    payload["image"] = image or placeholder
    return payload


class SubmissionClient:
    """
    Sends one create-product request per call. No retries and no idempotency
    key: submitting again after a failure is a brand new request.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        path: Optional[str] = None,
        timeout: Optional[float] = None,
        placeholder: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.path = path or settings.CREATE_PRODUCT_PATH
        self.placeholder = placeholder or settings.PLACEHOLDER_IMAGE
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.API_BASE_URL,
            timeout=timeout if timeout is not None else settings.REQUEST_TIMEOUT,
            transport=transport,
        )

    async def create_product(self, draft: ProductDraft, image: Optional[str] = None) -> SubmissionResult:
        payload = build_payload(draft, image, self.placeholder)
        try:
            resp = await self._client.post(self.path, json=payload)
        except httpx.HTTPError as exc:
            raise SubmissionError(f"Request to {self.path} failed: {exc}") from exc

        if not resp.is_success:
            raise SubmissionError(
                f"{self.path} responded {resp.status_code}", status_code=resp.status_code
            )

        try:
            body = resp.json()
        except ValueError:
            body = resp.text or None
        logger.info("response from add product: %s", resp.status_code)
        return SubmissionResult(status_code=resp.status_code, body=body)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "SubmissionClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
