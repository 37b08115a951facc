"""HTTP client for the gallery API, used by the UI."""

import logging

import httpx

from visions_gallery.api.models import ImageResponse
from visions_gallery.core.config import config

from .models import FormFields

logger = logging.getLogger(__name__)

IMAGES_PATH = "/api/images"


class ApiError(Exception):
    """Raised when a request fails or the API answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ImagesClient:
    """Thin wrapper over the four image endpoints.

    Args:
        base_url: API root, defaults to ``config.api_base_url``.
        timeout: Per-request timeout in seconds, defaults to
            ``config.request_timeout``.
        http: Pre-built ``httpx.Client`` (e.g. FastAPI's ``TestClient``);
            overrides ``base_url`` and ``timeout``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        http: httpx.Client | None = None,
    ):
        self._http = http or httpx.Client(
            base_url=base_url or config.api_base_url,
            timeout=timeout or config.request_timeout,
        )

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise ApiError(f"{method} {path} failed: {e}") from e

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = None
            detail = body.get("detail", response.text) if isinstance(body, dict) else response.text
            raise ApiError(
                f"{method} {path} returned {response.status_code}: {detail}",
                status_code=response.status_code,
            )
        return response

    def list_images(self) -> list[ImageResponse]:
        """Fetch every record, newest first."""
        response = self._request("GET", IMAGES_PATH)
        records = [ImageResponse.model_validate(item) for item in response.json()]
        logger.debug(f"Fetched {len(records)} images")
        return records

    def create_image(self, fields: FormFields) -> ImageResponse:
        """Create a record and return it as stored."""
        response = self._request("POST", IMAGES_PATH, json=fields.to_payload())
        return ImageResponse.model_validate(response.json())

    def update_image(self, image_id: int, fields: FormFields) -> None:
        """Replace url, title, and description of a record."""
        self._request("PUT", f"{IMAGES_PATH}/{image_id}", json=fields.to_payload())

    def delete_image(self, image_id: int) -> None:
        self._request("DELETE", f"{IMAGES_PATH}/{image_id}")

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "ImagesClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
