import time
from typing import Any

import httpx
import structlog
from cloudinary.utils import api_sign_request, cloudinary_api_url
from pymongo.asynchronous.database import AsyncDatabase

from storefront.core.core import Service
from storefront.errors import UploadError, ValidationError

logger = structlog.get_logger(__name__)


class MediaService(Service):
    """Passes uploaded images through to Cloudinary and returns their URL.

    Stores nothing locally.
    """

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self.transport: httpx.AsyncBaseTransport | None = None  # Overridable HTTP transport

    async def upload_image(self, content: bytes, filename: str) -> str:
        """Upload an image and return its public URL, or "" when there is nothing to upload.

        Raises:
            ValidationError: If no media host is configured
            UploadError: If the media host cannot be reached or rejects the file
        """
        if not content:
            return ""

        config = self.core.config
        if not config.cloudinary_cloud_name:
            raise ValidationError("Image uploads are not configured")

        params = {"timestamp": str(int(time.time()))}
        data = {
            **params,
            "api_key": config.cloudinary_api_key,
            "signature": api_sign_request(params, config.cloudinary_api_secret),
        }
        url = cloudinary_api_url("upload", cloud_name=config.cloudinary_cloud_name, resource_type="image")

        try:
            async with httpx.AsyncClient(timeout=30.0, transport=self.transport) as client:
                response = await client.post(url, data=data, files={"file": (filename, content)})
                response.raise_for_status()
                secure_url = response.json()["secure_url"]
        except (httpx.HTTPError, KeyError, ValueError) as e:
            logger.warning("image_upload_failed", filename=filename, error=str(e))
            raise UploadError from e

        logger.info("image_uploaded", filename=filename, url=secure_url)
        return str(secure_url)
