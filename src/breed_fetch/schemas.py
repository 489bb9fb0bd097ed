"""Response models for the breed image API."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class ImageResponse(BaseModel):
    """Body of ``/breed/<breed>/images/random``.

    Only ``message`` is consumed. Both fields are optional so that a missing
    ``message`` can be reported (or tolerated) by the extraction step rather
    than by validation.
    """

    model_config = ConfigDict(extra="allow")

    message: Optional[str] = None
    status: Optional[str] = None
