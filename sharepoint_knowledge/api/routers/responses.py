"""Response models shared by the API routers."""

from pydantic import BaseModel


class OperationResponse(BaseModel):
    """Outcome of a deploy or document operation."""

    status: str
    message: str
