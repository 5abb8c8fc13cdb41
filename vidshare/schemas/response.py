# vidshare/schemas/response.py
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

DataT = TypeVar("DataT")


class ApiResponse(BaseModel, Generic[DataT]):
    """Uniform response envelope: {statusCode, message, data}."""
    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(200, alias="statusCode")
    message: str = "success"
    data: Optional[DataT] = None
