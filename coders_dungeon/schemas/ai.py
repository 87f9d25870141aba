from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

class DescribeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    code: Optional[str] = None
    type: str = "file"
    file_name: Optional[str] = Field(default=None, alias="fileName")

class DescribeResponse(BaseModel):
    description: str
