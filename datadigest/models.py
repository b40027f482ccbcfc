from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

LABEL_COL = "File"


# ---------------- Wire models ----------------
class CodebookEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file: str = Field(..., alias="File")
    rows: int = Field(..., alias="Rows", ge=0)
    columns: int = Field(..., alias="Columns", ge=0)
    json_rows: str = Field(..., alias="json", description="JSON array of row objects, all values strings")


class Settings(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    files: List[CodebookEntry] = Field(default_factory=list)
    meta: Dict[str, Any] = Field(default_factory=dict)  # reserved, always empty
    label_col: str = Field(LABEL_COL, alias="labelCol")


class RParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    add_env: bool = Field(True, alias="addEnv")


class Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    r_params: RParams = Field(default_factory=RParams, alias="rParams")
    settings: Settings = Field(default_factory=Settings)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
