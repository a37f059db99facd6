# kindstream/types/base.py
from pydantic import BaseModel, ConfigDict


class StrictBaseModel(BaseModel):
    """Default Pydantic strict model used for kindstream's own value types."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)
