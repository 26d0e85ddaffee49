# task_manager/schemas/tokens.py
from pydantic import BaseModel
from task_manager.schemas.user import UserOut


class Token(BaseModel):
    message: str
    user: UserOut
    token: str
    token_type: str = "bearer"

    model_config = {
        "from_attributes": True
    }
