from datetime import datetime

from pydantic import BaseModel, Field


class ExerciseLogBase(BaseModel):
    plan_item_id: int
    performed_at: datetime
    completion_rate: int | None = Field(default=None, ge=0, le=100)
    pain_before: int | None = Field(default=None, ge=0, le=10)
    pain_after: int | None = Field(default=None, ge=0, le=10)
    duration_sec: int | None = Field(default=None, ge=0)
    rpe: int | None = Field(default=None, ge=1, le=10)
    notes: str | None = None


class ExerciseLogCreate(ExerciseLogBase):
    pass


class ExerciseLogRead(ExerciseLogBase):
    id: int
    user_id: int
    created_at: datetime

    model_config = {"from_attributes": True}
