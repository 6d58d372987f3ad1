from datetime import date, datetime

from pydantic import BaseModel, Field


class MedicationLogBase(BaseModel):
    medication_id: int
    taken_at: datetime
    time_of_day: str | None = Field(
        default=None, pattern=r"^(morning|afternoon|evening|night)$"
    )
    taken: bool = True
    notes: str | None = None


class MedicationLogCreate(MedicationLogBase):
    pass


class MedicationLogRead(MedicationLogBase):
    id: int
    user_id: int
    medication_name: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class MedicationLogList(BaseModel):
    day: date
    logs: list[MedicationLogRead]
