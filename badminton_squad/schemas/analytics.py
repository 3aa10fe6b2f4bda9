from pydantic import BaseModel, Field


class SessionCompletion(BaseModel):
    actual_attendees: int = Field(
        ..., ge=0, alias="actualAttendees", description="Players who actually turned up"
    )

    model_config = {"populate_by_name": True}


class SessionAnalytics(BaseModel):
    total_responses: int
    predicted_attendance: int
    actual_attendance: int
    accuracy_rate: float


class UserAccuracy(BaseModel):
    user_id: str
    total_predictions: int
    correct_predictions: int
    accuracy_percentage: float
    reliability_score: int
