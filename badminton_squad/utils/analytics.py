from typing import Any, Dict, Iterable, List, Optional
from .constants import SquadConstants
from ..models.enums import ResponseStatus


def _status_value(status: Any) -> str:
    return status.value if hasattr(status, "value") else status


def response_status_to_attendance(status: Any) -> Optional[bool]:
    """COMING -> True, NOT_COMING -> False, TENTATIVE (or unknown) -> None"""
    value = _status_value(status)
    if value == ResponseStatus.COMING.value:
        return True
    if value == ResponseStatus.NOT_COMING.value:
        return False
    return None


def calculate_user_accuracy(analytics: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Score how often a user's RSVPs matched their attendance.

    Rows with unknown attendance are excluded from the denominator. When
    every row is unknown the total still reports how many rows were seen.
    """
    if not analytics:
        return {
            "total_predictions": 0,
            "correct_predictions": 0,
            "accuracy_percentage": 0.0,
        }

    valid = [row for row in analytics if row.get("actual_attendance") is not None]
    if not valid:
        return {
            "total_predictions": len(analytics),
            "correct_predictions": 0,
            "accuracy_percentage": 0.0,
        }

    correct = [
        row
        for row in valid
        if (_status_value(row["predicted_status"]) == ResponseStatus.COMING.value)
        == row["actual_attendance"]
    ]

    return {
        "total_predictions": len(valid),
        "correct_predictions": len(correct),
        "accuracy_percentage": len(correct) / len(valid) * 100,
    }


def calculate_session_analytics(
    statuses: Iterable[Any], actual_attendees: int
) -> Dict[str, Any]:
    """How close the COMING count came to the real head count"""
    statuses = [_status_value(status) for status in statuses]
    coming_count = sum(1 for status in statuses if status == ResponseStatus.COMING.value)
    total_responses = len(statuses)

    if total_responses > 0:
        accuracy_rate = max(
            0.0, 100 - abs(coming_count - actual_attendees) * (100 / total_responses)
        )
    else:
        accuracy_rate = 0.0

    return {
        "total_responses": total_responses,
        "predicted_attendance": coming_count,
        "actual_attendance": actual_attendees,
        "accuracy_rate": accuracy_rate,
    }


def calculate_reliability_score(accuracy: Dict[str, Any]) -> int:
    if accuracy["total_predictions"] < SquadConstants.MIN_PREDICTIONS_FOR_RELIABILITY:
        return SquadConstants.NEUTRAL_RELIABILITY_SCORE

    return round(accuracy["accuracy_percentage"])
