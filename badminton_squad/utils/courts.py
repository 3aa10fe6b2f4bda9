import math
from typing import Dict
from .constants import SquadConstants
from ..models.enums import PlayabilityStatus


def calculate_courts(coming_count: int) -> int:
    """Courts needed for the players marked COMING (4 per doubles court)"""
    if coming_count <= 0:
        return 0

    courts = math.ceil(coming_count / SquadConstants.PLAYERS_PER_COURT)
    return max(1, courts)


def get_courts_description(coming_count: int) -> str:
    courts = calculate_courts(coming_count)

    if coming_count <= 0:
        return "No courts needed"

    if courts == 1:
        return f"{courts} court needed for {coming_count} player{'' if coming_count == 1 else 's'}"

    return f"{courts} courts needed for {coming_count} players"


def get_playability_status(coming_count: int) -> Dict[str, str]:
    """Display-only label for how well a session is shaping up"""
    players_per_court = SquadConstants.PLAYERS_PER_COURT

    if coming_count < players_per_court:
        missing = players_per_court - coming_count
        return {
            "status": PlayabilityStatus.INSUFFICIENT.value,
            "message": f"Need {missing} more player{'' if missing == 1 else 's'} for doubles",
        }
    elif coming_count == players_per_court:
        return {
            "status": PlayabilityStatus.MINIMUM.value,
            "message": "Perfect for one doubles game",
        }
    elif coming_count <= 2 * players_per_court:
        return {
            "status": PlayabilityStatus.GOOD.value,
            "message": "Great turnout for multiple games",
        }
    else:
        return {
            "status": PlayabilityStatus.EXCELLENT.value,
            "message": "Excellent turnout - multiple courts needed",
        }
