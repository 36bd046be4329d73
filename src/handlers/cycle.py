"""
Lambda handler for pre-pregnancy cycle insights.
"""
from typing import Dict, List, Optional
from datetime import date
import json

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import BaseModel, ValidationError

from src.utils.logging import logger
from src.models.event import CycleEvent
from src.models.profile import UserProfile
from src.services.constants import FERTILE_DAYS_BEFORE_OVULATION, FERTILE_DAYS_AFTER_OVULATION
from src.services.cycle import (
    calculate_fertile_window,
    find_cycle_starts,
    format_next_period,
    get_period_dates,
    predict_next_period
)
from src.services.exceptions import ProfileNotFoundError
from src.services.profile import load_user_profile, load_cycle_events

tracer = Tracer()

class CycleInsightsRequest(BaseModel):
    """Cycle insights request model."""
    user_id: str
    show_fertile_window: bool = True

class CycleInsightsResponse(BaseModel):
    """Cycle insights response model."""
    cycle_length: int
    fertile_window_days: int
    next_period: Optional[date] = None
    next_period_display: str
    fertile_window: List[date]
    cycle_starts: List[date]

def calculate_cycle_insights(
    profile: UserProfile,
    events: List[CycleEvent],
    show_fertile_window: bool = True
) -> CycleInsightsResponse:
    """
    Calculate the cycle insights card for a user.

    Args:
        profile: Profile snapshot holding the cycle length
        events: Marked calendar days
        show_fertile_window: Whether the user wants fertile days marked

    Returns:
        Cycle insights with next period prediction and fertile window
    """
    cycle_length = profile.cycle_length_days
    period_dates = get_period_dates(events)

    fertile_window = []
    if show_fertile_window and period_dates:
        fertile_window = calculate_fertile_window(period_dates[-1], cycle_length)

    return CycleInsightsResponse(
        cycle_length=cycle_length,
        fertile_window_days=(
            FERTILE_DAYS_BEFORE_OVULATION + FERTILE_DAYS_AFTER_OVULATION + 1
            if show_fertile_window else 0
        ),
        next_period=predict_next_period(events, cycle_length),
        next_period_display=format_next_period(events, cycle_length),
        fertile_window=fertile_window,
        cycle_starts=find_cycle_starts(events)
    )

@logger.inject_lambda_context
@tracer.capture_lambda_handler
def handler(event: Dict, context: LambdaContext) -> Dict:
    """
    Handle cycle insights requests.

    Args:
        event: API Gateway Lambda proxy event
        context: Lambda context

    Returns:
        API Gateway Lambda proxy response
    """
    try:
        request = CycleInsightsRequest(**json.loads(event["body"]))
    except (KeyError, TypeError, json.JSONDecodeError, ValidationError) as e:
        logger.warning("Rejected cycle insights request", extra={"error": str(e)})
        return {
            "statusCode": 400,
            "body": json.dumps({"error": "Invalid request body"})
        }

    try:
        profile = load_user_profile(request.user_id)
        events = load_cycle_events(request.user_id)
        insights = calculate_cycle_insights(profile, events, request.show_fertile_window)

        return {
            "statusCode": 200,
            "body": insights.model_dump_json()
        }

    except ProfileNotFoundError as e:
        return {
            "statusCode": 404,
            "body": json.dumps({"error": str(e)})
        }

    except Exception as e:
        logger.exception("Failed to calculate cycle insights", extra={
            "user_id": request.user_id
        })
        return {
            "statusCode": 500,
            "body": json.dumps({"error": str(e)})
        }
