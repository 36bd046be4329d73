"""
Lambda handler for the pregnancy dashboard.
"""
from typing import Dict, List, Optional
from datetime import date
import json

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import BaseModel, Field, ValidationError

from src.utils.logging import logger
from src.models.metric import MetricSummary
from src.models.pregnancy import GestationalStatus
from src.services.constants import METRIC_DISPLAY_NAMES
from src.services.exceptions import InvalidRequestError, ProfileNotFoundError
from src.services.metrics import summarize_health_data, has_health_data
from src.services.pregnancy import compute_status_for_profile, generate_pregnancy_report
from src.services.profile import load_user_profile, load_metric_series
from src.services.sample_data import generate_sample_health_data

tracer = Tracer()

class DashboardRequest(BaseModel):
    """Dashboard request model."""
    user_id: str
    target_date: Optional[date] = Field(None, alias="date")
    use_sample_data: bool = False

class MetricCard(BaseModel):
    """Summary of one metric for the monitoring chart."""
    name: str
    summary: MetricSummary

class DashboardResponse(BaseModel):
    """Dashboard response model."""
    greeting: str
    status: GestationalStatus
    has_health_data: bool
    metrics: List[MetricCard]
    report: str

def _response(status_code: int, body: str) -> Dict:
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": body
    }

def parse_request(event: Dict) -> DashboardRequest:
    """
    Parse the dashboard request from an API Gateway proxy event.

    Raises:
        InvalidRequestError: If the body is missing, not JSON or invalid
    """
    body = event.get("body")
    if body is None:
        raise InvalidRequestError("Missing request body")
    try:
        if isinstance(body, str):
            body = json.loads(body)
        return DashboardRequest(**body)
    except (json.JSONDecodeError, TypeError, ValidationError) as e:
        raise InvalidRequestError(f"Invalid request body: {e}") from e

@tracer.capture_method
def build_dashboard(request: DashboardRequest) -> DashboardResponse:
    """
    Assemble the dashboard for a user.

    Args:
        request: Dashboard request

    Returns:
        Dashboard response with status, metric summaries and report

    Raises:
        ProfileNotFoundError: If the user has no stored profile
    """
    profile = load_user_profile(request.user_id)
    status = compute_status_for_profile(profile, request.target_date)

    series = load_metric_series(request.user_id)
    if not has_health_data(series) and request.use_sample_data:
        logger.info("No readings stored, using sample data", extra={"user_id": request.user_id})
        series = generate_sample_health_data()

    summaries = summarize_health_data(series)
    greeting = f"Hello, {profile.first_name}" if profile.first_name else "Hello"

    return DashboardResponse(
        greeting=greeting,
        status=status,
        has_health_data=has_health_data(series),
        metrics=[
            MetricCard(name=METRIC_DISPLAY_NAMES[kind], summary=summary)
            for kind, summary in summaries.items()
        ],
        report=generate_pregnancy_report(status, profile)
    )

@logger.inject_lambda_context
@tracer.capture_lambda_handler
def handler(event: Dict, context: LambdaContext) -> Dict:
    """
    Handle pregnancy dashboard requests.

    Args:
        event: API Gateway Lambda proxy event
        context: Lambda context

    Returns:
        API Gateway Lambda proxy response
    """
    try:
        request = parse_request(event)
        logger.append_keys(user_id=request.user_id)
        response = build_dashboard(request)
        return _response(200, response.model_dump_json())

    except InvalidRequestError as e:
        logger.warning("Rejected dashboard request", extra={"error": str(e)})
        return _response(400, json.dumps({"error": str(e)}))

    except ProfileNotFoundError as e:
        logger.info("Dashboard requested for unknown profile")
        return _response(404, json.dumps({"error": str(e)}))

    except Exception as e:
        logger.exception("Failed to build dashboard")
        return _response(500, json.dumps({"error": str(e)}))

    finally:
        logger.remove_keys(["user_id"])
