"""
AI Feedback Router

Optional endpoint relaying chart data to a hosted language model.
"""

from fastapi import APIRouter, Depends

from weatherwatch_core.logger import logger
from weatherwatch_api.dependencies import get_feedback_relay
from weatherwatch_api.schemas import ErrorResponse, FeedbackRequest, FeedbackResponse
from weatherwatch_api.services.ai.feedback import FeedbackRelay

router = APIRouter(prefix="/ai", tags=["AI Feedback"])


@router.post(
    "/feedback",
    response_model=FeedbackResponse,
    responses={500: {"model": ErrorResponse, "description": "AI request failed"}},
)
async def generate_feedback(request: FeedbackRequest, relay: FeedbackRelay = Depends(get_feedback_relay)):
    """Summary, recommendations and trend analysis for chart data"""
    logger.info("Generating AI feedback for chart data")
    feedback = await relay.generate_feedback(request.chartData)
    return FeedbackResponse(feedback=feedback)
