"""AI services"""

from weatherwatch_api.services.ai.feedback import FeedbackRelay

__all__ = ["FeedbackRelay"]
