from fastapi import Request

from app.services.state import AnalyticsState


def get_analytics(request: Request) -> AnalyticsState:
    return request.app.state.analytics
