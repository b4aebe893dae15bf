"""
Request Dependencies

Provider clients are built once by the application factory and stored on
app.state; routes receive them through these dependencies.
"""

from fastapi import Request

from app.services.providers import MarketstackClient, PolygonClient


def get_polygon_client(request: Request) -> PolygonClient:
    return request.app.state.polygon


def get_marketstack_client(request: Request) -> MarketstackClient:
    return request.app.state.marketstack
