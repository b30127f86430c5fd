from fastapi import Request
from ..config import Settings
from ..database import Database


def get_database(request: Request) -> Database:
    """
    Provide the application's store handle to a route.

    Returns:
        The Database created by the application factory
    """
    return request.app.state.db


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
