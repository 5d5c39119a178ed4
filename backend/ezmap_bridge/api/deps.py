"""
API dependencies.
"""

from fastapi import Request

from ezmap_bridge.features.shared_file import SharedFileService


def get_shared_file_service(request: Request) -> SharedFileService:
    """Session service wired in create_app()."""
    return request.app.state.shared_file_service
