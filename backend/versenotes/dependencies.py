"""
VerseNotes Backend — Service Dependencies
===========================================

What:  FastAPI dependencies that hand route handlers the services the app
       was built with.
Why:   Services live on `app.state` (set up by create_app) instead of module
       globals, so a test or alternate deployment can build an app around
       different collaborators (database, hasher cost, access policy).
"""

from fastapi import Request

from versenotes.services.highlight_service import HighlightService
from versenotes.services.post_service import PostService
from versenotes.services.user_service import UserService


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_post_service(request: Request) -> PostService:
    return request.app.state.post_service


def get_highlight_service(request: Request) -> HighlightService:
    return request.app.state.highlight_service
