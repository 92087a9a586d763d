"""
VerseNotes Backend — Highlight Access Policy Interface
=======================================================

What:  The decision point for "may this request read/delete these highlights?"
Why:   The API has no sessions, so no caller identity exists and every caller
       may list any user's highlights or delete any highlight by id. Routing
       those operations through an explicit policy object keeps that decision
       visible and replaceable instead of implicit in the queries.
How:   HighlightService asks the policy before listing or deleting; a False
       answer becomes AuthError("Not permitted").
Who:   Injected by create_app(); PermissiveAccessPolicy is the default.
"""

from abc import ABC, abstractmethod


class AccessPolicy(ABC):
    """
    Contract:
        - Return True to allow the operation, False to deny it
        - Must not raise for ordinary denials
    """

    @abstractmethod
    async def can_list_highlights(self, user_id: int) -> bool:
        """May the current caller list the highlights owned by `user_id`?"""
        ...

    @abstractmethod
    async def can_delete_highlight(self, highlight_id: int) -> bool:
        """May the current caller delete the highlight with `highlight_id`?"""
        ...


class PermissiveAccessPolicy(AccessPolicy):
    """Allows everything. Matches the current public contract of the API."""

    async def can_list_highlights(self, user_id: int) -> bool:
        return True

    async def can_delete_highlight(self, highlight_id: int) -> bool:
        return True
