from __future__ import annotations

from fastapi import Request


def get_current_user_id(request: Request) -> int:
    """Return the calling user's id.

    There are no sessions, so every request acts as the configured mock user.
    """
    return request.app.state.store.config.mock_user_id
