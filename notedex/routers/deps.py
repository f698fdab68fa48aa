from fastapi import Request

from notedex.services.index import ContentIndex


def get_index(request: Request) -> ContentIndex:
    """Return the content index owned by the running application."""
    return request.app.state.index
