"""Poem Page — GET / renders today's poem as an HTML page.

Invariants:
    - 200 text/html with exactly two embedded <svg> fragments on success
    - Any ShiciError propagates to the registered handler (500, empty body)
"""

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from shici.services.app_context import AppContext, get_context
from shici.services.render_poem import render_poem_page

router = APIRouter(tags=["poem"])


@router.get("/", response_class=HTMLResponse)
async def poem_page(context: AppContext = Depends(get_context)):
    """Fetch a random poem sentence and return it rendered as vector glyphs."""
    page = await render_poem_page(context)
    return HTMLResponse(content=page)
