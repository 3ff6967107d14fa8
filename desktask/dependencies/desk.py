# desktask/dependencies/desk.py
from fastapi import HTTPException, Request

from desktask.desk import DeskApp


def get_desk_app(request: Request) -> DeskApp:
    desk = getattr(request.app.state, "desk", None)
    if desk is None:
        raise HTTPException(status_code=503, detail="app not initialized")
    return desk
