"""
Page routes.

Rendering happens in the frontend; these shells exist so that the route
guard has real pages to protect and redirect to.
"""
from fastapi import APIRouter
from fastapi.responses import HTMLResponse, RedirectResponse

router = APIRouter(tags=["pages"], include_in_schema=False)

PAGE_TEMPLATE = """<!doctype html>
<html lang="en">
<head><meta charset="utf-8"><title>{title} - Dear Diary</title></head>
<body><div id="root" data-page="{page}"></div></body>
</html>
"""


def render_page(page: str, title: str) -> HTMLResponse:
    return HTMLResponse(PAGE_TEMPLATE.format(page=page, title=title))


@router.get("/")
async def index():
    return RedirectResponse(url="/diary", status_code=307)


@router.get("/login", response_class=HTMLResponse)
async def login_page():
    return render_page("login", "Log in")


@router.get("/signup", response_class=HTMLResponse)
async def signup_page():
    return render_page("signup", "Sign up")


@router.get("/diary", response_class=HTMLResponse)
async def diary_page():
    return render_page("diary", "Diary")


@router.get("/settings", response_class=HTMLResponse)
async def settings_page():
    return render_page("settings", "Settings")
