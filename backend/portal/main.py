from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import Response

from portal.core.config import settings
from portal.routers import (
    announcements,
    availability,
    comments,
    notifications,
    requests,
    settings as settings_router,
)
from portal.services.comment_feed import CommentFeed

OPENAPI_TAGS = [
    {"name": "Announcements", "description": "Publish and read company announcements."},
    {"name": "Requests", "description": "Submit and review employee requests."},
    {"name": "Comments", "description": "Threaded comments and unseen badges."},
    {"name": "Notifications", "description": "In-app notifications and email dispatch."},
    {"name": "Availability", "description": "Blocked periods of the vacation calendar."},
    {"name": "Settings", "description": "System configuration."},
]

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.version,
    description=(
        "Back office API of the HR self-service portal. "
        "Announcements, employee requests, comment threads, "
        "email notifications and the vacation calendar."
    ),
    openapi_tags=OPENAPI_TAGS,
)

app.state.comment_feed = CommentFeed()

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def options_handler(request: Request, call_next):  # type: ignore[no-untyped-def]
    if request.method == "OPTIONS":
        origin = request.headers.get("origin", "*")
        return Response(
            status_code=200,
            headers={
                "Access-Control-Allow-Origin": origin,
                "Access-Control-Allow-Methods": "*",
                "Access-Control-Allow-Headers": "*",
                "Access-Control-Allow-Credentials": "true",
                "Access-Control-Max-Age": "86400",
            },
        )
    return await call_next(request)


app.include_router(
    announcements.router, prefix="/v1/announcements", tags=["Announcements"]
)
app.include_router(requests.router, prefix="/v1/requests", tags=["Requests"])
app.include_router(comments.router, prefix="/v1/threads", tags=["Comments"])
app.include_router(
    notifications.router, prefix="/v1/notifications", tags=["Notifications"]
)
app.include_router(
    availability.router,
    prefix="/v1/vacations/availability",
    tags=["Availability"],
)
app.include_router(settings_router.router, prefix="/v1/settings", tags=["Settings"])


@app.get("/")
async def root() -> dict[str, str]:
    return {
        "app": settings.APP_NAME,
        "version": settings.version,
        "domain": settings.APP_DOMAIN,
        "status": "running",
    }
