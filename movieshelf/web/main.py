# movieshelf/web/main.py
"""
Front-end server.

Renders the movie list and the create/edit form from data fetched
from the MovieShelf API, and relays form submissions back to it.
No persistence happens here.
"""
import asyncio
import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Callable, Dict, List, Optional

import httpx
from fastapi import Depends, FastAPI, Form, Request
from fastapi.responses import PlainTextResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from ..config import settings
from .client import ApiClient, error_detail, error_status

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

UNKNOWN_CATEGORY = "Unknown category"
UNKNOWN_DIRECTOR = "Unknown director"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"🚀 Starting MovieShelf web, API at {settings.API_URL}")
    app.state.api_client = ApiClient()
    yield
    await app.state.api_client.aclose()
    logger.info("👋 MovieShelf web stopped")


app = FastAPI(title="MovieShelf Web", lifespan=lifespan, docs_url=None, redoc_url=None)


@app.middleware("http")
async def log_requests(request: Request, call_next: Callable):
    """Log all requests with timing"""
    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time
    logger.info(
        f"{request.method} {request.url.path} "
        f"[{response.status_code}] {duration:.3f}s"
    )
    return response


def get_api_client(request: Request) -> ApiClient:
    return request.app.state.api_client


# ============================================================
# Helpers
# ============================================================

def enrich_movie(movie: Dict, categories: List[Dict], directors: List[Dict]) -> Dict:
    """
    Attach category and director display names looked up from the
    full lists, tolerating ids that no longer resolve.
    """
    category = next(
        (c for c in categories if c.get("id") == movie.get("category_id")), None
    )
    director = next(
        (d for d in directors if d.get("id") == movie.get("director_id")), None
    )
    return {
        **movie,
        "category": category["category"] if category else UNKNOWN_CATEGORY,
        "director": director["director"] if director else UNKNOWN_DIRECTOR,
    }


def missing_field_message(title, director, category_id) -> Optional[str]:
    if not title:
        return "Title is required"
    if not director:
        return "Director is required"
    if not category_id:
        return "Category Id is required"
    return None


def build_payload(**fields) -> Dict:
    """Drop blank optional form fields so they are not sent upstream"""
    return {
        key: value
        for key, value in fields.items()
        if value is not None and value != ""
    }


# ============================================================
# Pages
# ============================================================

@app.get("/")
async def index(request: Request, api: ApiClient = Depends(get_api_client)):
    try:
        movies = await api.list_movies()
    except httpx.HTTPError as e:
        logger.error(f"Cannot get data from server: {e}")
        return PlainTextResponse("Cannot get data from server", status_code=500)
    return templates.TemplateResponse(request, "index.html", {"data": movies})


@app.get("/form")
async def new_movie_form(request: Request, api: ApiClient = Depends(get_api_client)):
    try:
        categories, directors = await asyncio.gather(
            api.list_categories(),
            api.list_directors(),
        )
    except httpx.HTTPError as e:
        logger.error(f"Error fetching form data: {e}")
        return PlainTextResponse("Failed to fetch form data.", status_code=error_status(e))

    return templates.TemplateResponse(
        request,
        "form.html",
        {
            "heading": "New Movies",
            "submit": "Add",
            "categories": categories,
            "directors": directors,
            "movie": {},
        },
    )


@app.get("/form/{movie_id}")
async def edit_movie_form(
    movie_id: int, request: Request, api: ApiClient = Depends(get_api_client)
):
    try:
        movie, categories, directors = await asyncio.gather(
            api.get_movie(movie_id),
            api.list_categories(),
            api.list_directors(),
        )
    except httpx.HTTPError as e:
        logger.error(f"Error fetching form data: {error_detail(e, str(e))}")
        return PlainTextResponse("Failed to fetch form data.", status_code=error_status(e))

    return templates.TemplateResponse(
        request,
        "form.html",
        {
            "heading": "Update Movies",
            "submit": "Edit",
            "movie": enrich_movie(movie, categories, directors),
            "categories": categories,
            "directors": directors,
        },
    )


# ============================================================
# Form submissions
# ============================================================

@app.post("/movies")
async def create_movie(
    title: Optional[str] = Form(None),
    director: Optional[str] = Form(None),
    categoryId: Optional[str] = Form(None),
    image: Optional[str] = Form(None),
    review: Optional[str] = Form(None),
    year: Optional[str] = Form(None),
    rating: Optional[str] = Form(None),
    api: ApiClient = Depends(get_api_client),
):
    message = missing_field_message(title, director, categoryId)
    if message:
        return PlainTextResponse(message, status_code=400)

    payload = build_payload(
        title=title, director=director, categoryId=categoryId,
        image=image, review=review, year=year, rating=rating,
    )
    try:
        result = await api.create_movie(payload)
        logger.info(f"Movie submitted: {result.get('movie', {}).get('id')}")
    except httpx.HTTPError as e:
        logger.error(f"Error while posting to api: {error_detail(e, str(e))}")
        return PlainTextResponse("Failed to submit. Please try again later", status_code=500)
    return RedirectResponse(url="/", status_code=303)


@app.post("/update/{movie_id}")
async def update_movie(
    movie_id: int,
    title: Optional[str] = Form(None),
    year: Optional[str] = Form(None),
    rating: Optional[str] = Form(None),
    director: Optional[str] = Form(None),
    categoryId: Optional[str] = Form(None),
    review: Optional[str] = Form(None),
    image: Optional[str] = Form(None),
    api: ApiClient = Depends(get_api_client),
):
    message = missing_field_message(title, director, categoryId)
    if message:
        return PlainTextResponse(message, status_code=400)

    payload = build_payload(
        title=title, year=year, rating=rating, director=director,
        categoryId=categoryId, review=review, image=image,
    )
    try:
        await api.update_movie(movie_id, payload)
    except httpx.HTTPError as e:
        logger.error(f"Error updating the movie {movie_id}: {e}")
        return PlainTextResponse(
            error_detail(e, "Internal Server Error"), status_code=error_status(e)
        )
    return RedirectResponse(url="/", status_code=303)


@app.get("/delete/{movie_id}")
async def delete_movie(movie_id: int, api: ApiClient = Depends(get_api_client)):
    try:
        await api.delete_movie(movie_id)
    except httpx.HTTPError as e:
        logger.error(f"Error while deleting movie {movie_id}: {e}")
        return PlainTextResponse("Internal Server Error", status_code=500)
    return RedirectResponse(url="/", status_code=303)


@app.get("/health", tags=["Health"])
async def health_check() -> dict:
    return {"status": "healthy", "api_url": settings.API_URL}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "movieshelf.web.main:app",
        host=settings.HOST,
        port=settings.WEB_PORT,
        reload=settings.DEBUG,
        log_level="info",
    )
