import httpx
from typing import Dict, List, Optional
import logging

from ..config import settings

logger = logging.getLogger(__name__)


class ApiClient:
    """
    Async client for the MovieShelf API.

    Every call raises httpx.HTTPStatusError on a non-2xx answer and
    httpx.HTTPError on transport failures. Nothing is retried.
    """

    def __init__(
        self,
        base_url: str = None,
        timeout: float = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.API_URL
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else settings.API_TIMEOUT,
            transport=transport,
        )

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        response = await self._client.request(method, url, **kwargs)
        logger.debug(f"API {method} {url} -> {response.status_code}")
        response.raise_for_status()
        return response

    async def list_movies(self) -> List[Dict]:
        response = await self._request("GET", "/movies")
        return response.json()

    async def get_movie(self, movie_id: int) -> Dict:
        response = await self._request("GET", f"/movies/{movie_id}")
        data = response.json()
        # /movies/{id} answers with a one-element list
        if isinstance(data, list):
            return data[0] if data else {}
        return data

    async def list_categories(self) -> List[Dict]:
        response = await self._request("GET", "/categories")
        return response.json()

    async def list_directors(self) -> List[Dict]:
        response = await self._request("GET", "/directors")
        return response.json()

    async def create_movie(self, payload: Dict) -> Dict:
        response = await self._request("POST", "/movies", json=payload)
        return response.json()

    async def update_movie(self, movie_id: int, payload: Dict) -> Dict:
        response = await self._request("PUT", f"/edit/{movie_id}", json=payload)
        return response.json()

    async def delete_movie(self, movie_id: int) -> Dict:
        response = await self._request("DELETE", f"/delete/{movie_id}")
        return response.json()

    async def aclose(self) -> None:
        await self._client.aclose()


def error_detail(err: httpx.HTTPError, default: str) -> str:
    """Message from an upstream error response, or the default"""
    response = getattr(err, "response", None)
    if response is None:
        return default
    try:
        body = response.json()
    except ValueError:
        return response.text or default
    if isinstance(body, dict) and body.get("detail"):
        return str(body["detail"])
    return default


def error_status(err: httpx.HTTPError, default: int = 500) -> int:
    if isinstance(err, httpx.HTTPStatusError):
        return err.response.status_code
    return default
