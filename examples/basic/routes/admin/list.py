"""Admin dashboard — GET /admin, bound through the ``get: list`` matcher."""

from chirp import Request

url = "/admin/dashboard"


async def get(request: Request):
    return "admin"
