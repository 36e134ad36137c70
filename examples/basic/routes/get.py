"""Home — GET /."""

from chirp import Request


async def get(request: Request):
    return "fsroutes example"
