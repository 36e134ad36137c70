"""List users — GET people."""

from chirp import Request

USERS = {1: "ada", 2: "grace"}


async def get(request: Request):
    return {"users": sorted(USERS.values())}
