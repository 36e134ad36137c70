"""Create a user — POST people."""

from chirp import Request

name = "create-user"


async def post(request: Request):
    form = await request.form()
    return {"created": form.get("name", "")}
