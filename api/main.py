import os
import uvicorn

from userhub.main import app


# simple entry point, `uvicorn userhub.main:app --reload` works as well
if __name__ == "__main__":
    uvicorn.run(
        app,
        host=os.environ.get("HOST", "127.0.0.1"),
        port=int(os.environ.get("PORT", "8000")),
    )
