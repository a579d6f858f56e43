# phishcheck_app/__main__.py
# python -m phishcheck_app  (or the `phishcheck` script)
import os

import uvicorn


def main() -> None:
    uvicorn.run(
        "phishcheck_app.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
    )


if __name__ == "__main__":
    main()
