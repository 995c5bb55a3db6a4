"""Service entrypoint: starts uvicorn with the port from env."""
import os
import uvicorn

from stocktrade.main import app


def main() -> None:
    port = int(os.environ.get("PORT", "3000"))
    host = os.environ.get("HOST", "0.0.0.0")
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
