"""Run the desktask API with uvicorn: python -m desktask"""

import os

import uvicorn


def main() -> None:
    uvicorn.run(
        "desktask.main:app",
        host=os.getenv("DESKTASK_HOST", "127.0.0.1"),
        port=int(os.getenv("DESKTASK_PORT", "8000")),
    )


if __name__ == "__main__":
    main()
