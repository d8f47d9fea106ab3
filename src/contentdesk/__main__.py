"""Run the API server: python -m contentdesk"""

import os

import uvicorn


def main() -> None:
    """Serve the API with uvicorn."""
    uvicorn.run(
        "contentdesk.entrypoints.api.app:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "5000")),
        log_config=None,
    )


if __name__ == "__main__":
    main()
